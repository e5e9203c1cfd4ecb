"""Shared helpers for Nature Remo sensor integration tests."""

from __future__ import annotations

from typing import Any

from custom_components.nature_remo_sensor.core.api_client import TelemetryResponse


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(
        self,
        status: int = 200,
        payload: Any = None,
        headers: dict[str, str] | None = None,
        json_error: Exception | None = None,
    ) -> None:
        self.status = status
        self.headers = headers or {}
        self._payload = payload
        self._json_error = json_error

    async def json(self, content_type=None):
        if self._json_error:
            raise self._json_error
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Records GET calls and replays queued responses or errors."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.responses: list[FakeResponse] = []
        self.error: Exception | None = None

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


def make_response(devices: list[dict[str, Any]], status: int = 200, headers=None) -> TelemetryResponse:
    return TelemetryResponse(
        status=status,
        devices=devices,
        headers=headers
        if headers is not None
        else {"x-rate-limit-limit": "30", "x-rate-limit-remaining": "29"},
    )
