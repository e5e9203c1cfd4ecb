"""HTTP API client for Nature Remo sensor integration."""

import asyncio
import errno
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
import logging

import aiohttp
from aiohttp.client import ClientTimeout

from ..const import (
    API_DEVICES_URL,
    DEFAULT_REQUEST_TIMEOUT,
    HEADER_RATE_LIMIT,
    HEADER_RATE_REMAINING,
)
from .exceptions import ApiException, AuthException, RequestTimeoutException

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = ClientTimeout(total=DEFAULT_REQUEST_TIMEOUT)
REPORT_TIMEOUT = ClientTimeout(total=10)


def rate_limit_from_headers(headers: Optional[Mapping[str, Any]]) -> tuple[Any, Any]:
    """Return (remaining, limit) from response headers, 0 when absent."""
    if not headers:
        return 0, 0
    return headers.get(HEADER_RATE_REMAINING, 0), headers.get(HEADER_RATE_LIMIT, 0)


@dataclass
class TelemetryResponse:
    """Raw device list returned by the devices endpoint."""

    status: int
    devices: List[Dict[str, Any]]
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def rate_limit(self) -> tuple[Any, Any]:
        return rate_limit_from_headers(self.headers)


class RemoHttpApiClient:
    """HTTP API client for the Nature Remo cloud."""

    __slots__ = ("_session", "_token")

    def __init__(self, session: aiohttp.ClientSession, token: Optional[str] = None) -> None:
        """Initialize the API client.

        Args:
            session: aiohttp client session for HTTP requests
            token: Bearer access token
        """
        self._session = session
        self._token = token

    async def get_devices(self, timeout: Optional[float] = None) -> TelemetryResponse:
        """Fetch the device list.

        Args:
            timeout: Total request timeout in seconds, default timeout when None

        Returns:
            Telemetry response with status, headers and device records

        Raises:
            AuthException: If the token is missing or rejected
            RequestTimeoutException: If the request timed out
            ApiException: If the request fails otherwise
        """
        if not self._token:
            _LOGGER.error("Access token needed for %s", API_DEVICES_URL)
            raise AuthException("Access token required")

        headers = {"authorization": f"Bearer {self._token}"}
        client_timeout = ClientTimeout(total=timeout) if timeout is not None else DEFAULT_TIMEOUT

        try:
            async with self._session.get(
                API_DEVICES_URL, headers=headers, timeout=client_timeout
            ) as response:
                resp_headers = dict(response.headers)
                if response.status in (401, 403):
                    raise AuthException(
                        f"Auth failed (status={response.status})",
                        status=response.status,
                        headers=resp_headers,
                        code="ERR_BAD_REQUEST",
                    )
                if response.status >= 400:
                    raise ApiException(
                        f"HTTP error: {response.status}",
                        status=response.status,
                        headers=resp_headers,
                        code="ERR_BAD_RESPONSE" if response.status >= 500 else "ERR_BAD_REQUEST",
                    )
                try:
                    data = await response.json(content_type=None)
                except ValueError as json_err:
                    raise ApiException(
                        "Invalid JSON from devices endpoint",
                        status=response.status,
                        headers=resp_headers,
                    ) from json_err

                devices = data if isinstance(data, list) else []
                return TelemetryResponse(status=response.status, devices=devices, headers=resp_headers)

        except ApiException:
            raise
        except asyncio.TimeoutError as exc:
            raise RequestTimeoutException(
                f"Request timeout after {timeout or DEFAULT_REQUEST_TIMEOUT}s", code="ETIMEDOUT"
            ) from exc
        except aiohttp.ClientConnectorError as exc:
            os_errno = getattr(exc.os_error, "errno", None)
            code = errno.errorcode.get(os_errno, "ECONNREFUSED") if os_errno else "ECONNREFUSED"
            exc_type = RequestTimeoutException if os_errno == errno.ETIMEDOUT else ApiException
            raise exc_type(f"Connection failed: {exc}", code=code) from exc
        except aiohttp.ServerDisconnectedError as exc:
            raise ApiException(f"Server disconnected: {exc}", code="ECONNRESET") from exc
        except aiohttp.ClientError as exc:
            raise ApiException(f"Client error: {exc}", code="ERR_NETWORK") from exc

    async def send_report(self, url: str) -> None:
        """Issue a report webhook GET; the response is discarded."""
        try:
            async with self._session.get(url, timeout=REPORT_TIMEOUT) as response:
                if _LOGGER.isEnabledFor(logging.DEBUG):
                    _LOGGER.debug("Report %s response: %s", url, response.status)
        except (asyncio.TimeoutError, aiohttp.ClientError) as exc:
            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("Report %s failed: %s", url, exc)
