"""Single-flight request coordinator for Nature Remo sensor integration."""

import asyncio
import logging
from typing import Optional

from .api_client import RemoHttpApiClient, TelemetryResponse, rate_limit_from_headers

_LOGGER = logging.getLogger(__name__)


class RequestCoordinator:
    """Shares one in-flight device list fetch among all concurrent callers.

    The first caller starts the request; callers arriving while it runs
    await the same task and get the same response or exception. The
    in-flight slot is cleared before any waiter resumes.
    """

    __slots__ = ("_client", "_inflight")

    def __init__(self, client: RemoHttpApiClient) -> None:
        self._client = client
        self._inflight: Optional[asyncio.Task] = None

    @property
    def is_busy(self) -> bool:
        """Return True while a fetch is in flight."""
        return self._inflight is not None

    async def fetch(self, timeout: Optional[float] = None) -> TelemetryResponse:
        """Fetch the device list, attaching to the running request if any.

        The timeout only applies when this call starts the request.
        """
        task = self._inflight
        if task is None:
            _LOGGER.info(">> [request] start")
            task = asyncio.get_running_loop().create_task(self._run(timeout))
            self._inflight = task
        elif _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug(">> [request] attached to in-flight request")
        # Waiters never cancel the shared request
        return await asyncio.shield(task)

    async def _run(self, timeout: Optional[float]) -> TelemetryResponse:
        try:
            response = await self._client.get_devices(timeout=timeout)
        except Exception as exc:
            remaining, limit = rate_limit_from_headers(getattr(exc, "headers", None))
            status = getattr(exc, "status", None)
            _LOGGER.info(
                ">>> [response] status: %s, limit: %s/%s",
                status if status is not None else "NONE",
                remaining,
                limit,
            )
            raise
        else:
            remaining, limit = response.rate_limit
            _LOGGER.info(
                ">>> [response] status: %s, limit: %s/%s", response.status, remaining, limit
            )
            return response
        finally:
            self._inflight = None
