"""Per-metric accessors for Nature Remo sensor integration."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional
import logging

from ..const import ACCESSOR_TIMEOUT, METRICS
from ..models.config import RemoSensorConfig
from ..models.snapshot import MetricValue, is_numeric
from .exceptions import ApiException, is_timeout_error

if TYPE_CHECKING:
    from .sensor_hub import RemoSensorHub

_LOGGER = logging.getLogger(__name__)

# Receives either a metric value or the exception from a failed refresh
PushCallback = Callable[[Any], None]


class SensorAccessor:
    """Resolves one metric from the cache, a fresh fetch or a stale fallback."""

    __slots__ = ("metric", "_hub")

    def __init__(self, metric: str, hub: RemoSensorHub) -> None:
        self.metric = metric
        self._hub = hub

    async def async_get(self) -> MetricValue:
        """Return the current value of the metric.

        Raises:
            ApiException: If the fetch fails and no stale value applies
        """
        _LOGGER.info("> [Getting] %s", self.metric)
        cache = self._hub.cache
        if self._hub.config.cache and cache.snapshot is not None:
            cached = cache.snapshot.get(self.metric)
            if is_numeric(cached):
                _LOGGER.info(">>> [Getting] %s => %s (from cache)", self.metric, cached)
                return cached

        try:
            snapshot = await self._hub.async_fetch_snapshot(timeout=ACCESSOR_TIMEOUT)
        except (ApiException, asyncio.TimeoutError) as exc:
            _LOGGER.warning('>>> [Error] "%s"', exc)
            previous = cache.last_known(self.metric)
            if is_timeout_error(exc) and is_numeric(previous):
                _LOGGER.info(">>> [Getting] %s => %s (stale fallback)", self.metric, previous)
                return previous
            raise

        value = snapshot.get(self.metric)
        _LOGGER.info(">>> [Getting] %s => %s", self.metric, value)
        return value


@dataclass
class MetricBinding:
    """One metric's capability record: enabled flag, accessor and push sink."""

    metric: str
    enabled: bool
    accessor: SensorAccessor
    push: Optional[PushCallback] = None


def build_bindings(config: RemoSensorConfig, hub: RemoSensorHub) -> Dict[str, MetricBinding]:
    """Create a binding per metric from the enabled capability flags."""
    return {
        metric: MetricBinding(
            metric=metric,
            enabled=config.is_enabled(metric),
            accessor=SensorAccessor(metric, hub),
        )
        for metric in METRICS
    }
