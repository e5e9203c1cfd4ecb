"""Refresh-and-serve hub for Nature Remo sensor integration."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers import device_registry as dr

from ..const import DOMAIN
from ..models.config import RemoSensorConfig
from ..models.snapshot import MetricSnapshot, MetricValue
from .accessors import MetricBinding, PushCallback, SensorAccessor, build_bindings
from .api_client import RemoHttpApiClient, TelemetryResponse
from .reading_cache import ReadingCache
from .request_coordinator import RequestCoordinator
from .telemetry_parser import TelemetryParser

_LOGGER = logging.getLogger(__name__)


class RemoSensorHub:
    """Owns the request coordinator, parser, cache and per-metric bindings."""

    def __init__(
        self,
        hass: HomeAssistant,
        config: RemoSensorConfig,
        client: RemoHttpApiClient,
        entry_id: Optional[str] = None,
    ) -> None:
        """Initialize the hub.

        Args:
            hass: Home Assistant instance
            config: Integration configuration
            client: API client for the devices endpoint
            entry_id: Config entry whose device record follows the parsed identity
        """
        self.hass = hass
        self.config = config
        self.client = client
        self.entry_id = entry_id
        self.coordinator = RequestCoordinator(client)
        self.cache = ReadingCache()
        self.parser = TelemetryParser(config, self._dispatch_report)
        self.bindings: Dict[str, MetricBinding] = build_bindings(config, self)
        self._parsed: Optional[Tuple[TelemetryResponse, MetricSnapshot]] = None

        if config.mini:
            _LOGGER.info("Humidity, light and motion sensors are disabled on Nature Remo mini")

    def accessor(self, metric: str) -> SensorAccessor:
        return self.bindings[metric].accessor

    def is_enabled(self, metric: str) -> bool:
        return self.bindings[metric].enabled

    async def async_fetch_snapshot(self, timeout: Optional[float] = None) -> MetricSnapshot:
        """Fetch through the coordinator and parse the response once."""
        response = await self.coordinator.fetch(timeout=timeout)
        return self._snapshot_for(response)

    def _snapshot_for(self, response: TelemetryResponse) -> MetricSnapshot:
        # Callers attached to the same request share one parse
        if self._parsed is not None and self._parsed[0] is response:
            return self._parsed[1]
        previous_device = self.parser.device_info
        snapshot = self.parser.parse(response.devices)
        self._parsed = (response, snapshot)
        self.cache.store(snapshot)
        if self.parser.device_info != previous_device:
            self._update_device_registry()
        return snapshot

    @callback
    def _update_device_registry(self) -> None:
        device = self.parser.device_info
        if self.entry_id is None or device is None:
            return
        registry = dr.async_get(self.hass)
        entry = registry.async_get_device(identifiers={(DOMAIN, self.entry_id)})
        if entry is None:
            return
        registry.async_update_device(
            entry.id,
            serial_number=device.serial_number,
            sw_version=device.firmware_version,
        )
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Updated device %s: %s", entry.id, device)

    @callback
    def _dispatch_report(self, url: str) -> None:
        self.hass.async_create_background_task(
            self.client.send_report(url), name=f"{DOMAIN}_report"
        )

    @callback
    def attach_sink(self, metric: str, push: PushCallback) -> Callable[[], None]:
        """Register the push sink for a metric; returns a detach callable."""
        binding = self.bindings[metric]
        binding.push = push

        @callback
        def _detach() -> None:
            if binding.push is push:
                binding.push = None

        return _detach

    @callback
    def publish(self, snapshot: MetricSnapshot) -> None:
        """Push each enabled metric's value to its sink."""
        for binding in self.bindings.values():
            if not binding.enabled:
                continue
            value: MetricValue = snapshot.get(binding.metric)
            _LOGGER.info(">>> [Update] %s => %s", binding.metric, value)
            if binding.push is not None:
                binding.push(value)

    @callback
    def publish_error(self, error: BaseException) -> None:
        """Push a refresh failure to every enabled metric's sink."""
        for binding in self.bindings.values():
            if binding.enabled and binding.push is not None:
                binding.push(error)

    def diagnostics(self) -> dict:
        device = self.parser.device_info
        return {
            "request_in_flight": self.coordinator.is_busy,
            "cache_enabled": self.config.cache,
            "enabled_metrics": sorted(m for m, b in self.bindings.items() if b.enabled),
            "cache": self.cache.as_dict(),
            "device": {
                "name": device.name,
                "serial_number": device.serial_number,
                "firmware_version": device.firmware_version,
            }
            if device
            else None,
            "last_refresh": self.parser.last_refresh.isoformat(),
        }
