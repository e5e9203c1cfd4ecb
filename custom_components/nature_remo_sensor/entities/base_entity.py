"""Base entity class for Nature Remo sensor integration."""

import asyncio
from typing import Any, Callable, Optional
import logging

from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from ..const import DOMAIN, MANUFACTURER, MODEL
from ..core.exceptions import ApiException
from ..core.sensor_hub import RemoSensorHub

_LOGGER = logging.getLogger(__name__)


def build_device_info(hub: RemoSensorHub, entry_id: str) -> DeviceInfo:
    """Device info from the config and the last parsed device identity."""
    device = hub.parser.device_info
    return DeviceInfo(
        identifiers={(DOMAIN, entry_id)},
        name=hub.config.name,
        manufacturer=MANUFACTURER,
        model=MODEL,
        serial_number=device.serial_number if device else None,
        sw_version=device.firmware_version if device else None,
    )


class RemoBaseEntity(Entity):
    """Host sink for one metric.

    Receives scheduled pushes from the hub and serves on-demand reads
    through the metric's accessor when Home Assistant asks for an update.
    """

    _attr_has_entity_name = True
    _attr_should_poll = False

    def __init__(self, hub: RemoSensorHub, entry_id: str, metric: str) -> None:
        self._hub = hub
        self._metric = metric
        self._attr_unique_id = f"{entry_id}_{metric}"
        self._attr_device_info = build_device_info(hub, entry_id)
        self._detach: Optional[Callable[[], None]] = None

    @property
    def metric(self) -> str:
        return self._metric

    def _set_value(self, value: Any) -> None:
        raise NotImplementedError

    @callback
    def async_push(self, value: Any) -> None:
        """Handle a value or an error pushed by the scheduler."""
        if isinstance(value, BaseException):
            _LOGGER.warning("%s unavailable: %s", self._metric, value)
            self._attr_available = False
        else:
            self._attr_available = True
            self._set_value(value)
        if self.hass is not None:
            self.async_write_ha_state()

    async def async_update(self) -> None:
        """Read the metric on demand (homeassistant.update_entity)."""
        try:
            value = await self._hub.accessor(self._metric).async_get()
        except (ApiException, asyncio.TimeoutError) as err:
            _LOGGER.warning("Failed to read %s: %s", self._metric, err)
            self._attr_available = False
            return
        self._attr_available = True
        self._set_value(value)

    async def async_added_to_hass(self) -> None:
        """Register with the hub and pick up an already cached snapshot."""
        self._detach = self._hub.attach_sink(self._metric, self.async_push)
        snapshot = self._hub.cache.snapshot
        if snapshot is not None:
            self._set_value(snapshot.get(self._metric))
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Entity %s registered", self.unique_id)

    async def async_will_remove_from_hass(self) -> None:
        if self._detach:
            self._detach()
            self._detach = None
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Entity %s unregistered", self.unique_id)
