"""Binary sensor entities for Nature Remo sensor integration."""

from typing import Any
import logging

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN, METRIC_MOTION
from ..core.sensor_hub import RemoSensorHub
from .base_entity import RemoBaseEntity

_LOGGER = logging.getLogger(__name__)

MOTION_DESCRIPTION = BinarySensorEntityDescription(
    key=METRIC_MOTION,
    name="Motion",
    device_class=BinarySensorDeviceClass.MOTION,
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up binary sensor platform."""
    _LOGGER.debug("Setting up binary sensor platform for %s", entry.title)

    try:
        hub: RemoSensorHub = hass.data[DOMAIN][entry.entry_id]["hub"]
    except KeyError as exc:
        _LOGGER.error(f"Missing key {exc} for binary sensors")
        return

    if hub.is_enabled(METRIC_MOTION):
        async_add_entities([RemoMotionSensor(hub, entry.entry_id)])
        _LOGGER.info(f"Added motion sensor for {hub.config.name}")


class RemoMotionSensor(RemoBaseEntity, BinarySensorEntity):
    """Motion binary sensor."""

    def __init__(self, hub: RemoSensorHub, entry_id: str) -> None:
        super().__init__(hub, entry_id, METRIC_MOTION)
        self.entity_description = MOTION_DESCRIPTION
        self._attr_is_on = None

    def _set_value(self, value: Any) -> None:
        if isinstance(value, bool):
            self._attr_is_on = value
        else:
            _LOGGER.warning(f"Received non-boolean value for {self.unique_id}: {value}")
