"""Sensor entities for Nature Remo sensor integration."""

from typing import Any
import logging

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import LIGHT_LUX, PERCENTAGE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from ..const import DOMAIN, METRIC_HUMIDITY, METRIC_LIGHT, METRIC_TEMPERATURE
from ..core.sensor_hub import RemoSensorHub
from .base_entity import RemoBaseEntity

_LOGGER = logging.getLogger(__name__)

SENSOR_DESCRIPTIONS: tuple[SensorEntityDescription, ...] = (
    SensorEntityDescription(
        key=METRIC_TEMPERATURE,
        name="Temperature",
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        suggested_display_precision=1,
    ),
    SensorEntityDescription(
        key=METRIC_HUMIDITY,
        name="Humidity",
        native_unit_of_measurement=PERCENTAGE,
        device_class=SensorDeviceClass.HUMIDITY,
        state_class=SensorStateClass.MEASUREMENT,
    ),
    SensorEntityDescription(
        key=METRIC_LIGHT,
        name="Illuminance",
        native_unit_of_measurement=LIGHT_LUX,
        device_class=SensorDeviceClass.ILLUMINANCE,
        state_class=SensorStateClass.MEASUREMENT,
    ),
)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensor platform."""
    _LOGGER.debug("Setting up sensor platform for %s", entry.title)

    try:
        hub: RemoSensorHub = hass.data[DOMAIN][entry.entry_id]["hub"]
    except KeyError as exc:
        _LOGGER.error(f"Missing key {exc} in entry data")
        return

    entities = [
        RemoSensor(hub, entry.entry_id, description)
        for description in SENSOR_DESCRIPTIONS
        if hub.is_enabled(description.key)
    ]

    if entities:
        async_add_entities(entities)
        _LOGGER.info(f"Added {len(entities)} sensors for {hub.config.name}")


class RemoSensor(RemoBaseEntity, SensorEntity):
    """Temperature, humidity or illuminance sensor."""

    def __init__(
        self, hub: RemoSensorHub, entry_id: str, description: SensorEntityDescription
    ) -> None:
        super().__init__(hub, entry_id, description.key)
        self.entity_description = description
        self._attr_native_value = None

    def _set_value(self, value: Any) -> None:
        self._attr_native_value = value
