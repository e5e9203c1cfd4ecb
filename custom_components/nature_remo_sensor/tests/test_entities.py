"""Tests for sensor and binary sensor entities."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from custom_components.nature_remo_sensor.const import DOMAIN
from custom_components.nature_remo_sensor.core.exceptions import (
    ApiException,
    RequestTimeoutException,
)
from custom_components.nature_remo_sensor.entities.binary_sensor import (
    RemoMotionSensor,
    async_setup_entry as async_setup_binary_sensors,
)
from custom_components.nature_remo_sensor.entities.sensor import (
    SENSOR_DESCRIPTIONS,
    RemoSensor,
    async_setup_entry as async_setup_sensors,
)
from custom_components.nature_remo_sensor.models.snapshot import MetricSnapshot

from .common import make_response


def _temperature_sensor(hub):
    return RemoSensor(hub, "test_entry_id", SENSOR_DESCRIPTIONS[0])


def test_unique_id_and_device_info(make_hub):
    sensor = _temperature_sensor(make_hub(name="Living Room"))

    assert sensor.unique_id == "test_entry_id_temperature"
    assert sensor.device_info["identifiers"] == {(DOMAIN, "test_entry_id")}
    assert sensor.device_info["name"] == "Living Room"


def test_push_value_and_error(make_hub):
    sensor = _temperature_sensor(make_hub())

    sensor.async_push(22.5)
    assert sensor.native_value == 22.5
    assert sensor.available is True

    sensor.async_push(ApiException("down"))
    assert sensor.available is False
    assert sensor.native_value == 22.5

    sensor.async_push(23.0)
    assert sensor.available is True
    assert sensor.native_value == 23.0


def test_push_writes_state_when_attached(make_hub, mock_hass):
    sensor = _temperature_sensor(make_hub())
    sensor.hass = mock_hass
    sensor.async_write_ha_state = MagicMock()

    sensor.async_push(21.0)

    sensor.async_write_ha_state.assert_called_once()


def test_motion_sensor_ignores_non_boolean(make_hub):
    motion = RemoMotionSensor(make_hub(), "test_entry_id")

    motion.async_push(True)
    motion.async_push(None)

    assert motion.is_on is True


@pytest.mark.asyncio
async def test_update_reads_through_accessor(make_hub, mock_api_client):
    mock_api_client.get_devices.return_value = make_response(
        [{"newest_events": {"te": {"val": 24, "offset": 1}}}]
    )
    sensor = _temperature_sensor(make_hub())

    await sensor.async_update()

    assert sensor.native_value == 23
    assert sensor.available is True


@pytest.mark.asyncio
async def test_update_failure_marks_unavailable(make_hub, mock_api_client):
    mock_api_client.get_devices.side_effect = RequestTimeoutException("slow", code="ETIMEDOUT")
    sensor = _temperature_sensor(make_hub())

    await sensor.async_update()

    assert sensor.available is False


@pytest.mark.asyncio
async def test_update_raw_timeout_marks_unavailable(make_hub):
    hub = make_hub()
    hub.bindings["humidity"].accessor = MagicMock(
        async_get=AsyncMock(side_effect=asyncio.TimeoutError())
    )
    sensor = RemoSensor(hub, "test_entry_id", SENSOR_DESCRIPTIONS[1])

    await sensor.async_update()

    assert sensor.available is False


@pytest.mark.asyncio
async def test_added_to_hass_attaches_and_seeds(make_hub):
    hub = make_hub()
    hub.cache.store(MetricSnapshot(temperature=19.5))
    sensor = _temperature_sensor(hub)

    await sensor.async_added_to_hass()
    assert sensor.native_value == 19.5

    hub.publish(MetricSnapshot(temperature=20.5))
    assert sensor.native_value == 20.5

    await sensor.async_will_remove_from_hass()
    hub.publish(MetricSnapshot(temperature=30.0))
    assert sensor.native_value == 20.5


@pytest.mark.asyncio
async def test_platform_setup_skips_disabled_metrics(make_hub, mock_hass, mock_config_entry):
    hub = make_hub(mini=True)
    mock_hass.data[DOMAIN][mock_config_entry.entry_id] = {"hub": hub}
    add_sensors = MagicMock()
    add_binary = MagicMock()

    await async_setup_sensors(mock_hass, mock_config_entry, add_sensors)
    await async_setup_binary_sensors(mock_hass, mock_config_entry, add_binary)

    entities = add_sensors.call_args.args[0]
    assert [e.metric for e in entities] == ["temperature"]
    add_binary.assert_not_called()


@pytest.mark.asyncio
async def test_platform_setup_adds_all_metrics(make_hub, mock_hass, mock_config_entry):
    mock_hass.data[DOMAIN][mock_config_entry.entry_id] = {"hub": make_hub()}
    add_sensors = MagicMock()
    add_binary = MagicMock()

    await async_setup_sensors(mock_hass, mock_config_entry, add_sensors)
    await async_setup_binary_sensors(mock_hass, mock_config_entry, add_binary)

    assert [e.metric for e in add_sensors.call_args.args[0]] == ["temperature", "humidity", "light"]
    assert add_binary.call_args.args[0][0].metric == "motion"
