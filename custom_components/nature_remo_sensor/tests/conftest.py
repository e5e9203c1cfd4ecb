"""Pytest configuration and fixtures for Nature Remo sensor integration tests."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_NAME
from homeassistant.core import HomeAssistant

from custom_components.nature_remo_sensor.const import (
    CONF_ACCESS_TOKEN,
    CONF_DEVICE_NAME,
    DOMAIN,
)
from custom_components.nature_remo_sensor.core.sensor_hub import RemoSensorHub
from custom_components.nature_remo_sensor.models.config import RemoSensorConfig

from .common import FakeSession, make_response


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def mock_hass() -> HomeAssistant:
    """Mock Home Assistant instance that runs created tasks on the test loop."""
    hass = MagicMock(spec=HomeAssistant)
    hass.data = {DOMAIN: {}}
    hass.created_tasks = []

    def _create_task(target, name=None, eager_start=True):
        task = asyncio.get_running_loop().create_task(target)
        hass.created_tasks.append(task)
        return task

    hass.async_create_task = MagicMock(side_effect=_create_task)
    hass.async_create_background_task = MagicMock(side_effect=_create_task)
    hass.config_entries = MagicMock()
    hass.config_entries.async_forward_entry_setups = AsyncMock(return_value=True)
    hass.config_entries.async_unload_platforms = AsyncMock(return_value=True)
    hass.config_entries.async_reload = AsyncMock(return_value=True)
    return hass


@pytest.fixture
def entry_data() -> dict[str, Any]:
    return {
        CONF_NAME: "Living Room",
        CONF_ACCESS_TOKEN: "test_token_12345",
        CONF_DEVICE_NAME: "",
    }


@pytest.fixture
def mock_config_entry(entry_data) -> ConfigEntry:
    """Mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_id"
    entry.title = "Living Room"
    entry.data = entry_data
    entry.options = {}
    return entry


@pytest.fixture
def sample_devices() -> list[dict[str, Any]]:
    """Two device records as returned by /1/devices."""
    return [
        {
            "name": "Remo Bedroom",
            "serial_number": "1W000000000001",
            "firmware_version": "Remo/1.0.62-gabbf5bd",
            "temperature_offset": 0,
            "humidity_offset": 0,
            "newest_events": {
                "te": {"val": 21.5, "created_at": "2026-10-17T09:00:00Z"},
                "hu": {"val": 40, "created_at": "2026-10-17T09:00:00Z"},
            },
        },
        {
            "name": "Remo Living",
            "serial_number": "1W000000000002",
            "firmware_version": "Remo/1.0.77-g808448c",
            "temperature_offset": 0,
            "humidity_offset": 0,
            "newest_events": {
                "te": {"val": 24, "offset": 1, "created_at": "2026-10-17T09:00:00Z"},
                "hu": {"val": 50, "offset": 0, "created_at": "2026-10-17T09:00:00Z"},
                "il": {"val": 120, "created_at": "2026-10-17T09:00:00Z"},
                "mo": {"val": 1, "created_at": "2026-10-17T08:59:50Z"},
            },
        },
    ]


@pytest.fixture
def mock_api_client():
    """Mock HTTP API client."""
    client = MagicMock()
    client.get_devices = AsyncMock(return_value=make_response([]))
    client.send_report = AsyncMock(return_value=None)
    return client


@pytest.fixture
def make_hub(mock_hass, mock_api_client):
    """Factory building a hub from config overrides."""

    def _make(**overrides: Any) -> RemoSensorHub:
        data = {CONF_ACCESS_TOKEN: "test_token_12345", **overrides}
        return RemoSensorHub(mock_hass, RemoSensorConfig.from_mapping(data), mock_api_client)

    return _make
