"""Tests for building the integration config from entry data and options."""

from __future__ import annotations

from custom_components.nature_remo_sensor.const import DEFAULT_SCHEDULE, METRICS
from custom_components.nature_remo_sensor.models.config import RemoSensorConfig


def test_defaults():
    config = RemoSensorConfig.from_mapping({"access_token": "abc"})

    assert config.access_token == "abc"
    assert config.name == "Nature Remo"
    assert config.device_name is None
    assert config.schedule == DEFAULT_SCHEDULE
    assert config.cache is False
    assert config.mini is False
    assert config.temperature_offset == 0.0
    assert config.humidity_offset == 0.0
    assert config.enabled_metrics == frozenset(METRICS)
    assert config.report_urls == {}


def test_missing_token_is_empty():
    assert RemoSensorConfig.from_mapping({}).access_token == ""


def test_mini_disables_everything_but_temperature():
    config = RemoSensorConfig.from_mapping(
        {"access_token": "abc", "mini": True, "sensors": {"humidity": True, "light": True}}
    )

    assert config.enabled_metrics == frozenset({"temperature"})


def test_nested_sensor_toggles_and_camel_case_offsets():
    config = RemoSensorConfig.from_mapping(
        {
            "access_token": "abc",
            "deviceName": "Remo Living",
            "sensors": {"motion": False, "temperatureOffset": "-1.5", "humidityOffset": 3},
        }
    )

    assert config.device_name == "Remo Living"
    assert not config.is_enabled("motion")
    assert config.is_enabled("light")
    assert config.temperature_offset == -1.5
    assert config.humidity_offset == 3.0


def test_flat_option_keys_win():
    config = RemoSensorConfig.from_mapping(
        {
            "access_token": "abc",
            "sensors": {"light": True, "temperature_offset": 1},
            "light": False,
            "temperature_offset": 2.0,
            "schedule": "0 * * * *",
            "cache": True,
        }
    )

    assert not config.is_enabled("light")
    assert config.temperature_offset == 2.0
    assert config.schedule == "0 * * * *"
    assert config.cache is True


def test_report_urls_from_nested_and_flat_keys():
    config = RemoSensorConfig.from_mapping(
        {
            "access_token": "abc",
            "report": {"temperature": "http://r/t?v=", "unknown": "http://r/x"},
            "report_motion": "http://r/m?v=",
            "report_light": "",
        }
    )

    assert config.report_urls == {"temperature": "http://r/t?v=", "motion": "http://r/m?v="}


def test_invalid_offset_falls_back_to_zero():
    config = RemoSensorConfig.from_mapping({"access_token": "abc", "humidity_offset": "n/a"})

    assert config.humidity_offset == 0.0
