"""Configuration model for Nature Remo sensor integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional

from homeassistant.const import CONF_NAME

from ..const import (
    CONF_ACCESS_TOKEN,
    CONF_CACHE,
    CONF_DEVICE_NAME,
    CONF_HUMIDITY_OFFSET,
    CONF_MINI,
    CONF_REPORT,
    CONF_SCHEDULE,
    CONF_SENSORS,
    CONF_TEMPERATURE_OFFSET,
    DEFAULT_SCHEDULE,
    METRIC_HUMIDITY,
    METRIC_LIGHT,
    METRIC_MOTION,
    METRIC_TEMPERATURE,
    METRICS,
)

# Option keys for report webhooks when stored flat in entry options
REPORT_KEY_FORMAT = "report_{metric}"


def _offset(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class RemoSensorConfig:
    """Immutable integration configuration."""

    access_token: str
    name: str = "Nature Remo"
    device_name: Optional[str] = None
    schedule: str = DEFAULT_SCHEDULE
    cache: bool = False
    mini: bool = False
    temperature_offset: float = 0.0
    humidity_offset: float = 0.0
    enabled_metrics: FrozenSet[str] = frozenset(METRICS)
    report_urls: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RemoSensorConfig":
        """Build the config from entry data merged with options.

        Accepts nested `sensors` / `report` mappings as well as the flat keys
        written by the options flow (flat keys win).
        """
        sensors: Dict[str, Any] = dict(data.get(CONF_SENSORS) or {})
        report: Dict[str, Any] = dict(data.get(CONF_REPORT) or {})
        for metric in METRICS:
            if metric in data:
                sensors[metric] = data[metric]
            flat_report = REPORT_KEY_FORMAT.format(metric=metric)
            if flat_report in data:
                report[metric] = data[flat_report]
        for key in (CONF_TEMPERATURE_OFFSET, CONF_HUMIDITY_OFFSET):
            if key in data:
                sensors[key] = data[key]

        mini = bool(data.get(CONF_MINI, False))
        enabled = set()
        if sensors.get(METRIC_TEMPERATURE) is not False:
            enabled.add(METRIC_TEMPERATURE)
        for metric in (METRIC_HUMIDITY, METRIC_LIGHT, METRIC_MOTION):
            if not mini and sensors.get(metric) is not False:
                enabled.add(metric)

        # camelCase offsets come from YAML-style configs
        temperature_offset = sensors.get(CONF_TEMPERATURE_OFFSET, sensors.get("temperatureOffset"))
        humidity_offset = sensors.get(CONF_HUMIDITY_OFFSET, sensors.get("humidityOffset"))

        return cls(
            access_token=data.get(CONF_ACCESS_TOKEN) or "",
            name=data.get(CONF_NAME) or "Nature Remo",
            device_name=data.get(CONF_DEVICE_NAME) or data.get("deviceName") or None,
            schedule=data.get(CONF_SCHEDULE) or DEFAULT_SCHEDULE,
            cache=bool(data.get(CONF_CACHE, False)),
            mini=mini,
            temperature_offset=_offset(temperature_offset),
            humidity_offset=_offset(humidity_offset),
            enabled_metrics=frozenset(enabled),
            report_urls={m: str(url) for m, url in report.items() if m in METRICS and url},
        )

    def is_enabled(self, metric: str) -> bool:
        return metric in self.enabled_metrics
