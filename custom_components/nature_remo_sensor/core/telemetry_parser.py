"""Telemetry parser for Nature Remo sensor integration.

Turns the device list returned by the cloud API into a MetricSnapshot:

- selects the configured device by name, falling back to the first record
- applies device-side and configured calibration offsets
- evaluates motion against the last refresh time
- hands report webhook URLs to a dispatcher once the snapshot is final
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from homeassistant.util import dt as dt_util

from ..const import (
    EVENT_HUMIDITY,
    EVENT_ILLUMINANCE,
    EVENT_MOTION,
    EVENT_TEMPERATURE,
    METRIC_HUMIDITY,
    METRIC_LIGHT,
    METRIC_MOTION,
    METRIC_TEMPERATURE,
    MOTION_REARM_SECONDS,
)
from ..models.config import RemoSensorConfig
from ..models.device_info import RemoDeviceInfo
from ..models.snapshot import EMPTY_SNAPSHOT, MetricSnapshot, MetricValue

_LOGGER = logging.getLogger(__name__)

MOTION_REARM_WINDOW = datetime.timedelta(seconds=MOTION_REARM_SECONDS)

ReportDispatcher = Callable[[str], None]


def format_report_value(value: MetricValue) -> str:
    """Render a metric value for appending to a report URL."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _calibrated(
    record: Dict[str, Any], event: Dict[str, Any], metric: str, configured_offset: float
) -> Optional[float]:
    """Return event value minus the device offset plus the configured offset."""
    value = event.get("val")
    if value is None:
        return None
    device_offset = event.get("offset")
    if device_offset is None:
        device_offset = record.get(f"{metric}_offset")
    return value - (device_offset or 0) + configured_offset


class TelemetryParser:
    """Parses device records into metric snapshots."""

    __slots__ = ("_config", "_dispatch_report", "_last_refresh", "device_info")

    def __init__(
        self,
        config: RemoSensorConfig,
        dispatch_report: Optional[ReportDispatcher] = None,
        now: Optional[datetime.datetime] = None,
    ) -> None:
        self._config = config
        self._dispatch_report = dispatch_report
        self._last_refresh: datetime.datetime = now or dt_util.utcnow()
        self.device_info: Optional[RemoDeviceInfo] = None

    @property
    def last_refresh(self) -> datetime.datetime:
        return self._last_refresh

    def select_record(self, devices: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
        """Pick the configured device by name, else the first record."""
        devices = devices or []
        record = None
        if self._config.device_name:
            record = next(
                (d for d in devices if isinstance(d, dict) and d.get("name") == self._config.device_name),
                None,
            )
            if record is None and devices and _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("Device %s not found, using first device", self._config.device_name)
        if record is None and devices:
            record = devices[0]
        return record if isinstance(record, dict) else None

    def parse(
        self,
        devices: Optional[List[Dict[str, Any]]],
        now: Optional[datetime.datetime] = None,
    ) -> MetricSnapshot:
        """Parse a device list into a snapshot.

        Empty lists and records without events give the zero-value snapshot.
        """
        record = self.select_record(devices)
        events = record.get("newest_events") if record else None
        if not events:
            return EMPTY_SNAPSHOT

        self.device_info = RemoDeviceInfo.from_record(record)

        humidity = temperature = light = None
        motion = False

        if events.get(EVENT_HUMIDITY):
            humidity = _calibrated(
                record, events[EVENT_HUMIDITY], METRIC_HUMIDITY, self._config.humidity_offset
            )
        if events.get(EVENT_TEMPERATURE):
            temperature = _calibrated(
                record, events[EVENT_TEMPERATURE], METRIC_TEMPERATURE, self._config.temperature_offset
            )
        if events.get(EVENT_ILLUMINANCE):
            light = events[EVENT_ILLUMINANCE].get("val")

        has_motion_event = bool(events.get(EVENT_MOTION))
        if has_motion_event:
            motion = self._evaluate_motion(events[EVENT_MOTION], now or dt_util.utcnow())

        snapshot = MetricSnapshot(
            humidity=humidity, temperature=temperature, light=light, motion=motion
        )

        self._send_reports(snapshot, has_motion_event)
        return snapshot

    def _evaluate_motion(self, event: Dict[str, Any], now: datetime.datetime) -> bool:
        created_at = event.get("created_at")
        _LOGGER.info("> [Getting] motion last triggered at => %s", created_at)
        triggered = None
        if isinstance(created_at, str):
            triggered = dt_util.parse_datetime(created_at)
        elif isinstance(created_at, datetime.datetime):
            triggered = created_at
        if triggered is not None and triggered.tzinfo is None:
            triggered = triggered.replace(tzinfo=datetime.timezone.utc)

        motion = triggered is not None and triggered > self._last_refresh - MOTION_REARM_WINDOW
        self._last_refresh = now
        return motion

    def _send_reports(self, snapshot: MetricSnapshot, has_motion_event: bool) -> None:
        if self._dispatch_report is None or not self._config.report_urls:
            return
        pending: List[Tuple[str, MetricValue]] = [
            (METRIC_HUMIDITY, snapshot.humidity),
            (METRIC_TEMPERATURE, snapshot.temperature),
            (METRIC_LIGHT, snapshot.light),
        ]
        if has_motion_event:
            pending.append((METRIC_MOTION, snapshot.motion))
        for metric, value in pending:
            url = self._config.report_urls.get(metric)
            if url and value is not None:
                self._dispatch_report(url + format_report_value(value))
