"""Cron driven refresh scheduler for Nature Remo sensor integration."""

from __future__ import annotations

import datetime
import logging
from typing import Callable, Optional

from croniter import croniter

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_track_point_in_time
from homeassistant.util import dt as dt_util

from ..const import DOMAIN
from .exceptions import ParseException
from .sensor_hub import RemoSensorHub

_LOGGER = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_REFRESHING = "refreshing"


def validate_schedule(schedule: str) -> str:
    """Return the cron expression or raise ParseException."""
    if not isinstance(schedule, str) or not croniter.is_valid(schedule):
        raise ParseException(f"Invalid cron expression: {schedule!r}")
    return schedule


def next_run_after(schedule: str, now: datetime.datetime) -> datetime.datetime:
    return croniter(schedule, now).get_next(datetime.datetime)


class RefreshScheduler:
    """Runs one refresh-and-publish cycle at start and on every cron tick."""

    __slots__ = ("hass", "_hub", "_schedule", "_unsub", "_active", "next_run", "last_error")

    def __init__(self, hass: HomeAssistant, hub: RemoSensorHub, schedule: str) -> None:
        self.hass = hass
        self._hub = hub
        self._schedule = validate_schedule(schedule)
        self._unsub: Optional[Callable[[], None]] = None
        self._active = 0
        self.next_run: Optional[datetime.datetime] = None
        self.last_error: Optional[BaseException] = None

    @property
    def state(self) -> str:
        return STATE_REFRESHING if self._active else STATE_IDLE

    @callback
    def async_start(self) -> None:
        """Refresh immediately and arm the cron timer."""
        _LOGGER.info("Starting refresh schedule '%s'", self._schedule)
        self.hass.async_create_task(self.async_refresh(), name=f"{DOMAIN}_initial_refresh")
        self._schedule_next()

    @callback
    def async_stop(self) -> None:
        if self._unsub is not None:
            self._unsub()
            self._unsub = None
        self.next_run = None

    @callback
    def _schedule_next(self) -> None:
        self.next_run = next_run_after(self._schedule, dt_util.now())
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Next refresh at %s", self.next_run)
        self._unsub = async_track_point_in_time(self.hass, self._handle_tick, self.next_run)

    async def _handle_tick(self, now: datetime.datetime) -> None:
        self._unsub = None
        self._schedule_next()
        await self.async_refresh()

    async def async_refresh(self) -> None:
        """Fetch, parse, cache and publish; on failure clear and publish the error."""
        _LOGGER.info("> [Schedule]")
        self._active += 1
        try:
            snapshot = await self._hub.async_fetch_snapshot()
        except Exception as err:
            _LOGGER.error('>>> [Error] "%s"', err)
            self.last_error = err
            self._hub.cache.clear()
            self._hub.publish_error(err)
        else:
            self.last_error = None
            self._hub.publish(snapshot)
        finally:
            self._active -= 1
            _LOGGER.info("> [Schedule] finish")

    def diagnostics(self) -> dict:
        return {
            "schedule": self._schedule,
            "state": self.state,
            "next_run": self.next_run.isoformat() if self.next_run else None,
            "last_error": str(self.last_error) if self.last_error else None,
        }
