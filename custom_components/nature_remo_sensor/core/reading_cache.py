"""Reading cache for Nature Remo sensor integration."""

import logging
from typing import Dict, Optional

from homeassistant.util import dt as dt_util

from ..models.snapshot import MetricSnapshot, MetricValue, is_numeric

_LOGGER = logging.getLogger(__name__)


class ReadingCache:
    """Latest snapshot plus per-metric last known good values.

    Cache-enabled reads use the snapshot only. A failed refresh clears it but
    keeps the last known numeric values, which back the stale fallback for
    timed out reads.
    """

    __slots__ = ("_snapshot", "_last_known", "_updated_at")

    def __init__(self) -> None:
        self._snapshot: Optional[MetricSnapshot] = None
        self._last_known: Dict[str, MetricValue] = {}
        self._updated_at = None

    @property
    def snapshot(self) -> Optional[MetricSnapshot]:
        return self._snapshot

    @property
    def updated_at(self):
        return self._updated_at

    def store(self, snapshot: MetricSnapshot) -> None:
        """Replace the snapshot and remember every numeric value."""
        self._snapshot = snapshot
        self._updated_at = dt_util.utcnow()
        for metric, value in snapshot.as_dict().items():
            if is_numeric(value):
                self._last_known[metric] = value

    def clear(self) -> None:
        """Drop the snapshot after a failed refresh."""
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Clearing cached snapshot")
        self._snapshot = None

    def last_known(self, metric: str) -> MetricValue:
        """Return the most recent numeric value parsed for a metric."""
        return self._last_known.get(metric)

    def as_dict(self) -> dict:
        return {
            "snapshot": self._snapshot.as_dict() if self._snapshot else None,
            "last_known": dict(self._last_known),
            "updated_at": self._updated_at.isoformat() if self._updated_at else None,
        }
