"""Metric snapshot model for Nature Remo sensor integration."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

MetricValue = Union[float, bool, None]


@dataclass(frozen=True)
class MetricSnapshot:
    """One fully parsed set of metric values from a single telemetry response."""

    humidity: Optional[float] = None
    temperature: Optional[float] = None
    light: Optional[float] = None
    motion: bool = False

    def get(self, metric: str) -> MetricValue:
        """Return the value for a metric name."""
        return getattr(self, metric)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_numeric(value: Any) -> bool:
    """Return True for int or float values; booleans do not count."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


EMPTY_SNAPSHOT = MetricSnapshot()
