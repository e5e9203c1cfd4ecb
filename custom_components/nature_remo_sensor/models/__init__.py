"""Data models for Nature Remo sensor integration.

This package contains data models and configuration parsing.
"""

__all__ = [
    "RemoDeviceInfo",
    "MetricSnapshot",
    "RemoSensorConfig",
]
