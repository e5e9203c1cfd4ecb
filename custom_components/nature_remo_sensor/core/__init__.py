"""Core refresh-and-serve logic for Nature Remo sensor integration.

This package contains the core functionality:
- API client for HTTP communication
- Single-flight request coordinator
- Telemetry parser and reading cache
- Per-metric accessors, hub and cron scheduler
- Custom exceptions
"""

__all__ = [
    "RemoHttpApiClient",
    "RequestCoordinator",
    "TelemetryParser",
    "ReadingCache",
    "RemoSensorHub",
    "RefreshScheduler",
    "RemoSensorException",
    "ApiException",
    "AuthException",
    "RequestTimeoutException",
    "ParseException",
]
