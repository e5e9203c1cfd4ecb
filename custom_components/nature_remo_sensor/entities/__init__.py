"""Entity implementations for Nature Remo sensor integration.

This package contains all entity types:
- Sensors
- Binary sensors
- Base entity classes
"""

__all__ = [
    "RemoBaseEntity",
]
