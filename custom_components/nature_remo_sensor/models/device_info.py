"""Device information models for Nature Remo sensor integration."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RemoDeviceInfo:
    """Identity of the device record a snapshot was parsed from."""

    name: Optional[str] = None
    serial_number: Optional[str] = None
    firmware_version: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "RemoDeviceInfo":
        return cls(
            name=record.get("name"),
            serial_number=record.get("serial_number"),
            firmware_version=record.get("firmware_version"),
        )
