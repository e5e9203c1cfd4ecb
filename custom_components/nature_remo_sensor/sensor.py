"""Sensor platform for Nature Remo sensor integration."""

from .entities.sensor import async_setup_entry

__all__ = ["async_setup_entry"]
