"""Diagnostics support for Nature Remo sensor integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_ACCESS_TOKEN, DOMAIN
from .core.scheduler import RefreshScheduler
from .core.sensor_hub import RemoSensorHub

TO_REDACT = {CONF_ACCESS_TOKEN, "token", "serial_number"}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id, {})

    diagnostics_data: dict[str, Any] = {
        "entry": {
            "entry_id": entry.entry_id,
            "title": entry.title,
            "data": async_redact_data(entry.data, TO_REDACT),
            "options": async_redact_data(entry.options, TO_REDACT),
        },
    }

    hub = entry_data.get("hub")
    if isinstance(hub, RemoSensorHub):
        diagnostics_data["hub"] = async_redact_data(hub.diagnostics(), TO_REDACT)
    else:
        diagnostics_data["hub"] = {"status": "not_initialized"}

    scheduler = entry_data.get("scheduler")
    if isinstance(scheduler, RefreshScheduler):
        diagnostics_data["scheduler"] = scheduler.diagnostics()
    else:
        diagnostics_data["scheduler"] = {"status": "not_available"}

    return diagnostics_data
