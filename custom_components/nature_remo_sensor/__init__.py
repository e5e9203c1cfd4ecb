"""Nature Remo sensor integration for Home Assistant."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryAuthFailed
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .const import DOMAIN, _LOGGER
from .core.api_client import RemoHttpApiClient
from .core.exceptions import ParseException
from .core.scheduler import RefreshScheduler, validate_schedule
from .core.sensor_hub import RemoSensorHub
from .models.config import RemoSensorConfig

PLATFORMS: list[Platform] = [Platform.SENSOR, Platform.BINARY_SENSOR]


async def async_setup(hass: HomeAssistant, config: dict) -> bool:
    """Set up the Nature Remo sensor integration."""
    # Config flow is handled automatically by Home Assistant
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Nature Remo sensors from a config entry."""
    _LOGGER.info(f"Setting up Nature Remo sensor: {entry.title} ({entry.entry_id})")

    config = RemoSensorConfig.from_mapping({**entry.data, **entry.options})
    if not config.access_token:
        raise ConfigEntryAuthFailed("Access token missing")
    try:
        validate_schedule(config.schedule)
    except ParseException as err:
        _LOGGER.error(f"Invalid schedule for {entry.title}: {err}")
        return False

    session = async_get_clientsession(hass)
    api_client = RemoHttpApiClient(session, config.access_token)
    hub = RemoSensorHub(hass, config, api_client, entry.entry_id)
    scheduler = RefreshScheduler(hass, hub, config.schedule)

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "api_client": api_client,
        "hub": hub,
        "scheduler": scheduler,
    }

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception:
        _LOGGER.exception(f"Unexpected setup error {entry.title}")
        hass.data[DOMAIN].pop(entry.entry_id, None)
        raise

    # Entities are attached before the first refresh publishes
    scheduler.async_start()
    entry.async_on_unload(scheduler.async_stop)
    entry.async_on_unload(entry.add_update_listener(_async_reload_entry))

    _LOGGER.info(
        f"Setup complete for {entry.title}: schedule '{config.schedule}', "
        f"metrics {sorted(config.enabled_metrics)}, cache {'on' if config.cache else 'off'}"
    )
    return True


async def _async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.info(f"Unloading Nature Remo sensor: {entry.title}")

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    entry_data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    if entry_data:
        scheduler = entry_data.get("scheduler")
        if isinstance(scheduler, RefreshScheduler):
            scheduler.async_stop()
        hass.data[DOMAIN].pop(entry.entry_id, None)
        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("Removed entry data %s.", entry.entry_id)
    else:
        _LOGGER.warning(f"No entry data {entry.entry_id} to clean.")

    _LOGGER.info(f"Unload {entry.title}: {'OK' if unload_ok else 'Failed'}.")
    return unload_ok
