"""Configuration flow for Nature Remo sensor integration."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.config_entries import ConfigEntry, ConfigFlowResult
from homeassistant.const import CONF_NAME
from homeassistant.core import callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .const import (
    CONF_ACCESS_TOKEN,
    CONF_CACHE,
    CONF_DEVICE_NAME,
    CONF_HUMIDITY_OFFSET,
    CONF_MINI,
    CONF_SCHEDULE,
    CONF_TEMPERATURE_OFFSET,
    DEFAULT_SCHEDULE,
    DOMAIN,
    METRICS,
)
from .core.api_client import RemoHttpApiClient
from .core.exceptions import ApiException, AuthException, ParseException
from .core.scheduler import validate_schedule
from .models.config import REPORT_KEY_FORMAT

_LOGGER = logging.getLogger(__name__)


async def _async_list_device_names(hass, token: str) -> list[str]:
    """Validate the token by listing devices.

    Raises:
        AuthException: If the token is rejected
        ApiException: If the API cannot be reached
    """
    api = RemoHttpApiClient(async_get_clientsession(hass), token)
    response = await api.get_devices()
    return [d.get("name") for d in response.devices if isinstance(d, dict)]


class RemoSensorConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Config flow for Nature Remo sensors (access token auth)."""

    VERSION = 1

    def __init__(self) -> None:
        """Initialize config flow."""
        self._reauth_entry: Optional[ConfigEntry] = None

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> RemoSensorOptionsFlow:
        return RemoSensorOptionsFlow()

    async def _async_validate(self, token: str, device_name: Optional[str]) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        try:
            names = await _async_list_device_names(self.hass, token)
        except AuthException as exc:
            _LOGGER.warning(f"Auth failed: {exc}")
            errors["base"] = "invalid_auth"
        except ApiException as exc:
            _LOGGER.error(f"API error validating token: {exc}")
            errors["base"] = "cannot_connect"
        except Exception:
            _LOGGER.exception("Unexpected error validating token")
            errors["base"] = "unknown"
        else:
            if device_name and device_name not in names:
                errors[CONF_DEVICE_NAME] = "device_not_found"
        return errors

    async def async_step_user(self, user_input: Optional[Dict[str, Any]] = None) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: Dict[str, str] = {}

        if user_input is not None:
            token = user_input[CONF_ACCESS_TOKEN].strip()
            device_name = (user_input.get(CONF_DEVICE_NAME) or "").strip()
            errors = await self._async_validate(token, device_name)
            if not errors:
                await self.async_set_unique_id(f"{token[:8]}_{device_name or 'first'}")
                self._abort_if_unique_id_configured()
                data = {
                    CONF_NAME: user_input[CONF_NAME],
                    CONF_ACCESS_TOKEN: token,
                    CONF_DEVICE_NAME: device_name,
                }
                _LOGGER.info(f"Creating new entry for {user_input[CONF_NAME]}")
                return self.async_create_entry(title=user_input[CONF_NAME], data=data)

        schema = vol.Schema(
            {
                vol.Required(CONF_NAME, default="Nature Remo"): str,
                vol.Required(CONF_ACCESS_TOKEN): str,
                vol.Optional(CONF_DEVICE_NAME, default=""): str,
            }
        )
        return self.async_show_form(step_id="user", data_schema=schema, errors=errors)

    async def async_step_reauth(self, entry_data: Dict[str, Any]) -> ConfigFlowResult:
        """Handle reauth flow."""
        _LOGGER.info("Reauth flow started")
        self._reauth_entry = self.hass.config_entries.async_get_entry(self.context["entry_id"])
        if not self._reauth_entry:
            return self.async_abort(reason="unknown_entry")
        return await self.async_step_reauth_confirm()

    async def async_step_reauth_confirm(
        self, user_input: Optional[Dict[str, Any]] = None
    ) -> ConfigFlowResult:
        """Ask for a new access token."""
        errors: Dict[str, str] = {}
        if user_input is not None and self._reauth_entry is not None:
            token = user_input[CONF_ACCESS_TOKEN].strip()
            errors = await self._async_validate(token, self._reauth_entry.data.get(CONF_DEVICE_NAME))
            if not errors:
                self.hass.config_entries.async_update_entry(
                    self._reauth_entry, data={**self._reauth_entry.data, CONF_ACCESS_TOKEN: token}
                )
                await self.hass.config_entries.async_reload(self._reauth_entry.entry_id)
                return self.async_abort(reason="reauth_successful")

        return self.async_show_form(
            step_id="reauth_confirm",
            data_schema=vol.Schema({vol.Required(CONF_ACCESS_TOKEN): str}),
            errors=errors,
        )


class RemoSensorOptionsFlow(config_entries.OptionsFlow):
    """Options for cadence, caching, enabled metrics, offsets and report URLs."""

    async def async_step_init(self, user_input: Optional[Dict[str, Any]] = None) -> ConfigFlowResult:
        errors: Dict[str, str] = {}
        options = self.config_entry.options

        if user_input is not None:
            try:
                validate_schedule(user_input[CONF_SCHEDULE])
            except ParseException:
                errors[CONF_SCHEDULE] = "invalid_schedule"
            else:
                return self.async_create_entry(title="", data=user_input)

        fields: Dict[Any, Any] = {
            vol.Required(CONF_SCHEDULE, default=options.get(CONF_SCHEDULE, DEFAULT_SCHEDULE)): str,
            vol.Required(CONF_CACHE, default=options.get(CONF_CACHE, False)): bool,
            vol.Required(CONF_MINI, default=options.get(CONF_MINI, False)): bool,
        }
        for metric in METRICS:
            fields[vol.Required(metric, default=options.get(metric, True))] = bool
        fields[
            vol.Required(CONF_TEMPERATURE_OFFSET, default=options.get(CONF_TEMPERATURE_OFFSET, 0.0))
        ] = vol.Coerce(float)
        fields[
            vol.Required(CONF_HUMIDITY_OFFSET, default=options.get(CONF_HUMIDITY_OFFSET, 0.0))
        ] = vol.Coerce(float)
        for metric in METRICS:
            key = REPORT_KEY_FORMAT.format(metric=metric)
            fields[vol.Optional(key, default=options.get(key, ""))] = str

        return self.async_show_form(step_id="init", data_schema=vol.Schema(fields), errors=errors)
