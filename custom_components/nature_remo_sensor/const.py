# /config/custom_components/nature_remo_sensor/const.py

import logging
from typing import Final

DOMAIN: Final = "nature_remo_sensor"
_LOGGER = logging.getLogger(__package__)

# --- HTTP API Constants ---
API_DEVICES_URL: Final = "https://api.nature.global/1/devices"
HEADER_RATE_LIMIT: Final = "x-rate-limit-limit"
HEADER_RATE_REMAINING: Final = "x-rate-limit-remaining"

# --- Configuration Keys ---
CONF_ACCESS_TOKEN: Final = "access_token"
CONF_DEVICE_NAME: Final = "device_name"
CONF_SCHEDULE: Final = "schedule"
CONF_CACHE: Final = "cache"
CONF_MINI: Final = "mini"
CONF_SENSORS: Final = "sensors"
CONF_REPORT: Final = "report"
CONF_TEMPERATURE_OFFSET: Final = "temperature_offset"
CONF_HUMIDITY_OFFSET: Final = "humidity_offset"

# --- Metrics ---
METRIC_TEMPERATURE: Final = "temperature"
METRIC_HUMIDITY: Final = "humidity"
METRIC_LIGHT: Final = "light"
METRIC_MOTION: Final = "motion"
METRICS: Final = (METRIC_TEMPERATURE, METRIC_HUMIDITY, METRIC_LIGHT, METRIC_MOTION)

# Event codes in a device record's newest_events map
EVENT_HUMIDITY: Final = "hu"
EVENT_TEMPERATURE: Final = "te"
EVENT_ILLUMINANCE: Final = "il"
EVENT_MOTION: Final = "mo"

# --- Scheduling and Timeout ---
DEFAULT_SCHEDULE: Final = "*/5 * * * *"
ACCESSOR_TIMEOUT: Final = 2.5  # seconds, on-demand reads only
DEFAULT_REQUEST_TIMEOUT: Final = 30  # seconds, scheduled refreshes
MOTION_REARM_SECONDS: Final = 30

# Error codes treated as timeouts for stale fallback
TIMEOUT_ERROR_CODE_PATTERN: Final = r"E(?:(?:SOCKET)?TIMEDOUT|CONNABORTED)"

# --- Device Info ---
MANUFACTURER: Final = "Nature"
MODEL: Final = "Remo"
