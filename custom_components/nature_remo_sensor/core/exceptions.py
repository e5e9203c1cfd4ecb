"""Custom exceptions for Nature Remo sensor integration."""

import asyncio
import re
from typing import Any, Mapping, Optional

from ..const import TIMEOUT_ERROR_CODE_PATTERN

_TIMEOUT_CODE_RE = re.compile(TIMEOUT_ERROR_CODE_PATTERN)


class RemoSensorException(Exception):
    """Base exception for Nature Remo sensor integration."""

    pass


class ApiException(RemoSensorException):
    """Exception for API-related errors."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        headers: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.headers = headers or {}
        self.code = code


class AuthException(ApiException):
    """Exception for authentication errors."""

    pass


class RequestTimeoutException(ApiException):
    """Request did not complete before its timeout."""

    pass


class ParseException(RemoSensorException):
    """Exception for schedule or configuration parsing errors."""

    pass


def is_timeout_error(exc: BaseException) -> bool:
    """Return True if exc belongs to the timeout class of network errors."""
    if isinstance(exc, asyncio.TimeoutError):
        return True
    code = getattr(exc, "code", None)
    return isinstance(code, str) and _TIMEOUT_CODE_RE.search(code) is not None
