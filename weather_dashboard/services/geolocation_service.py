"""Geolocation acquisition and failure classification."""

import asyncio
import time
from enum import IntEnum
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from weather_dashboard.exceptions import (
    GeolocationException,
    GeolocationTimeoutException,
    GeolocationUnknownException,
    GeolocationUnsupportedException,
    PermissionDeniedException,
    PositionUnavailableException,
)
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.models.weather import Coordinates

if TYPE_CHECKING:
    from weather_dashboard.protocols import GeolocationProviderProtocol

logger = get_logger(__name__)


class PositionOptions(BaseModel):
    """Options for a single position request."""

    model_config = ConfigDict(frozen=True)

    enable_high_accuracy: bool = True
    timeout: float = Field(default=10.0, gt=0, description="Seconds to wait for a fix")
    maximum_age: float = Field(default=300.0, ge=0, description="Oldest cached fix to accept, in seconds")


DEFAULT_POSITION_OPTIONS = PositionOptions()


class PositionErrorCode(IntEnum):
    """Cause codes a platform reports for a failed acquisition."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class PositionError(Exception):
    """Raised by geolocation providers with a platform cause code."""

    def __init__(self, code: int, message: str = ""):
        self.code = code
        self.message = message
        super().__init__(message or f"position error {code}")


def classify_position_error(error: PositionError) -> GeolocationException:
    """Map a platform cause code to its user-facing exception."""
    details: dict[str, Any] = {"position_error_code": int(error.code)}
    if error.message:
        details["reason"] = error.message

    if error.code == PositionErrorCode.PERMISSION_DENIED:
        return PermissionDeniedException(details=details)
    if error.code == PositionErrorCode.POSITION_UNAVAILABLE:
        return PositionUnavailableException(details=details)
    if error.code == PositionErrorCode.TIMEOUT:
        return GeolocationTimeoutException(details=details)
    return GeolocationUnknownException(details=details)


async def get_current_location(
    provider: "GeolocationProviderProtocol | None",
    options: PositionOptions | None = None,
) -> Coordinates:
    """Get the user's current location.

    Args:
        provider: Platform geolocation capability, None when there is none
        options: Request options (high accuracy, 10s timeout, 5 minute cached fix by default)

    Returns:
        Coordinates of the acquired position

    Raises:
        GeolocationUnsupportedException: No provider available
        PermissionDeniedException: Access refused
        PositionUnavailableException: Position could not be determined
        GeolocationTimeoutException: No fix within the timeout
        GeolocationUnknownException: Any other platform failure
    """
    if provider is None:
        log_with_context(logger, "info", "Geolocation not available", event_type="geolocation_unsupported")
        raise GeolocationUnsupportedException()

    options = options or DEFAULT_POSITION_OPTIONS

    try:
        coords = await asyncio.wait_for(provider.get_current_position(options), timeout=options.timeout)
    except TimeoutError as e:
        log_with_context(
            logger,
            "warning",
            "Geolocation timed out",
            timeout=options.timeout,
            event_type="geolocation_failed",
        )
        raise GeolocationTimeoutException(details={"timeout": options.timeout}) from e
    except PositionError as e:
        log_with_context(
            logger,
            "warning",
            "Geolocation failed",
            position_error_code=e.code,
            error=str(e),
            event_type="geolocation_failed",
        )
        raise classify_position_error(e) from e
    except GeolocationException:
        raise
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Geolocation provider failed unexpectedly",
            error=str(e),
            error_type=type(e).__name__,
            event_type="geolocation_failed",
        )
        raise GeolocationUnknownException(details={"reason": str(e)}) from e

    log_with_context(
        logger,
        "debug",
        "Geolocation acquired",
        lat=coords.lat,
        lon=coords.lon,
        event_type="geolocation_acquired",
    )
    return coords


class IPGeolocationProvider:
    """Geolocation for a server process: looks up the public IP's position.

    The most recent fix is remembered and handed out again while it is
    younger than the request's ``maximum_age``. High accuracy cannot be
    honoured by an IP lookup and is ignored.
    """

    def __init__(self, client: httpx.AsyncClient, url: str, allowed: bool = True):
        self.client = client
        self.url = url
        self.allowed = allowed
        self._last_fix: Coordinates | None = None
        self._last_fix_at = 0.0

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        if not self.allowed:
            raise PositionError(PositionErrorCode.PERMISSION_DENIED, "location access disabled in settings")

        if self._last_fix is not None and time.monotonic() - self._last_fix_at <= options.maximum_age:
            return self._last_fix

        try:
            response = await self.client.get(self.url, timeout=options.timeout)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise PositionError(PositionErrorCode.TIMEOUT, str(e)) from e
        except (httpx.HTTPError, ValueError) as e:
            raise PositionError(PositionErrorCode.POSITION_UNAVAILABLE, str(e)) from e

        if not isinstance(data, dict) or data.get("status", "success") != "success":
            reason = data.get("message", "lookup failed") if isinstance(data, dict) else "unexpected response"
            raise PositionError(PositionErrorCode.POSITION_UNAVAILABLE, reason)

        try:
            coords = Coordinates(lat=data["lat"], lon=data["lon"])
        except (KeyError, ValueError) as e:
            raise PositionError(PositionErrorCode.POSITION_UNAVAILABLE, f"malformed response: {e}") from e

        self._last_fix = coords
        self._last_fix_at = time.monotonic()
        return coords
