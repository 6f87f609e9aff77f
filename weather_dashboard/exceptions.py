"""Custom exceptions for Weather Dashboard with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    DASHBOARD_ERROR = "DASHBOARD_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Weather errors
    WEATHER_ERROR = "WEATHER_ERROR"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"
    WEATHER_INVALID_API_KEY = "WEATHER_INVALID_API_KEY"
    WEATHER_FETCH_FAILED = "WEATHER_FETCH_FAILED"

    # Geolocation errors
    GEOLOCATION_ERROR = "GEOLOCATION_ERROR"
    GEOLOCATION_UNSUPPORTED = "GEOLOCATION_UNSUPPORTED"
    GEOLOCATION_PERMISSION_DENIED = "GEOLOCATION_PERMISSION_DENIED"
    GEOLOCATION_POSITION_UNAVAILABLE = "GEOLOCATION_POSITION_UNAVAILABLE"
    GEOLOCATION_TIMEOUT = "GEOLOCATION_TIMEOUT"
    GEOLOCATION_UNKNOWN = "GEOLOCATION_UNKNOWN"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"


class WeatherDashboardException(Exception):
    """Base exception for dashboard errors with HTTP status code support.

    Every failure leaving the access layer is one of these, carrying a
    message that can be shown to the user verbatim.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.DASHBOARD_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize dashboard exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class WeatherException(WeatherDashboardException):
    """Weather service errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WEATHER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class CityNotFoundException(WeatherException):
    """City-name lookup returned HTTP 404."""

    def __init__(self, city: str, details: dict[str, Any] | None = None):
        self.city = city
        super().__init__(
            f'City "{city}" not found',
            code=ErrorCode.CITY_NOT_FOUND,
            status_code=404,
            details={"city": city, **(details or {})},
        )


class InvalidCredentialException(WeatherException):
    """Weather provider rejected the API key (HTTP 401)."""

    def __init__(self, message: str = "Invalid API key", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.WEATHER_INVALID_API_KEY,
            status_code=502,
            details=details,
        )


# Operation name -> user-facing message
FETCH_FAILED_MESSAGES = {
    "current weather": "Failed to fetch weather data",
    "current weather for location": "Failed to fetch weather data for location",
    "forecast": "Failed to fetch forecast data",
    "forecast for location": "Failed to fetch forecast data for location",
    "search cities": "Failed to search cities",
}


class FetchFailedException(WeatherException):
    """Catch-all for transport errors, timeouts, non-2xx statuses and malformed bodies."""

    def __init__(self, operation: str, details: dict[str, Any] | None = None):
        self.operation = operation
        message = FETCH_FAILED_MESSAGES.get(operation, f"Failed to {operation}")
        super().__init__(
            message,
            code=ErrorCode.WEATHER_FETCH_FAILED,
            status_code=502,
            details={"operation": operation, **(details or {})},
        )


class GeolocationException(WeatherDashboardException):
    """Geolocation errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GEOLOCATION_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class GeolocationUnsupportedException(GeolocationException):
    """No geolocation capability is available."""

    def __init__(
        self,
        message: str = "Geolocation is not supported on this platform",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.GEOLOCATION_UNSUPPORTED,
            status_code=501,
            details=details,
        )


class PermissionDeniedException(GeolocationException):
    """User refused location access."""

    def __init__(self, message: str = "Location access denied by user", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.GEOLOCATION_PERMISSION_DENIED,
            status_code=403,
            details=details,
        )


class PositionUnavailableException(GeolocationException):
    """Position could not be determined."""

    def __init__(self, message: str = "Location information unavailable", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.GEOLOCATION_POSITION_UNAVAILABLE,
            status_code=503,
            details=details,
        )


class GeolocationTimeoutException(GeolocationException):
    """Position was not acquired within the configured timeout."""

    def __init__(self, message: str = "Location request timed out", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.GEOLOCATION_TIMEOUT,
            status_code=504,
            details=details,
        )


class GeolocationUnknownException(GeolocationException):
    """Platform reported a cause we do not recognise."""

    def __init__(
        self,
        message: str = "An unknown error occurred while retrieving location",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=ErrorCode.GEOLOCATION_UNKNOWN,
            status_code=500,
            details=details,
        )


class ConfigurationException(WeatherDashboardException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
