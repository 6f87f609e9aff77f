from pathlib import Path
from typing import Literal

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_dashboard.exceptions import ConfigurationException, ErrorCode
from weather_dashboard.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent  # weather-dashboard/

PLACEHOLDER_API_KEY = "demo_key"


class Settings(BaseSettings):
    """Application settings with validation.

    Nothing here is required: an unset OpenWeatherMap key is tolerated and
    replaced by a placeholder unless ``require_api_key`` is switched on, in
    which case ``resolve_api_key`` fails fast instead.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_dir: Path | None = Field(default=None, description="Directory for the JSON log file, ./logs when unset")

    # OpenWeatherMap
    openweather_api_key: str = Field(default="", description="OpenWeatherMap API key")
    require_api_key: bool = Field(default=False, description="Fail instead of using a placeholder key")
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        pattern=r"^https?://",
        description="Current weather and forecast API base",
    )
    openweather_geo_url: str = Field(
        default="https://api.openweathermap.org/geo/1.0",
        pattern=r"^https?://",
        description="Geocoding API base",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0, le=60, description="Per-request deadline")
    default_city: str = Field(default="London", min_length=1, description="Fallback city for the default view")

    # Geolocation
    geolocation_url: str | None = Field(
        default="http://ip-api.com/json/",
        description="IP geolocation endpoint; empty disables geolocation entirely",
    )
    geolocation_allowed: bool = Field(default=True, description="Whether location access is granted")

    _resolved_api_key: str | None = PrivateAttr(default=None)

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("openweather_api_key", mode="after")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Treat a whitespace-only key as unset."""
        return v.strip()

    @field_validator("default_city", mode="after")
    @classmethod
    def validate_default_city(cls, v: str) -> str:
        """Ensure default_city is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("default_city must not be empty")
        return v

    @field_validator("geolocation_url", mode="after")
    @classmethod
    def validate_geolocation_url(cls, v: str | None) -> str | None:
        """Normalise an empty geolocation URL to None (capability absent)."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("geolocation_url must be a valid http:// or https:// URL")
        return v

    def resolve_api_key(self) -> str:
        """Return the credential to send with every provider request.

        The decision is made once per settings instance; the placeholder
        warning is not repeated on later calls.

        Returns:
            The configured key, or the placeholder when unset and not required

        Raises:
            ConfigurationException: If the key is unset and ``require_api_key`` is true
        """
        if self._resolved_api_key is not None:
            return self._resolved_api_key

        if self.openweather_api_key:
            self._resolved_api_key = self.openweather_api_key
            return self._resolved_api_key

        if self.require_api_key:
            raise ConfigurationException(
                "OPENWEATHER_API_KEY is not set",
                code=ErrorCode.CONFIG_MISSING,
                details={"setting": "openweather_api_key"},
            )

        log_with_context(
            logger,
            "warning",
            "OpenWeatherMap API key not configured, using placeholder; expect 401 responses",
            event_type="config_api_key_placeholder",
        )
        self._resolved_api_key = PLACEHOLDER_API_KEY
        return self._resolved_api_key


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
