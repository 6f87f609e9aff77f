"""Weather service for OpenWeatherMap API integration.

Every public method performs exactly one GET and either returns a parsed
model or raises one of the ``WeatherException`` subclasses. Nothing is
cached, retried or de-duplicated.
"""

import asyncio
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from weather_dashboard.config import Settings, get_settings
from weather_dashboard.exceptions import CityNotFoundException, FetchFailedException, InvalidCredentialException
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.models.weather import CurrentWeather, Location, WeatherForecast

logger = get_logger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5"
GEO_URL = "https://api.openweathermap.org/geo/1.0"
REQUEST_TIMEOUT_SECONDS = 10.0
UNITS = "metric"  # Celsius, m/s

ModelT = TypeVar("ModelT", bound=BaseModel)


def _require_city(city_name: str) -> str:
    if not city_name or not city_name.strip():
        raise ValueError("city name must be a non-empty string")
    return city_name


def _require_coords(lat: float, lon: float) -> None:
    if not -90 <= lat <= 90:
        raise ValueError(f"Latitude must be between -90 and 90, got {lat}")
    if not -180 <= lon <= 180:
        raise ValueError(f"Longitude must be between -180 and 180, got {lon}")


class WeatherService:
    """Stateless access layer for current weather, forecast and city search."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = BASE_URL,
        geo_url: str = GEO_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """Initialize the service.

        Args:
            client: Shared HTTP client for making requests
            api_key: OpenWeatherMap credential sent as ``appid``
            base_url: Base for the /weather and /forecast endpoints
            geo_url: Base for the /direct geocoding endpoint
            timeout: Deadline in seconds for each request
        """
        self.client = client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.geo_url = geo_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings | None = None) -> "WeatherService":
        """Build a service from application settings.

        Raises:
            ConfigurationException: If no API key is set and one is required
        """
        if settings is None:
            settings = get_settings()

        return cls(
            client,
            api_key=settings.resolve_api_key(),
            base_url=settings.openweather_base_url,
            geo_url=settings.openweather_geo_url,
            timeout=settings.request_timeout_seconds,
        )

    async def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        """GET ``url`` with the credential attached and return the decoded body.

        The deadline covers the whole exchange, body included; httpx's own
        timeout only bounds each connect or read step.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            TimeoutError: If the response is not complete within the deadline
            ValueError: If the body is not JSON
        """
        response = await asyncio.wait_for(
            self.client.get(url, params={**params, "appid": self.api_key}, timeout=self.timeout),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def _fetch_failed(self, operation: str, error: Exception, **context: Any) -> FetchFailedException:
        """Log a failed lookup and build its classified exception."""
        if isinstance(error, httpx.HTTPStatusError):
            details: dict[str, Any] = {"error_type": "http_error", "status_code": error.response.status_code}
        elif isinstance(error, (httpx.TimeoutException, TimeoutError)):
            details = {"error_type": "timeout"}
        elif isinstance(error, httpx.HTTPError):
            details = {"error_type": "network_error"}
        else:
            details = {"error_type": "parsing_error"}

        log_with_context(
            logger,
            "warning",
            "Weather lookup failed",
            operation=operation,
            error=str(error),
            event_type="weather_fetch_failed",
            **details,
            **context,
        )
        return FetchFailedException(operation, details=details)

    async def _lookup_by_city(
        self,
        endpoint: str,
        model: type[ModelT],
        city_name: str,
        operation: str,
        distinguish_credential: bool,
    ) -> ModelT:
        _require_city(city_name)
        params = {"q": city_name, "units": UNITS}

        try:
            data = await self._get_json(f"{self.base_url}/{endpoint}", params)
            return model.model_validate(data)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                log_with_context(logger, "info", "City not found", city=city_name, event_type="city_not_found")
                raise CityNotFoundException(city_name) from e
            if status == 401 and distinguish_credential:
                log_with_context(logger, "error", "Weather API rejected the API key", event_type="invalid_api_key")
                raise InvalidCredentialException() from e
            raise self._fetch_failed(operation, e, city=city_name) from e
        except (httpx.HTTPError, TimeoutError, ValueError) as e:
            raise self._fetch_failed(operation, e, city=city_name) from e

    async def _lookup_by_coords(
        self,
        endpoint: str,
        model: type[ModelT],
        lat: float,
        lon: float,
        operation: str,
    ) -> ModelT:
        # Coordinate lookups never surface 404/401 specifically
        _require_coords(lat, lon)
        params = {"lat": lat, "lon": lon, "units": UNITS}

        try:
            data = await self._get_json(f"{self.base_url}/{endpoint}", params)
            return model.model_validate(data)
        except (httpx.HTTPError, TimeoutError, ValueError) as e:
            raise self._fetch_failed(operation, e, lat=lat, lon=lon) from e

    async def get_current_weather_by_city(self, city_name: str) -> CurrentWeather:
        """Get current weather by city name.

        Raises:
            CityNotFoundException: Provider returned 404
            InvalidCredentialException: Provider returned 401
            FetchFailedException: Any other failure
        """
        return await self._lookup_by_city(
            "weather", CurrentWeather, city_name, "current weather", distinguish_credential=True
        )

    async def get_current_weather_by_coords(self, lat: float, lon: float) -> CurrentWeather:
        """Get current weather by coordinates.

        Raises:
            FetchFailedException: On any failure
        """
        return await self._lookup_by_coords("weather", CurrentWeather, lat, lon, "current weather for location")

    async def get_forecast_by_city(self, city_name: str) -> WeatherForecast:
        """Get the 5-day/3-hour forecast by city name.

        Raises:
            CityNotFoundException: Provider returned 404
            FetchFailedException: Any other failure, 401 included
        """
        return await self._lookup_by_city(
            "forecast", WeatherForecast, city_name, "forecast", distinguish_credential=False
        )

    async def get_forecast_by_coords(self, lat: float, lon: float) -> WeatherForecast:
        """Get the 5-day/3-hour forecast by coordinates."""
        return await self._lookup_by_coords("forecast", WeatherForecast, lat, lon, "forecast for location")

    async def search_cities(self, query: str, limit: int = 5) -> list[Location]:
        """Search for cities by name (for autocomplete/search).

        Result ids combine latitude, longitude and result position; they are
        only meaningful within this one result list.

        Raises:
            FetchFailedException: On any failure
        """
        if not query or not query.strip():
            raise ValueError("search query must be a non-empty string")
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        params = {"q": query, "limit": limit}

        try:
            data = await self._get_json(f"{self.geo_url}/direct", params)
            return [
                Location(
                    id=f"{city['lat']}-{city['lon']}-{index}",
                    name=city["name"],
                    country=city.get("country", ""),
                    lat=city["lat"],
                    lon=city["lon"],
                )
                for index, city in enumerate(data)
            ]
        except (httpx.HTTPError, TimeoutError, ValueError, KeyError, TypeError) as e:
            raise self._fetch_failed("search cities", e, query=query) from e
