"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import httpx
import pytest

from weather_dashboard.config import Settings
from weather_dashboard.models.weather import Coordinates
from weather_dashboard.services.geolocation_service import PositionOptions

# 2024-01-15 00:00:00 UTC, a Monday
BASE_TIMESTAMP = 1705276800


class FakeGeolocationProvider:
    """In-memory geolocation provider recording every request."""

    def __init__(
        self,
        coords: Coordinates | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.coords = coords or Coordinates(lat=52.3676, lon=4.9041)
        self.error = error
        self.delay = delay
        self.calls: list[PositionOptions] = []

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        self.calls.append(options)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.coords


def json_response(data, status_code: int = 200, url: str = "https://api.openweathermap.org/test") -> httpx.Response:
    """Build a real httpx.Response so raise_for_status behaves as in production."""
    return httpx.Response(status_code=status_code, json=data, request=httpx.Request("GET", url))


@pytest.fixture
def make_response():
    """Factory for httpx responses."""
    return json_response


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def test_settings():
    """Settings instance with test values, isolated from any .env file."""
    return Settings(
        _env_file=None,
        openweather_api_key="test-weather-key",
        default_city="London",
        geolocation_url="http://geo.test/json/",
    )


@pytest.fixture
def mock_current_weather_response():
    """Mock OpenWeatherMap /weather response."""
    return {
        "coord": {"lon": 4.9041, "lat": 52.3676},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "base": "stations",
        "main": {
            "temp": 15.5,
            "feels_like": 14.2,
            "temp_min": 14.0,
            "temp_max": 17.0,
            "pressure": 1013,
            "humidity": 65,
        },
        "visibility": 10000,
        "wind": {"speed": 3.5, "deg": 180},
        "clouds": {"all": 0},
        "dt": BASE_TIMESTAMP + 36000,
        "sys": {
            "country": "NL",
            "sunrise": BASE_TIMESTAMP + 27900,
            "sunset": BASE_TIMESTAMP + 58800,
        },
        "timezone": 3600,
        "id": 2759794,
        "name": "Amsterdam",
        "cod": 200,
    }


@pytest.fixture
def mock_forecast_response():
    """Mock OpenWeatherMap /forecast response with two days of 3-hour steps."""
    items = []
    for step in range(16):
        dt = BASE_TIMESTAMP + step * 10800
        items.append(
            {
                "dt": dt,
                "main": {
                    "temp": 10.0 + step,
                    "feels_like": 9.0 + step,
                    "temp_min": 9.5 + step,
                    "temp_max": 10.5 + step,
                    "pressure": 1015,
                    "humidity": 70,
                },
                "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
                "clouds": {"all": 75},
                "wind": {"speed": 4.1, "deg": 230, "gust": 7.2},
                "visibility": 10000,
                "pop": 0.4,
                "dt_txt": datetime.fromtimestamp(dt, UTC).strftime("%Y-%m-%d %H:%M:%S"),
            }
        )
    return {
        "cod": "200",
        "message": 0,
        "cnt": len(items),
        "list": items,
        "city": {
            "id": 2759794,
            "name": "Amsterdam",
            "coord": {"lat": 52.3676, "lon": 4.9041},
            "country": "NL",
            "population": 2000000,
            "timezone": 3600,
            "sunrise": BASE_TIMESTAMP + 27900,
            "sunset": BASE_TIMESTAMP + 58800,
        },
    }


@pytest.fixture
def mock_geocoding_response():
    """Mock OpenWeatherMap /geo/1.0/direct response with three matches."""
    return [
        {"name": "London", "lat": 51.5073219, "lon": -0.1276474, "country": "GB", "state": "England"},
        {"name": "London", "lat": 42.9832406, "lon": -81.243372, "country": "CA", "state": "Ontario"},
        {"name": "London", "lat": 37.1289771, "lon": -84.0832646, "country": "US", "state": "Kentucky"},
    ]


@pytest.fixture
def provider_client(mock_http_client, mock_current_weather_response, mock_forecast_response, mock_geocoding_response):
    """Mock HTTP client answering each OpenWeatherMap endpoint with its canned payload."""

    async def route(url, params=None, timeout=None, **kwargs):
        if url.endswith("/weather"):
            return json_response(mock_current_weather_response, url=url)
        if url.endswith("/forecast"):
            return json_response(mock_forecast_response, url=url)
        if url.endswith("/direct"):
            return json_response(mock_geocoding_response, url=url)
        return json_response({"cod": "404", "message": "not found"}, status_code=404, url=url)

    mock_http_client.get.side_effect = route
    return mock_http_client


@pytest.fixture
def fake_geolocation():
    """Geolocation provider that succeeds with Amsterdam's coordinates."""
    return FakeGeolocationProvider()


@pytest.fixture
def make_geolocation_provider():
    """Factory for fake geolocation providers."""
    return FakeGeolocationProvider
