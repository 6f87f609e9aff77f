"""Integration tests for API routes with dependency injection."""

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from weather_dashboard.config import Settings, get_settings
from weather_dashboard.core.app_factory import create_app
from weather_dashboard.dependencies import get_geolocation_provider, get_http_client
from weather_dashboard.services.geolocation_service import PositionError, PositionErrorCode


@pytest.fixture
def app(provider_client, test_settings, fake_geolocation):
    """App with the HTTP client, settings and geolocation swapped for test doubles."""
    application = create_app()
    application.dependency_overrides[get_http_client] = lambda: provider_client
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_geolocation_provider] = lambda: fake_geolocation
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data


class TestWeatherRoutes:
    def test_current_weather_by_city(self, client, provider_client, mock_current_weather_response):
        response = client.get("/api/weather/current", params={"city": "Amsterdam"})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Amsterdam"
        assert data["main"]["temp"] == 15.5
        assert data["cod"] == 200
        params = provider_client.get.call_args.kwargs["params"]
        assert params["q"] == "Amsterdam"
        assert params["appid"] == "test-weather-key"

    def test_current_weather_city_not_found(self, client, provider_client, make_response):
        provider_client.get.side_effect = None
        provider_client.get.return_value = make_response({"cod": "404"}, 404)

        response = client.get("/api/weather/current", params={"city": "Nowhereville"})

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "CITY_NOT_FOUND"
        assert error["message"] == 'City "Nowhereville" not found'

    def test_current_weather_invalid_key(self, client, provider_client, make_response):
        provider_client.get.side_effect = None
        provider_client.get.return_value = make_response({"cod": 401}, 401)

        response = client.get("/api/weather/current", params={"city": "Amsterdam"})

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "WEATHER_INVALID_API_KEY"

    def test_current_weather_by_coords(self, client):
        response = client.get("/api/weather/current/coords", params={"lat": 52.3676, "lon": 4.9041})

        assert response.status_code == 200
        assert response.json()["coord"] == {"lat": 52.3676, "lon": 4.9041}

    def test_coords_network_failure(self, client, provider_client):
        provider_client.get.side_effect = httpx.ConnectError("Connection failed")

        response = client.get("/api/weather/current/coords", params={"lat": 52.3676, "lon": 4.9041})

        assert response.status_code == 502
        assert response.json()["error"]["message"] == "Failed to fetch weather data for location"

    @pytest.mark.parametrize("params", [{"lat": 91, "lon": 0}, {"lat": 0, "lon": -181}, {"lat": 0}])
    def test_coords_validation(self, client, provider_client, params):
        response = client.get("/api/weather/current/coords", params=params)

        assert response.status_code == 422
        provider_client.get.assert_not_called()

    def test_missing_city_rejected(self, client):
        assert client.get("/api/weather/current").status_code == 422
        assert client.get("/api/weather/current", params={"city": ""}).status_code == 422

    def test_forecast_by_city_keeps_provider_shape(self, client):
        response = client.get("/api/weather/forecast", params={"city": "Amsterdam"})

        assert response.status_code == 200
        data = response.json()
        assert len(data["list"]) == 16
        assert data["city"]["country"] == "NL"

    def test_forecast_by_coords(self, client):
        response = client.get("/api/weather/forecast/coords", params={"lat": 52.3676, "lon": 4.9041})

        assert response.status_code == 200
        assert len(response.json()["list"]) == 16

    def test_search(self, client):
        response = client.get("/api/weather/search", params={"q": "London", "limit": 3})

        assert response.status_code == 200
        data = response.json()
        assert [location["country"] for location in data] == ["GB", "CA", "US"]
        assert len({location["id"] for location in data}) == 3

    def test_search_limit_validation(self, client):
        assert client.get("/api/weather/search", params={"q": "London", "limit": 0}).status_code == 422


class TestDashboardRoutes:
    def test_dashboard_for_city(self, client):
        response = client.get("/api/weather/dashboard", params={"city": "Amsterdam", "unit": "fahrenheit"})

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == "Amsterdam, NL"
        assert data["unit"] == "fahrenheit"
        assert data["temp"] == 60
        assert data["forecast"][0]["label"] == "Today"

    def test_dashboard_default_uses_location(self, client, fake_geolocation, provider_client):
        response = client.get("/api/weather/dashboard")

        assert response.status_code == 200
        assert len(fake_geolocation.calls) == 1
        params = provider_client.get.call_args.kwargs["params"]
        assert "lat" in params

    def test_dashboard_default_falls_back_to_default_city(self, app, client, provider_client, make_geolocation_provider):
        denied = make_geolocation_provider(error=PositionError(PositionErrorCode.PERMISSION_DENIED))
        app.dependency_overrides[get_geolocation_provider] = lambda: denied

        response = client.get("/api/weather/dashboard")

        assert response.status_code == 200
        params = provider_client.get.call_args.kwargs["params"]
        assert params["q"] == "London"

    def test_location_dashboard_permission_denied(self, app, client, provider_client, make_geolocation_provider):
        denied = make_geolocation_provider(error=PositionError(PositionErrorCode.PERMISSION_DENIED))
        app.dependency_overrides[get_geolocation_provider] = lambda: denied

        response = client.get("/api/weather/dashboard/location")

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Location access denied by user"
        provider_client.get.assert_not_called()

    def test_invalid_unit(self, client):
        response = client.get("/api/weather/dashboard", params={"city": "Amsterdam", "unit": "kelvin"})

        assert response.status_code == 422


class TestLocationRoute:
    def test_location(self, client):
        response = client.get("/api/location")

        assert response.status_code == 200
        assert response.json() == {"lat": 52.3676, "lon": 4.9041}

    def test_location_unsupported(self, app, client):
        app.dependency_overrides[get_geolocation_provider] = lambda: None

        response = client.get("/api/location")

        assert response.status_code == 501
        assert response.json()["error"]["code"] == "GEOLOCATION_UNSUPPORTED"

    def test_location_timeout(self, app, client, make_geolocation_provider):
        app.dependency_overrides[get_geolocation_provider] = lambda: make_geolocation_provider(
            error=PositionError(PositionErrorCode.TIMEOUT)
        )

        response = client.get("/api/location")

        assert response.status_code == 504


def test_required_api_key_missing(app, client):
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, openweather_api_key="", require_api_key=True
    )

    response = client.get("/api/weather/current", params={"city": "Amsterdam"})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CONFIG_MISSING"


def test_lifespan_creates_shared_resources():
    application = create_app()

    with TestClient(application):
        assert isinstance(application.state.http_client, httpx.AsyncClient)
        assert hasattr(application.state, "geolocation_provider")

    assert application.state.http_client.is_closed


def test_placeholder_key_warning_not_repeated_per_request(app, client, caplog):
    placeholder_settings = Settings(_env_file=None, openweather_api_key="")
    app.dependency_overrides[get_settings] = lambda: placeholder_settings

    with caplog.at_level(logging.WARNING, logger="weather_dashboard.config"):
        client.get("/api/weather/current", params={"city": "Amsterdam"})
        client.get("/api/weather/forecast", params={"city": "Amsterdam"})

    warnings = [r for r in caplog.records if getattr(r, "event_type", None) == "config_api_key_placeholder"]
    assert len(warnings) == 1
