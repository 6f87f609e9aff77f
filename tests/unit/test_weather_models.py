"""Tests for weather models and their properties."""

import pytest
from pydantic import ValidationError

from weather_dashboard.models.weather import Coordinates, CurrentWeather, Location, WeatherForecast


class TestCurrentWeather:
    def test_parses_provider_payload(self, mock_current_weather_response):
        weather = CurrentWeather.model_validate(mock_current_weather_response)

        assert weather.name == "Amsterdam"
        assert weather.coord == Coordinates(lat=52.3676, lon=4.9041)
        assert weather.wind.gust is None
        assert weather.main.sea_level is None
        assert weather.condition.icon == "01d"

    def test_country_code_from_sys_block(self, mock_current_weather_response):
        weather = CurrentWeather.model_validate(mock_current_weather_response)

        assert weather.country is None
        assert weather.country_code == "NL"

    def test_empty_weather_list_tolerated(self, mock_current_weather_response):
        payload = {**mock_current_weather_response, "weather": []}

        weather = CurrentWeather.model_validate(payload)

        assert weather.weather == []
        assert weather.condition is None

    def test_is_immutable(self, mock_current_weather_response):
        weather = CurrentWeather.model_validate(mock_current_weather_response)

        with pytest.raises(ValidationError):
            weather.name = "Rotterdam"

    def test_missing_measurements_rejected(self, mock_current_weather_response):
        payload = {key: value for key, value in mock_current_weather_response.items() if key != "main"}

        with pytest.raises(ValidationError):
            CurrentWeather.model_validate(payload)


class TestWeatherForecast:
    def test_parses_list_alias(self, mock_forecast_response):
        forecast = WeatherForecast.model_validate(mock_forecast_response)

        assert len(forecast.items) == 16
        assert forecast.items[0].wind.gust == 7.2
        assert forecast.city.population == 2000000
        assert "list" in forecast.model_dump(by_alias=True)

    def test_daily_preview_takes_every_eighth_item(self, mock_forecast_response):
        forecast = WeatherForecast.model_validate(mock_forecast_response)

        preview = forecast.daily_preview()

        assert [item.dt for item in preview] == [forecast.items[0].dt, forecast.items[8].dt]

    def test_daily_preview_is_capped(self, mock_forecast_response):
        forecast = WeatherForecast.model_validate(mock_forecast_response)

        assert len(forecast.daily_preview(days=1)) == 1


class TestLocation:
    def test_defaults(self):
        location = Location(id="51.5--0.12-0", name="London", country="GB", lat=51.5, lon=-0.12)

        assert location.is_favorite is False

    def test_coordinates_range_validated(self):
        with pytest.raises(ValidationError):
            Coordinates(lat=91, lon=0)
