"""Weather Dashboard models"""

from weather_dashboard.models.base_models import ErrorDetail, ErrorResponse, HealthResponse
from weather_dashboard.models.weather import (
    CloudsInfo,
    Coordinates,
    CurrentWeather,
    ForecastCity,
    ForecastItem,
    Location,
    MainInfo,
    SysInfo,
    WeatherCondition,
    WeatherForecast,
    WindInfo,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "CloudsInfo",
    "Coordinates",
    "CurrentWeather",
    "ForecastCity",
    "ForecastItem",
    "Location",
    "MainInfo",
    "SysInfo",
    "WeatherCondition",
    "WeatherForecast",
    "WindInfo",
]
