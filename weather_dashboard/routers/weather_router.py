"""Weather API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from weather_dashboard.dependencies import get_dashboard_service, get_weather_service
from weather_dashboard.formatting import TemperatureUnit
from weather_dashboard.models.base_models import ErrorResponse
from weather_dashboard.models.weather import CurrentWeather, Location, WeatherForecast
from weather_dashboard.services.dashboard_service import DashboardService, DashboardView, build_view
from weather_dashboard.services.weather_service import WeatherService

router = APIRouter()

CITY_ERRORS = {
    404: {"model": ErrorResponse, "description": "City not found"},
    502: {"model": ErrorResponse, "description": "Weather provider error"},
}
PROVIDER_ERRORS = {502: {"model": ErrorResponse, "description": "Weather provider error"}}

Latitude = Annotated[float, Query(ge=-90, le=90, description="Latitude")]
Longitude = Annotated[float, Query(ge=-180, le=180, description="Longitude")]
NON_BLANK = r".*\S.*"


@router.get("/current", response_model=CurrentWeather, summary="Current weather by city", responses=CITY_ERRORS)
async def get_current_weather(
    city: str = Query(
        ..., min_length=1, pattern=NON_BLANK, description="City name, e.g. 'London' or 'London,GB'"
    ),
    service: WeatherService = Depends(get_weather_service),
):
    """Current conditions for a city name (metric units)."""
    return await service.get_current_weather_by_city(city)


@router.get(
    "/current/coords",
    response_model=CurrentWeather,
    summary="Current weather by coordinates",
    responses=PROVIDER_ERRORS,
)
async def get_current_weather_by_coords(
    lat: Latitude,
    lon: Longitude,
    service: WeatherService = Depends(get_weather_service),
):
    """Current conditions for a latitude/longitude pair (metric units)."""
    return await service.get_current_weather_by_coords(lat, lon)


@router.get("/forecast", response_model=WeatherForecast, summary="5-day forecast by city", responses=CITY_ERRORS)
async def get_forecast(
    city: str = Query(..., min_length=1, pattern=NON_BLANK, description="City name"),
    service: WeatherService = Depends(get_weather_service),
):
    """5-day forecast in 3-hour steps for a city name."""
    return await service.get_forecast_by_city(city)


@router.get(
    "/forecast/coords",
    response_model=WeatherForecast,
    summary="5-day forecast by coordinates",
    responses=PROVIDER_ERRORS,
)
async def get_forecast_by_coords(
    lat: Latitude,
    lon: Longitude,
    service: WeatherService = Depends(get_weather_service),
):
    """5-day forecast in 3-hour steps for a latitude/longitude pair."""
    return await service.get_forecast_by_coords(lat, lon)


@router.get("/search", response_model=list[Location], summary="Search cities", responses=PROVIDER_ERRORS)
async def search_cities(
    q: str = Query(..., min_length=1, pattern=NON_BLANK, description="Search text"),
    limit: int = Query(default=5, ge=1, le=5, description="Maximum number of results"),
    service: WeatherService = Depends(get_weather_service),
):
    """City search for autocomplete. Result ids are only valid within one response."""
    return await service.search_cities(q, limit)


@router.get("/dashboard", response_model=DashboardView, summary="Dashboard view", responses=CITY_ERRORS)
async def get_dashboard(
    city: str | None = Query(
        default=None, min_length=1, pattern=NON_BLANK, description="City name; omit for the default view"
    ),
    unit: TemperatureUnit = Query(default="celsius", description="Temperature unit"),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Display values for a city, or for the user's location with a default-city fallback."""
    if city is not None:
        snapshot = await dashboard.search_weather(city)
    else:
        snapshot = await dashboard.load_default_weather()
    return build_view(snapshot, unit)


@router.get(
    "/dashboard/location",
    response_model=DashboardView,
    summary="Dashboard view for the current location",
    responses={
        403: {"model": ErrorResponse, "description": "Location access denied"},
        501: {"model": ErrorResponse, "description": "Geolocation not supported"},
        502: {"model": ErrorResponse, "description": "Weather provider error"},
        503: {"model": ErrorResponse, "description": "Location unavailable"},
        504: {"model": ErrorResponse, "description": "Location request timed out"},
    },
)
async def get_location_dashboard(
    unit: TemperatureUnit = Query(default="celsius", description="Temperature unit"),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Display values for the user's current location."""
    snapshot = await dashboard.load_location_weather()
    return build_view(snapshot, unit)
