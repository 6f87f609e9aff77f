"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Depends, Request

from weather_dashboard.config import Settings, get_settings
from weather_dashboard.protocols import GeolocationProviderProtocol
from weather_dashboard.services.dashboard_service import DashboardService
from weather_dashboard.services.weather_service import WeatherService


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_geolocation_provider(request: Request) -> GeolocationProviderProtocol | None:
    """Get the geolocation provider from app state (None when geolocation is disabled)."""
    return getattr(request.app.state, "geolocation_provider", None)


async def get_weather_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherService:
    """Build the weather access layer for this request."""
    return WeatherService.from_settings(client, settings)


async def get_dashboard_service(
    weather_service: WeatherService = Depends(get_weather_service),
    provider: GeolocationProviderProtocol | None = Depends(get_geolocation_provider),
    settings: Settings = Depends(get_settings),
) -> DashboardService:
    """Build the dashboard flows for this request."""
    return DashboardService(weather_service, provider, default_city=settings.default_city)
