"""Geolocation route."""

from fastapi import APIRouter, Depends

from weather_dashboard.dependencies import get_geolocation_provider
from weather_dashboard.models.base_models import ErrorResponse
from weather_dashboard.models.weather import Coordinates
from weather_dashboard.protocols import GeolocationProviderProtocol
from weather_dashboard.services.geolocation_service import get_current_location

router = APIRouter()


@router.get(
    "",
    response_model=Coordinates,
    summary="Current location",
    responses={
        403: {"model": ErrorResponse, "description": "Location access denied"},
        501: {"model": ErrorResponse, "description": "Geolocation not supported"},
        503: {"model": ErrorResponse, "description": "Location unavailable"},
        504: {"model": ErrorResponse, "description": "Location request timed out"},
    },
)
async def get_location(provider: GeolocationProviderProtocol | None = Depends(get_geolocation_provider)):
    """Best-effort coordinates of the current location."""
    return await get_current_location(provider)
