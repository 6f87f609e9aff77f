"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from weather_dashboard import __version__
from weather_dashboard.core.lifespan import lifespan
from weather_dashboard.middleware.error_handlers import register_error_handlers
from weather_dashboard.routers import health_router, location_router, weather_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Weather Dashboard API",
        description="""
        **Weather Dashboard** - current weather and 5-day forecast from OpenWeatherMap

        - `/api/weather/*` - lookups by city name or coordinates, city search, dashboard views
        - `/api/location` - best-effort current location
        - `/health` - basic health check

        Errors are returned as `{"error": {"code", "message", "details"}}`;
        `message` is safe to show to users.
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(weather_router.router, prefix="/api/weather", tags=["weather"])
    app.include_router(location_router.router, prefix="/api/location", tags=["location"])

    return app
