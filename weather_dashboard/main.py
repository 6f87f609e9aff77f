"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv

from weather_dashboard.config import get_settings
from weather_dashboard.core.app_factory import create_app
from weather_dashboard.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()
setup_logging(settings.log_level, settings.log_dir)

app = create_app()


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Weather Dashboard API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_dashboard.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
