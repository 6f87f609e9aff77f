"""Application lifespan management."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from weather_dashboard import __version__
from weather_dashboard.config import get_settings
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.middleware.logging_middleware import redact_sensitive_data
from weather_dashboard.services.geolocation_service import IPGeolocationProvider

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook to log requests with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook to log responses with redacted sensitive data."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client(timeout: float) -> httpx.AsyncClient:
    """Create the shared HTTP client used for all provider calls."""
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        limits=httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        ),
        follow_redirects=True,
        event_hooks=event_hooks,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events."""
    settings = get_settings()

    log_with_context(
        logger,
        "info",
        "Starting Weather Dashboard application",
        version=__version__,
        event_type="app_startup",
    )

    client = create_http_client(settings.request_timeout_seconds)
    app.state.http_client = client

    if settings.geolocation_url:
        app.state.geolocation_provider = IPGeolocationProvider(
            client, settings.geolocation_url, allowed=settings.geolocation_allowed
        )
    else:
        app.state.geolocation_provider = None

    log_with_context(
        logger,
        "info",
        "HTTP client initialized successfully",
        geolocation_enabled=app.state.geolocation_provider is not None,
        event_type="http_client_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down Weather Dashboard application",
            event_type="app_shutdown",
        )
        await client.aclose()
        log_with_context(logger, "info", "HTTP client closed", event_type="http_client_cleanup")
