"""Protocol definitions for dependency injection."""

from typing import Protocol

from weather_dashboard.models.weather import Coordinates
from weather_dashboard.services.geolocation_service import PositionOptions


class GeolocationProviderProtocol(Protocol):
    """Protocol for platform geolocation capabilities.

    Implementations acquire a best-effort position and report failures by
    raising ``PositionError`` with one of its cause codes.
    """

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        """Acquire the current position.

        Args:
            options: Accuracy, timeout and cached-fix age limits

        Returns:
            Coordinates of the acquired fix

        Raises:
            PositionError: If the position cannot be acquired
        """
        ...
