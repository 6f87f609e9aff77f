"""Dashboard flows: search, use-my-location and the default view with fallback."""

from pydantic import BaseModel, ConfigDict, Field

from weather_dashboard.exceptions import WeatherDashboardException
from weather_dashboard.formatting import (
    TemperatureUnit,
    convert_temperature,
    format_date,
    format_time,
    icon_url,
    round_half_up,
    visibility_km,
    wind_speed_kmh,
)
from weather_dashboard.logging_config import get_logger, log_with_context
from weather_dashboard.models.weather import CurrentWeather, WeatherForecast
from weather_dashboard.protocols import GeolocationProviderProtocol
from weather_dashboard.services.geolocation_service import PositionOptions, get_current_location
from weather_dashboard.services.weather_service import WeatherService

logger = get_logger(__name__)

PREVIEW_DAYS = 5


class WeatherSnapshot(BaseModel):
    """Current conditions and forecast for one place."""

    model_config = ConfigDict(frozen=True)

    current: CurrentWeather
    forecast: WeatherForecast


class ForecastPreviewItem(BaseModel):
    """One day of the forecast preview strip."""

    dt: int
    label: str
    icon_url: str | None = None
    description: str | None = None
    temp: int


class DashboardView(BaseModel):
    """Display-ready values for the current weather card and forecast preview."""

    location: str
    description: str | None = None
    icon_url: str | None = None
    unit: TemperatureUnit
    temp: int
    feels_like: int
    temp_min: int
    temp_max: int
    humidity: int
    wind_speed_kmh: int
    visibility_km: float | None = None
    sunrise: str
    sunset: str
    forecast: list[ForecastPreviewItem] = Field(default_factory=list)


def _temp(value: float, unit: TemperatureUnit) -> int:
    return round_half_up(convert_temperature(value, "celsius", unit))


def build_view(snapshot: WeatherSnapshot, unit: TemperatureUnit = "celsius") -> DashboardView:
    """Compute the values the dashboard shows for a snapshot.

    Provider values are metric; temperatures are converted to ``unit`` and
    rounded. A missing weather condition leaves description and icon empty.
    """
    current = snapshot.current
    condition = current.condition
    location = f"{current.name}, {current.country_code}" if current.country_code else current.name

    preview = []
    for index, item in enumerate(snapshot.forecast.daily_preview(PREVIEW_DAYS)):
        item_condition = item.condition
        preview.append(
            ForecastPreviewItem(
                dt=item.dt,
                label="Today" if index == 0 else format_date(item.dt),
                icon_url=icon_url(item_condition.icon) if item_condition else None,
                description=item_condition.description if item_condition else None,
                temp=_temp(item.main.temp, unit),
            )
        )

    return DashboardView(
        location=location,
        description=condition.description if condition else None,
        icon_url=icon_url(condition.icon) if condition else None,
        unit=unit,
        temp=_temp(current.main.temp, unit),
        feels_like=_temp(current.main.feels_like, unit),
        temp_min=_temp(current.main.temp_min, unit),
        temp_max=_temp(current.main.temp_max, unit),
        humidity=current.main.humidity,
        wind_speed_kmh=round_half_up(wind_speed_kmh(current.wind.speed)),
        visibility_km=visibility_km(current.visibility) if current.visibility is not None else None,
        sunrise=format_time(current.sys.sunrise),
        sunset=format_time(current.sys.sunset),
        forecast=preview,
    )


class DashboardService:
    """Loads weather snapshots the way the dashboard UI asks for them."""

    def __init__(
        self,
        weather_service: WeatherService,
        geolocation_provider: GeolocationProviderProtocol | None,
        default_city: str = "London",
        position_options: PositionOptions | None = None,
    ):
        self.weather_service = weather_service
        self.geolocation_provider = geolocation_provider
        self.default_city = default_city
        self.position_options = position_options

    async def search_weather(self, city_name: str) -> WeatherSnapshot:
        """Current weather and forecast for a city name.

        Current weather is fetched first, so its failure (city not found,
        invalid API key) is the one reported.
        """
        current = await self.weather_service.get_current_weather_by_city(city_name)
        forecast = await self.weather_service.get_forecast_by_city(city_name)
        return WeatherSnapshot(current=current, forecast=forecast)

    async def load_location_weather(self) -> WeatherSnapshot:
        """Current weather and forecast for the user's position.

        Geolocation failures propagate before any weather request is made.
        """
        coords = await get_current_location(self.geolocation_provider, self.position_options)
        current = await self.weather_service.get_current_weather_by_coords(coords.lat, coords.lon)
        forecast = await self.weather_service.get_forecast_by_coords(coords.lat, coords.lon)
        return WeatherSnapshot(current=current, forecast=forecast)

    async def load_default_weather(self) -> WeatherSnapshot:
        """Weather for the user's position, falling back to the default city."""
        try:
            return await self.load_location_weather()
        except WeatherDashboardException as e:
            log_with_context(
                logger,
                "info",
                "Location weather unavailable, using default city",
                default_city=self.default_city,
                error_code=e.code.value,
                error=e.message,
                event_type="default_city_fallback",
            )
            return await self.search_weather(self.default_city)
