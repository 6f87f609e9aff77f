"""Pydantic models for weather data."""

from pydantic import BaseModel, ConfigDict, Field


class ProviderModel(BaseModel):
    """Immutable record parsed from an OpenWeatherMap payload.

    Unknown provider fields are kept so a parsed value dumps back to the
    body it was built from.
    """

    model_config = ConfigDict(frozen=True, extra="allow")


class Coordinates(ProviderModel):
    """Latitude/longitude pair."""

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class WeatherCondition(ProviderModel):
    """Weather condition info from OpenWeatherMap."""

    id: int
    main: str
    description: str
    icon: str


class MainInfo(ProviderModel):
    """Main weather metrics from OpenWeatherMap."""

    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    sea_level: int | None = None
    grnd_level: int | None = None


class WindInfo(ProviderModel):
    """Wind information (m/s with metric units)."""

    speed: float
    deg: int
    gust: float | None = None


class CloudsInfo(ProviderModel):
    """Cloud coverage information."""

    all: int


class SysInfo(ProviderModel):
    """Sunrise/sunset block of a current weather response."""

    sunrise: int
    sunset: int
    country: str | None = None


class CurrentWeather(ProviderModel):
    """Current weather response from the /weather endpoint."""

    id: int | None = None
    name: str
    country: str | None = None
    coord: Coordinates
    weather: list[WeatherCondition] = Field(default_factory=list)
    main: MainInfo
    visibility: int | None = None
    wind: WindInfo
    clouds: CloudsInfo
    dt: int
    sys: SysInfo
    timezone: int = 0

    @property
    def country_code(self) -> str | None:
        """Country code, wherever the provider put it."""
        return self.country or self.sys.country

    @property
    def condition(self) -> WeatherCondition | None:
        """Primary weather condition, if any was reported."""
        return self.weather[0] if self.weather else None


class ForecastItem(ProviderModel):
    """One 3-hour step of the 5-day forecast."""

    dt: int
    main: MainInfo
    weather: list[WeatherCondition] = Field(default_factory=list)
    clouds: CloudsInfo
    wind: WindInfo
    visibility: int | None = None
    dt_txt: str

    @property
    def condition(self) -> WeatherCondition | None:
        """Primary weather condition, if any was reported."""
        return self.weather[0] if self.weather else None


class ForecastCity(ProviderModel):
    """City descriptor attached to a forecast."""

    id: int
    name: str
    coord: Coordinates
    country: str
    population: int = 0
    timezone: int = 0
    sunrise: int
    sunset: int


class WeatherForecast(ProviderModel):
    """Forecast response from the /forecast endpoint, items in chronological order."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    items: list[ForecastItem] = Field(alias="list")
    city: ForecastCity

    def daily_preview(self, days: int = 5) -> list[ForecastItem]:
        """Pick one item per day, assuming 3-hour steps (8 per day)."""
        return self.items[::8][:days]


class Location(BaseModel):
    """City search result.

    ``id`` is built from coordinates and the result's position, so it is not
    stable across searches.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    country: str
    lat: float
    lon: float
    is_favorite: bool = False
