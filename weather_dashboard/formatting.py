"""Pure display helpers: unit conversion, icon URLs and en-US date/time rendering."""

import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Literal

TemperatureUnit = Literal["celsius", "fahrenheit"]
IconSize = Literal["2x", "4x"]

ICON_BASE_URL = "https://openweathermap.org/img/wn"

TEMPERATURE_UNITS = ("celsius", "fahrenheit")
ICON_SIZES = ("2x", "4x")

# Intl.DateTimeFormat option values we understand
_DATE_OPTION_VALUES = {
    "weekday": ("long", "short", "narrow", None),
    "month": ("long", "short", "narrow", "numeric", "2-digit", None),
    "day": ("numeric", "2-digit", None),
    "year": ("numeric", "2-digit", None),
}

DEFAULT_DATE_OPTIONS: dict[str, str | None] = {
    "weekday": "short",
    "month": "short",
    "day": "numeric",
    "year": None,
}

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def convert_temperature(value: float, from_unit: TemperatureUnit, to_unit: TemperatureUnit) -> float:
    """Convert temperature between Celsius and Fahrenheit. No rounding."""
    for unit in (from_unit, to_unit):
        if unit not in TEMPERATURE_UNITS:
            raise ValueError(f"Unknown temperature unit {unit!r}, expected one of {TEMPERATURE_UNITS}")

    if from_unit == to_unit:
        return value
    if from_unit == "celsius":
        return value * 9 / 5 + 32
    return (value - 32) * 5 / 9


def icon_url(code: str, size: IconSize = "2x") -> str:
    """Get OpenWeatherMap icon URL from icon code."""
    if size not in ICON_SIZES:
        raise ValueError(f"Icon size must be one of {ICON_SIZES}, got {size!r}")
    return f"{ICON_BASE_URL}/{code}@{size}.png"


def provider_timezone(offset_seconds: int) -> timezone:
    """Fixed-offset timezone from the provider's ``timezone`` shift in seconds."""
    return timezone(timedelta(seconds=offset_seconds))


def _to_datetime(timestamp: float, tz: tzinfo | None) -> datetime:
    return datetime.fromtimestamp(timestamp, tz or timezone.utc)


def _name(names: tuple[str, ...], index: int, style: str) -> str:
    full = names[index]
    if style == "long":
        return full
    if style == "short":
        return full[:3]
    return full[0]


def format_date(timestamp: float, tz: tzinfo | None = None, **options: str | None) -> str:
    """Format Unix timestamp to a readable en-US date.

    Defaults to short weekday, short month and numeric day ("Mon, Jan 15").
    Keyword options override the defaults using Intl.DateTimeFormat names
    (``weekday``, ``month``, ``day``, ``year``); pass None to drop a part.
    """
    unknown = set(options) - set(_DATE_OPTION_VALUES)
    if unknown:
        raise ValueError(f"Unsupported date options: {sorted(unknown)}")

    opts = {**DEFAULT_DATE_OPTIONS, **options}
    for key, value in opts.items():
        if value not in _DATE_OPTION_VALUES[key]:
            raise ValueError(f"Invalid value {value!r} for date option {key!r}")

    dt = _to_datetime(timestamp, tz)
    weekday = _name(_WEEKDAYS, dt.weekday(), opts["weekday"]) if opts["weekday"] else None
    day = None
    if opts["day"]:
        day = f"{dt.day:02d}" if opts["day"] == "2-digit" else str(dt.day)
    year = None
    if opts["year"]:
        year = f"{dt.year % 100:02d}" if opts["year"] == "2-digit" else str(dt.year)

    month_style = opts["month"]
    if month_style in ("numeric", "2-digit"):
        month = f"{dt.month:02d}" if month_style == "2-digit" else str(dt.month)
        body = "/".join(part for part in (month, day, year) if part)
    else:
        month_name = _name(_MONTHS, dt.month - 1, month_style) if month_style else None
        body = " ".join(part for part in (month_name, day) if part)
        if year:
            body = f"{body}, {year}" if body else year

    if weekday and body:
        return f"{weekday}, {body}"
    return weekday or body


def format_time(timestamp: float, tz: tzinfo | None = None) -> str:
    """Format Unix timestamp to a 12-hour en-US time with 2-digit fields ("08:05 AM")."""
    dt = _to_datetime(timestamp, tz)
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour:02d}:{dt.minute:02d} {suffix}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def wind_speed_kmh(speed_ms: float) -> float:
    """Convert wind speed from m/s to km/h."""
    return speed_ms * 3.6


def visibility_km(visibility_m: float) -> float:
    """Convert visibility from metres to kilometres, one decimal place."""
    return round(visibility_m / 1000, 1)
