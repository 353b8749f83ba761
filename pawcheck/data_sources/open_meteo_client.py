"""Helpers for fetching current conditions and hourly series from Open-Meteo."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional

import requests

from pawcheck import config
from pawcheck.errors import ForecastDataError
from utils.logging_utils import get_tagged_logger, round_coordinate
logger = get_tagged_logger(__name__, tag='open_meteo_client')

session = requests.Session()

HOURLY_VARS = ["apparent_temperature", "shortwave_radiation", "windspeed_10m"]

EXPECTED_HOURLY_UNITS = {
    "apparent_temperature": "°F",
    "shortwave_radiation": "W/m²",
}

# WMO weather interpretation codes. Day and night read the same for every code.
WEATHER_DESCRIPTIONS = {
    0: ("Clear Sky", "Clear Sky"),
    1: ("Mostly Clear", "Mostly Clear"),
    2: ("Partly Cloudy", "Partly Cloudy"),
    3: ("Overcast", "Overcast"),
    45: ("Fog", "Fog"),
    48: ("Depositing Fog", "Depositing Fog"),
    51: ("Drizzle (Light)", "Drizzle (Light)"),
    53: ("Drizzle (Moderate)", "Drizzle (Moderate)"),
    55: ("Drizzle (Dense)", "Drizzle (Dense)"),
    56: ("Freezing Drizzle (Light)", "Freezing Drizzle (Light)"),
    57: ("Freezing Drizzle (Dense)", "Freezing Drizzle (Dense)"),
    61: ("Rain (Slight)", "Rain (Slight)"),
    63: ("Rain (Moderate)", "Rain (Moderate)"),
    65: ("Rain (Heavy)", "Rain (Heavy)"),
    66: ("Freezing Rain (Light)", "Freezing Rain (Light)"),
    67: ("Freezing Rain (Heavy)", "Freezing Rain (Heavy)"),
    71: ("Snow Fall (Slight)", "Snow Fall (Slight)"),
    73: ("Snow Fall (Moderate)", "Snow Fall (Moderate)"),
    75: ("Snow Fall (Heavy)", "Snow Fall (Heavy)"),
    77: ("Snow Grains", "Snow Grains"),
    80: ("Rain Showers (Slight)", "Rain Showers (Slight)"),
    81: ("Rain Showers (Moderate)", "Rain Showers (Moderate)"),
    82: ("Rain Showers (Violent)", "Rain Showers (Violent)"),
    85: ("Snow Showers (Slight)", "Snow Showers (Slight)"),
    86: ("Snow Showers (Heavy)", "Snow Showers (Heavy)"),
    95: ("Thunderstorm", "Thunderstorm"),
    96: ("Thunderstorm (Slight Hail)", "Thunderstorm (Slight Hail)"),
    99: ("Thunderstorm (Heavy Hail)", "Thunderstorm (Heavy Hail)"),
}

UNKNOWN_DESCRIPTION = "N/A"


@dataclass
class CurrentWeather:
    """The `current_weather` block of a forecast response."""
    time: dt.datetime  # local wall-clock time, naive
    temperature: float
    weathercode: int
    is_day: bool


@dataclass
class HourlySeries:
    """Parallel hourly arrays from a forecast response."""
    time: List[dt.datetime]  # local wall-clock times, naive
    apparent_temperature: List[Optional[float]]
    shortwave_radiation: List[Optional[float]]
    windspeed_10m: List[Optional[float]]


@dataclass
class Forecast:
    """Normalized forecast response."""
    current: CurrentWeather
    hourly: HourlySeries
    timezone: Optional[str] = None


def describe_weather_code(code: Optional[int], is_day: bool) -> str:
    """Map a WMO weather code to display text; unknown codes give "N/A"."""
    pair = WEATHER_DESCRIPTIONS.get(code)
    if pair is None:
        return UNKNOWN_DESCRIPTION
    day_text, night_text = pair
    return day_text if is_day else night_text


def _parse_local(s: str) -> dt.datetime:
    """Parse an Open-Meteo local timestamp ("2024-07-01T14:00") as naive wall-clock time."""
    return dt.datetime.fromisoformat(s)


def _warn_on_unexpected_units(units: dict, *, context: str):
    """Log a warning if Open-Meteo returns units we did not request/expect."""
    if not units:
        return
    for field, expected in EXPECTED_HOURLY_UNITS.items():
        actual = units.get(field)
        if actual and actual != expected:
            logger.warning(
                "Unexpected Open-Meteo unit",
                extra={"context": context, "field": field, "unit": actual, "expected": expected},
            )


def find_hour_index(hours: List[dt.datetime], current_time: dt.datetime) -> int:
    """Index of the hourly slot for `current_time`.

    The first slot with the same hour of day wins. When no slot shares the hour,
    the slot closest in time is used instead. An empty series raises
    ForecastDataError.
    """
    if not hours:
        raise ForecastDataError("Forecast response has no hourly data")
    for i, t in enumerate(hours):
        if t.hour == current_time.hour:
            return i
    nearest = min(range(len(hours)), key=lambda i: abs(hours[i] - current_time))
    logger.warning(
        "No hourly slot matches the current hour; using nearest",
        extra={"current_time": current_time.isoformat(), "index": nearest},
    )
    return nearest


def parse_forecast(data: dict) -> Forecast:
    """Convert a raw forecast JSON body into a Forecast."""
    try:
        current = data["current_weather"]
        current_time = current["time"]
        temperature = current["temperature"]
        hourly = data["hourly"]
        times = hourly["time"]
    except KeyError as exc:
        raise ForecastDataError(f"Forecast response missing {exc}") from exc

    _warn_on_unexpected_units(data.get("hourly_units", {}), context="hourly")

    current_weather = CurrentWeather(
        time=_parse_local(current_time),
        temperature=temperature,
        weathercode=current.get("weathercode"),
        is_day=current.get("is_day") == 1,
    )
    series = HourlySeries(
        time=[_parse_local(t) for t in times],
        apparent_temperature=hourly.get("apparent_temperature", [None] * len(times)),
        shortwave_radiation=hourly.get("shortwave_radiation", [None] * len(times)),
        windspeed_10m=hourly.get("windspeed_10m", [None] * len(times)),
    )
    return Forecast(current=current_weather, hourly=series, timezone=data.get("timezone"))


def fetch_forecast(latitude: float,
                   longitude: float,
                   *,
                   timezone: str = "auto",
                   temperature_unit: str = "fahrenheit",
                   settings: Optional[config.Settings] = None,
                   ) -> Forecast:
    """Fetch current conditions plus the hourly series the surface model needs."""
    settings = settings or config.settings
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current_weather": "true",
        "hourly": ",".join(HOURLY_VARS),
        "temperature_unit": temperature_unit,
        "timezone": timezone,
    }

    logger.debug(
        "Requesting Open-Meteo forecast",
        extra={"latitude": round_coordinate(latitude), "longitude": round_coordinate(longitude)},
    )
    resp = session.get(settings.forecast_url, params=params, timeout=settings.http_timeout_seconds)
    resp.raise_for_status()
    return parse_forecast(resp.json())
