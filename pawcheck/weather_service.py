"""Turn location + Open-Meteo data into a cached WeatherSnapshot."""
from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

from pawcheck.cache_store import CacheStore
from pawcheck.data_sources import (
    Forecast,
    WeatherDataSource,
    describe_weather_code,
    find_hour_index,
    place_name,
)
from pawcheck.domain import AdvisoryConfig, WeatherSnapshot
from pawcheck.errors import ForecastDataError
from pawcheck.surface_model import round_half_up
from utils.logging_utils import get_tagged_logger, round_coordinate
logger = get_tagged_logger(__name__, tag="weather_service")

DISPLAY_FORMAT = "%m/%d/%Y %H:%M"


def _local_now() -> dt.datetime:
    return dt.datetime.now().astimezone()


def format_updated(moment: dt.datetime) -> str:
    """MM/DD/YYYY HH:MM, 24-hour, local time."""
    return moment.strftime(DISPLAY_FORMAT).replace(",", "")


def _hourly_value(values, index: int, name: str) -> float:
    try:
        value = values[index]
    except IndexError as exc:
        raise ForecastDataError(f"Hourly {name} has no entry at index {index}") from exc
    if value is None:
        raise ForecastDataError(f"Hourly {name} is missing at index {index}")
    return value


def build_snapshot(forecast: Forecast, *, city: str, latitude: float, fetched_at: dt.datetime) -> WeatherSnapshot:
    """Normalize a forecast into a snapshot stamped with the fetch time."""
    current = forecast.current
    idx = find_hour_index(forecast.hourly.time, current.time)

    feels = _hourly_value(forecast.hourly.apparent_temperature, idx, "apparent_temperature")
    solar = _hourly_value(forecast.hourly.shortwave_radiation, idx, "shortwave_radiation")
    wind = _hourly_value(forecast.hourly.windspeed_10m, idx, "windspeed_10m")

    return WeatherSnapshot(
        city=city,
        air_temp_f=round_half_up(current.temperature),
        feels_like_f=round_half_up(feels),
        solar_radiation_wm2=solar,
        wind_speed_mps=wind,
        is_daytime=current.is_day,
        description=describe_weather_code(current.weathercode, current.is_day),
        updated_display=format_updated(fetched_at),
        latitude=latitude,
        timestamp_ms=int(fetched_at.timestamp() * 1000),
    )


def fetch_weather(
    force_refresh: bool,
    *,
    config: AdvisoryConfig,
    cache: CacheStore,
    data_source: WeatherDataSource,
    now: Optional[Callable[[], dt.datetime]] = None,
) -> WeatherSnapshot:
    """
    Return a fresh-enough snapshot, fetching and caching a new one when needed.

    A cached snapshot younger than the cache duration is returned untouched
    unless `force_refresh` is set. Otherwise the device is located, its place
    name looked up, and one forecast request made. Location and network
    failures propagate to the caller.
    """
    cached = cache.lookup(force_refresh=force_refresh)
    if cached is not None:
        return cached

    location = data_source.locate()
    placemarks = data_source.reverse_geocode(location.latitude, location.longitude)
    city = place_name(placemarks, default=config.default_place_name)

    forecast = data_source.fetch_forecast(location.latitude, location.longitude, timezone="auto")
    fetched_at = (now or _local_now)()

    snapshot = build_snapshot(forecast, city=city, latitude=location.latitude, fetched_at=fetched_at)
    cached_ok = cache.save(snapshot)

    log_extra = {
        "api_time": forecast.current.time.isoformat(),
        "city": city,
        "latitude": round_coordinate(location.latitude),
    }
    if cached_ok:
        logger.info("New weather data fetched and cached", extra=log_extra)
    else:
        logger.warning("New weather data fetched but caching failed", extra=log_extra)
    logger.debug(f"Display updated time (from now): {snapshot.updated_display}")
    logger.debug(f"Cache written timestamp: {snapshot.timestamp_ms}")
    return snapshot
