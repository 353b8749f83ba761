"""Factory helpers for choosing how the device location is resolved."""

from __future__ import annotations

from functools import partial

from pawcheck import config
from pawcheck.data_sources.base import CallableWeatherDataSource, WeatherDataSource
from pawcheck.data_sources.location import DeviceLocation, locate_by_ip, reverse_geocode
from pawcheck.data_sources.open_meteo_client import fetch_forecast
from utils.logging_utils import get_tagged_logger, round_coordinate

logger = get_tagged_logger(__name__, tag="data_sources/factory")


def _fixed_locator(latitude: float, longitude: float):
    location = DeviceLocation(latitude=latitude, longitude=longitude, source="settings")
    return lambda: location


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Open-Meteo forecasts with either configured coordinates or IP geolocation.

    Every HTTP callable is bound to `settings`, so its URLs, user agent and
    timeout apply to the whole data source.
    """
    settings = settings or config.settings

    if settings.latitude is not None and settings.longitude is not None:
        logger.info(
            "Using configured coordinates",
            extra={"latitude": round_coordinate(settings.latitude), "longitude": round_coordinate(settings.longitude)},
        )
        locator = _fixed_locator(settings.latitude, settings.longitude)
    else:
        logger.info("Using IP geolocation")
        locator = partial(locate_by_ip, settings=settings)

    return CallableWeatherDataSource(
        locator=locator,
        geocoder=partial(reverse_geocode, settings=settings),
        forecaster=partial(fetch_forecast, settings=settings),
    )
