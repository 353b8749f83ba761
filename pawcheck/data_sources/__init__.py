"""Data sources for location, place names and Open-Meteo forecasts."""

from .base import CallableWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .location import DeviceLocation, Placemark, locate_by_ip, place_name, reverse_geocode
from .open_meteo_client import (
    CurrentWeather,
    Forecast,
    HourlySeries,
    describe_weather_code,
    fetch_forecast,
    find_hour_index,
)

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "CallableWeatherDataSource",
    "DeviceLocation",
    "Placemark",
    "locate_by_ip",
    "place_name",
    "reverse_geocode",
    "CurrentWeather",
    "Forecast",
    "HourlySeries",
    "describe_weather_code",
    "fetch_forecast",
    "find_hour_index",
]
