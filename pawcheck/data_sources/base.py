"""Interfaces and helpers for weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol

from pawcheck.data_sources.location import DeviceLocation, Placemark
from pawcheck.data_sources.open_meteo_client import Forecast


class WeatherDataSource(Protocol):
    """Anything that can locate the device, name the place and fetch a forecast."""

    def locate(self) -> DeviceLocation:
        """Return the device coordinates."""
        ...

    def reverse_geocode(self, latitude: float, longitude: float) -> List[Placemark]:
        """Return placemarks for the coordinates, best match first."""
        ...

    def fetch_forecast(self, latitude: float, longitude: float, *, timezone: str = "auto") -> Forecast:
        """Return current conditions and the hourly series."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap three callables so they can be swapped for different backends."""

    locator: Callable[[], DeviceLocation]
    geocoder: Callable[..., List[Placemark]]
    forecaster: Callable[..., Forecast]

    def locate(self) -> DeviceLocation:
        """Delegate to the configured locator."""
        return self.locator()

    def reverse_geocode(self, latitude: float, longitude: float) -> List[Placemark]:
        """Delegate to the configured reverse geocoder."""
        return self.geocoder(latitude, longitude)

    def fetch_forecast(self, latitude: float, longitude: float, *, timezone: str = "auto") -> Forecast:
        """Delegate to the configured forecast callable."""
        return self.forecaster(latitude, longitude, timezone=timezone)
