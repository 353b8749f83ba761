"""Device location lookup and reverse geocoding."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import requests

from pawcheck import config
from pawcheck.errors import LocationUnavailableError
from utils.logging_utils import get_tagged_logger, round_coordinate
logger = get_tagged_logger(__name__, tag="location")

session = requests.Session()

DEFAULT_PLACE_NAME = "Current Location"


@dataclass
class DeviceLocation:
    """Coordinates of the device plus where they came from."""
    latitude: float
    longitude: float
    source: str


@dataclass
class Placemark:
    """One reverse-geocoding match."""
    locality: Optional[str] = None
    sub_administrative_area: Optional[str] = None


def _valid_coordinates(lat: float, lon: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lon <= 180


def _from_ipinfo(settings: config.Settings) -> Optional[DeviceLocation]:
    """ipinfo.io reports coordinates as a "lat,lon" string."""
    resp = session.get(settings.ipinfo_url, timeout=settings.http_timeout_seconds)
    resp.raise_for_status()
    loc = resp.json().get("loc", "")
    if not loc or "," not in loc:
        return None
    lat_str, lon_str = loc.split(",", 1)
    lat, lon = float(lat_str), float(lon_str)
    if not _valid_coordinates(lat, lon):
        return None
    return DeviceLocation(latitude=lat, longitude=lon, source="ipinfo.io")


def _from_ip_api(settings: config.Settings) -> Optional[DeviceLocation]:
    """ip-api.com answers with status/lat/lon fields."""
    resp = session.get(
        settings.ip_api_url,
        params={"fields": "status,lat,lon"},
        timeout=settings.http_timeout_seconds,
    )
    resp.raise_for_status()
    data = resp.json()
    if data.get("status") == "fail":
        return None
    lat, lon = data.get("lat"), data.get("lon")
    if lat is None or lon is None or not _valid_coordinates(float(lat), float(lon)):
        return None
    return DeviceLocation(latitude=float(lat), longitude=float(lon), source="ip-api.com")


IP_PROVIDERS = (_from_ipinfo, _from_ip_api)


def locate_by_ip(*, settings: Optional[config.Settings] = None) -> DeviceLocation:
    """Resolve approximate device coordinates from the public IP address.

    Providers are tried in order; if every one fails or returns nothing usable,
    LocationUnavailableError is raised with the collected reasons.
    """
    settings = settings or config.settings
    failures: List[str] = []
    for provider in IP_PROVIDERS:
        try:
            location = provider(settings)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("IP geolocation provider failed", extra={"provider": provider.__name__, "error": str(exc)})
            failures.append(f"{provider.__name__}: {exc}")
            continue
        if location is not None:
            logger.info(
                "Resolved device location",
                extra={
                    "source": location.source,
                    "latitude": round_coordinate(location.latitude),
                    "longitude": round_coordinate(location.longitude),
                },
            )
            return location
        failures.append(f"{provider.__name__}: no coordinates")
    raise LocationUnavailableError("Could not resolve device location: " + "; ".join(failures))


def reverse_geocode(latitude: float, longitude: float, *,
                    settings: Optional[config.Settings] = None) -> List[Placemark]:
    """Look up place names for coordinates via Nominatim.

    Returns an empty list when Nominatim has no match. Network and HTTP errors
    propagate.
    """
    settings = settings or config.settings
    params = {
        "format": "jsonv2",
        "lat": latitude,
        "lon": longitude,
        "zoom": 10,
        "addressdetails": 1,
    }
    resp = session.get(
        settings.reverse_geocode_url,
        params=params,
        headers={"User-Agent": settings.user_agent},
        timeout=settings.http_timeout_seconds,
    )
    resp.raise_for_status()
    data = resp.json()
    if not data or "error" in data:
        return []
    address = data.get("address") or {}
    locality = (
        address.get("city")
        or address.get("town")
        or address.get("village")
        or address.get("hamlet")
    )
    return [Placemark(locality=locality, sub_administrative_area=address.get("county"))]


def place_name(placemarks: Sequence[Placemark], default: str = DEFAULT_PLACE_NAME) -> str:
    """First placemark's locality, else its sub-administrative area, else `default`."""
    if not placemarks:
        return default
    first = placemarks[0]
    return first.locality or first.sub_administrative_area or default
