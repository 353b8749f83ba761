"""Domain vocabulary and strict schemas for the paw-safety advisory.

This module holds the records that flow through the pipeline (weather
snapshot, surface estimate, safety status) and the immutable configuration
bundle passed into each component. No interpretation logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from pawcheck.config import Settings


class _FrozenModel(BaseModel):
    """Base model that rejects unknown fields and forbids mutation."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class WeatherSnapshot(_FrozenModel):
    """One fetched-or-cached weather record.

    Serialized with camelCase keys (``airTempF``, ``timestampMs`` ...), which is
    the shape of the cache file. Every field is required, so a partial record
    never validates.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    city: str
    air_temp_f: int
    feels_like_f: int
    solar_radiation_wm2: float
    wind_speed_mps: float
    is_daytime: bool
    description: str
    updated_display: str
    latitude: float
    timestamp_ms: int

    def to_cache_json(self) -> str:
        """Serialize to the cache file representation."""
        return self.model_dump_json(by_alias=True)


class SurfaceEstimate(_FrozenModel):
    """Estimated pavement temperatures (°F)."""
    asphalt_f: int
    concrete_f: int


class SafetyTier(str, Enum):
    """Discrete paw-safety classification."""
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    COLD = "cold"


class SafetyStatus(_FrozenModel):
    """Display label plus tier for the hottest surface."""
    label: str
    tier: SafetyTier


class Thresholds(_FrozenModel):
    """Surface temperature thresholds (°F).

    Dogs can burn paw pads in about a minute at 120°F and faster past 130°F;
    at or below 35°F frostbite becomes the concern.
    """
    hot_warning_f: int = 120
    hot_danger_f: int = 130
    cold_danger_f: int = 35


class Palette(_FrozenModel):
    """Panel colors as hex strings."""
    bg: str = "#101010"
    fg: str = "#ffffff"
    safe: str = "#4CD964"
    warn: str = "#FF9500"
    danger: str = "#FF3B30"
    cold: str = "#5AC8FA"
    subtle: str = "#777777"


class SurfaceModel(_FrozenModel):
    """Constants for the empirical pavement heating heuristic."""
    max_asphalt_rise_f: float = 70.0
    max_concrete_rise_f: float = 30.0
    peak_solar_wm2: float = 1000.0
    min_solar_wm2: float = 50.0
    max_cooling_wind_mps: float = 15.0
    max_wind_reduction: float = 0.5
    concrete_to_asphalt_ratio: float = 0.7
    max_surface_f: int = 180


class AdvisoryConfig(_FrozenModel):
    """Everything the pipeline components need, fixed for one invocation."""
    thresholds: Thresholds = Thresholds()
    palette: Palette = Palette()
    surface_model: SurfaceModel = SurfaceModel()
    cache_duration_minutes: float = 10
    refresh_interval_minutes: float = 10
    force_refresh_sentinel: str = "force_refresh"
    default_place_name: str = "Current Location"

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdvisoryConfig":
        """Take the environment-tunable timings from Settings; thresholds stay fixed."""
        return cls(
            cache_duration_minutes=settings.cache_duration_minutes,
            refresh_interval_minutes=settings.refresh_interval_minutes,
        )


@dataclass(frozen=True)
class CacheHit:
    """Cache lookup that produced a valid snapshot."""
    snapshot: WeatherSnapshot


@dataclass(frozen=True)
class CacheMiss:
    """Cache lookup with nothing usable; `reason` is for logs."""
    reason: str


CacheResult = CacheHit | CacheMiss
