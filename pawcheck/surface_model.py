"""Heuristic pavement temperature estimate from air, sun and wind.

Asphalt in direct sun runs 40-70°F above air temperature and concrete 10-30°F.
The rise scales with shortwave radiation (1000 W/m² is roughly peak sun) and is
damped by wind, which can cancel at most half of it. Below a small solar floor,
or at night, both surfaces simply track the air.
"""

from __future__ import annotations

import math

from pawcheck.domain import SurfaceEstimate, SurfaceModel, Thresholds

DEFAULT_MODEL = SurfaceModel()
DEFAULT_THRESHOLDS = Thresholds()


def round_half_up(value: float) -> int:
    """Round .5 toward +infinity, unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


def surface_rise(solar_radiation_wm2: float, wind_speed_mps: float, is_daytime: bool,
                 *, model: SurfaceModel = DEFAULT_MODEL) -> tuple[float, float]:
    """Return (asphalt_rise, concrete_rise) in °F above air temperature."""
    if not is_daytime or solar_radiation_wm2 <= model.min_solar_wm2:
        return 0.0, 0.0

    normalized_solar = min(solar_radiation_wm2 / model.peak_solar_wm2, 1)
    normalized_wind = min(wind_speed_mps / model.max_cooling_wind_mps, 1)
    wind_reduction = 1 - model.max_wind_reduction * normalized_wind

    asphalt_rise = model.max_asphalt_rise_f * normalized_solar * wind_reduction
    concrete_rise = model.max_concrete_rise_f * normalized_solar * wind_reduction

    # concrete stays clearly cooler than asphalt under real sun
    if asphalt_rise > 0 and concrete_rise >= asphalt_rise:
        concrete_rise = asphalt_rise * model.concrete_to_asphalt_ratio
    return asphalt_rise, concrete_rise


def estimate_surface_temps(air_temp_f: float, solar_radiation_wm2: float, wind_speed_mps: float,
                           is_daytime: bool, *, model: SurfaceModel = DEFAULT_MODEL,
                           thresholds: Thresholds = DEFAULT_THRESHOLDS) -> SurfaceEstimate:
    """Estimate asphalt and concrete temperatures (°F)."""
    asphalt_rise, concrete_rise = surface_rise(solar_radiation_wm2, wind_speed_mps, is_daytime, model=model)

    asphalt = min(round_half_up(air_temp_f + asphalt_rise), model.max_surface_f)
    concrete = min(round_half_up(air_temp_f + concrete_rise), model.max_surface_f)

    # in non-freezing daylight a surface never reads colder than the air
    if is_daytime and air_temp_f > thresholds.cold_danger_f:
        floor = round_half_up(air_temp_f)
        asphalt = max(asphalt, floor)
        concrete = max(concrete, floor)

    return SurfaceEstimate(asphalt_f=asphalt, concrete_f=concrete)
