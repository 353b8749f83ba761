import pytest

from pawcheck.domain import SurfaceEstimate, SurfaceModel
from pawcheck.surface_model import estimate_surface_temps, round_half_up, surface_rise


def test_hot_sunny_day_scenario():
    est = estimate_surface_temps(100, 900, 2, True)
    # 100 + 70 * 0.9 * (1 - 0.5 * 2/15) = 158.8
    assert est.asphalt_f == 159
    # 100 + 30 * 0.9 * (1 - 0.5 * 2/15) = 125.2
    assert est.concrete_f == 125


def test_cold_night_scenario():
    assert estimate_surface_temps(20, 0, 5, False) == SurfaceEstimate(asphalt_f=20, concrete_f=20)


def test_mild_no_sun_scenario():
    assert estimate_surface_temps(75, 0, 3, True) == SurfaceEstimate(asphalt_f=75, concrete_f=75)
    assert estimate_surface_temps(75, 0, 12, False) == SurfaceEstimate(asphalt_f=75, concrete_f=75)


@pytest.mark.parametrize("air", [-10, 0, 35, 60, 95, 120])
@pytest.mark.parametrize("solar", [0, 400, 1100])
@pytest.mark.parametrize("wind", [0, 8, 30])
def test_night_tracks_air(air, solar, wind):
    est = estimate_surface_temps(air, solar, wind, False)
    assert est.asphalt_f == est.concrete_f == air


def test_solar_floor_is_exclusive():
    assert estimate_surface_temps(80, 50, 0, True) == SurfaceEstimate(asphalt_f=80, concrete_f=80)
    assert estimate_surface_temps(80, 51, 0, True).asphalt_f > 80


def test_solar_normalization_saturates():
    assert estimate_surface_temps(70, 1000, 0, True) == estimate_surface_temps(70, 1500, 0, True)
    assert estimate_surface_temps(70, 1000, 0, True).asphalt_f == 140


def test_wind_cancels_at_most_half():
    calm = surface_rise(1000, 0, True)[0]
    gale = surface_rise(1000, 40, True)[0]
    assert gale == pytest.approx(calm / 2)
    assert surface_rise(1000, 15, True) == surface_rise(1000, 40, True)


def test_absolute_cap():
    est = estimate_surface_temps(130, 1000, 0, True)
    assert est.asphalt_f == 180
    assert est.concrete_f == 160


@pytest.mark.parametrize("air", [36, 50, 70, 90, 105])
@pytest.mark.parametrize("solar", [60, 200, 500, 800, 1000])
@pytest.mark.parametrize("wind", [0, 3, 10, 20])
def test_concrete_rise_stays_below_asphalt(air, solar, wind):
    est = estimate_surface_temps(air, solar, wind, True)
    if est.asphalt_f > air:
        assert est.concrete_f - air <= 0.7 * (est.asphalt_f - air)


def test_concrete_clamped_when_model_would_overtake_asphalt():
    model = SurfaceModel(max_asphalt_rise_f=20, max_concrete_rise_f=40)
    asphalt_rise, concrete_rise = surface_rise(1000, 0, True, model=model)
    assert asphalt_rise == 20
    assert concrete_rise == pytest.approx(14)


def test_daylight_floor_only_above_cold_threshold():
    # a negative rise can only come from a custom model; the floor lifts it back to air
    model = SurfaceModel(max_asphalt_rise_f=-10, max_concrete_rise_f=-5)
    assert estimate_surface_temps(60, 800, 0, True, model=model) == SurfaceEstimate(asphalt_f=60, concrete_f=60)
    below = estimate_surface_temps(30, 800, 0, True, model=model)
    assert below.asphalt_f < 30


def test_deterministic():
    assert estimate_surface_temps(88, 640, 4.4, True) == estimate_surface_temps(88, 640, 4.4, True)


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (158.8, 159)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
