import json

import pytest

from pawcheck.cache_store import CacheStore
from pawcheck.domain import CacheHit, CacheMiss, WeatherSnapshot

NOW_MS = 1_720_000_000_000


def make_snapshot(**overrides) -> WeatherSnapshot:
    base = {
        "city": "Phoenix",
        "air_temp_f": 101,
        "feels_like_f": 99,
        "solar_radiation_wm2": 870.0,
        "wind_speed_mps": 7.2,
        "is_daytime": True,
        "description": "Mostly Clear",
        "updated_display": "07/01/2024 14:05",
        "latitude": 33.4484,
        "timestamp_ms": NOW_MS,
    }
    base.update(overrides)
    return WeatherSnapshot(**base)


@pytest.fixture
def store(tmp_path):
    return CacheStore(tmp_path / "docs" / "pawcheck_final.json", duration_minutes=10, clock_ms=lambda: NOW_MS)


def test_missing_file_is_miss(store):
    result = store.load()
    assert isinstance(result, CacheMiss)


def test_save_then_load_round_trip(store):
    snapshot = make_snapshot()
    assert store.save(snapshot) is True
    result = store.load()
    assert isinstance(result, CacheHit)
    assert result.snapshot == snapshot


def test_cache_file_uses_camel_case_keys(store):
    store.save(make_snapshot())
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert set(data) == {
        "city", "airTempF", "feelsLikeF", "solarRadiationWm2", "windSpeedMps",
        "isDaytime", "description", "updatedDisplay", "latitude", "timestampMs",
    }


def test_save_overwrites_single_slot(store):
    store.save(make_snapshot(city="Tucson"))
    store.save(make_snapshot(city="Flagstaff"))
    assert store.load().snapshot.city == "Flagstaff"
    assert len(list(store.path.parent.iterdir())) == 1


def test_garbage_is_miss(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    assert isinstance(store.load(), CacheMiss)


def test_partial_record_is_miss(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text(json.dumps({"city": "Phoenix", "airTempF": 100}), encoding="utf-8")
    assert isinstance(store.load(), CacheMiss)


def test_undecodable_bytes_are_miss(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(b"\xff\xfe\x00garbage")
    assert isinstance(store.load(), CacheMiss)


def test_save_failure_returns_false(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    store = CacheStore(blocker / "pawcheck_final.json")
    assert store.save(make_snapshot()) is False


def test_age_minutes(store):
    snapshot = make_snapshot(timestamp_ms=NOW_MS - 5 * 60_000)
    assert store.age_minutes(snapshot) == pytest.approx(5.0)
    assert store.age_minutes(snapshot, now_ms=NOW_MS + 60_000) == pytest.approx(6.0)


@pytest.mark.parametrize(
    "age_minutes, force, expected",
    [
        (0, False, True),
        (9.9, False, True),
        (10, False, False),
        (45, False, False),
        (0, True, False),
    ],
)
def test_is_fresh(store, age_minutes, force, expected):
    snapshot = make_snapshot(timestamp_ms=NOW_MS - int(age_minutes * 60_000))
    assert store.is_fresh(snapshot, force_refresh=force) is expected


def test_lookup_returns_fresh_snapshot(store):
    snapshot = make_snapshot(timestamp_ms=NOW_MS - 3 * 60_000)
    store.save(snapshot)
    assert store.lookup() == snapshot


def test_lookup_skips_stale_or_forced(store):
    store.save(make_snapshot(timestamp_ms=NOW_MS - 11 * 60_000))
    assert store.lookup() is None
    store.save(make_snapshot(timestamp_ms=NOW_MS))
    assert store.lookup(force_refresh=True) is None


def test_lookup_defers_to_is_fresh(store, monkeypatch):
    stale = make_snapshot(timestamp_ms=NOW_MS - 60 * 60_000)
    store.save(stale)
    seen = []

    def always_fresh(snapshot, *, force_refresh=False, now_ms=None):
        seen.append((force_refresh, now_ms))
        return True

    monkeypatch.setattr(store, "is_fresh", always_fresh)
    assert store.lookup() == stale
    assert seen == [(False, NOW_MS)]


def test_lookup_without_file(store):
    assert store.lookup() is None
