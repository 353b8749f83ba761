"""Single-slot JSON cache for the latest weather snapshot."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from pawcheck.domain import CacheHit, CacheMiss, CacheResult, WeatherSnapshot
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store")


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class CacheStore:
    """One JSON file holding the most recent snapshot, overwritten on save."""

    def __init__(
        self,
        path: Path | str,
        *,
        duration_minutes: float = 10,
        clock_ms: Callable[[], int] = _epoch_ms,
    ) -> None:
        self.path = Path(path)
        self.duration_minutes = duration_minutes
        self._clock_ms = clock_ms

    def load(self) -> CacheResult:
        """Read the cached snapshot; any read or parse problem is a miss."""
        if not self.path.exists():
            return CacheMiss("no cache file")
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cache file unreadable", extra={"path": str(self.path), "error": str(exc)})
            return CacheMiss(f"unreadable: {exc}")
        try:
            snapshot = WeatherSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Cache file invalid; ignoring",
                extra={"path": str(self.path), "errors": exc.error_count()},
            )
            return CacheMiss("invalid cache record")
        return CacheHit(snapshot)

    def save(self, snapshot: WeatherSnapshot) -> bool:
        """Overwrite the cache slot. Returns False (and logs) on I/O failure."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(snapshot.to_cache_json(), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write cache file", extra={"path": str(self.path), "error": str(exc)})
            return False
        return True

    def age_minutes(self, snapshot: WeatherSnapshot, now_ms: int | None = None) -> float:
        """Minutes elapsed since the snapshot was fetched."""
        now_ms = self._clock_ms() if now_ms is None else now_ms
        return (now_ms - snapshot.timestamp_ms) / 60000

    def is_fresh(self, snapshot: WeatherSnapshot, *, force_refresh: bool = False,
                 now_ms: int | None = None) -> bool:
        """True when the snapshot is young enough and no refresh was forced."""
        if force_refresh:
            return False
        return self.age_minutes(snapshot, now_ms) < self.duration_minutes

    def lookup(self, *, force_refresh: bool = False) -> WeatherSnapshot | None:
        """Return a usable cached snapshot, or None when a fetch is needed."""
        result = self.load()
        if isinstance(result, CacheMiss):
            logger.info(f"No usable cached data ({result.reason}). Fetching new data.")
            return None

        now_ms = self._clock_ms()
        age = self.age_minutes(result.snapshot, now_ms)
        if self.is_fresh(result.snapshot, force_refresh=force_refresh, now_ms=now_ms):
            logger.info(f"Using cached weather data (age: {age:.1f} min).")
            return result.snapshot
        if force_refresh:
            logger.info("Force refresh requested. Bypassing cache.")
            return None
        logger.info(f"Cached data is too old (age: {age:.1f} min). Fetching new data.")
        return None
