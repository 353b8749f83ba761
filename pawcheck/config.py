"""Runtime configuration pulled from environment variables via pydantic."""
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


def _default_cache_dir() -> Path:
    """User documents folder when present, otherwise the home directory."""
    documents = Path.home() / "Documents"
    return documents if documents.is_dir() else Path.home()


class Settings(BaseSettings):
    """Environment-driven configuration for the Paw-Check hosts."""
    model_config = SettingsConfigDict(env_prefix="PAWCHECK_", extra="ignore", frozen=True)

    cache_dir: Path = Field(default_factory=_default_cache_dir)
    cache_file: str = "pawcheck_final.json"
    cache_duration_minutes: float = 10
    refresh_interval_minutes: float = 10

    # Fixed coordinates skip IP geolocation when both are set.
    latitude: float | None = None
    longitude: float | None = None

    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    ipinfo_url: str = "https://ipinfo.io/json"
    ip_api_url: str = "http://ip-api.com/json/"
    reverse_geocode_url: str = "https://nominatim.openstreetmap.org/reverse"
    user_agent: str = "pawcheck/1.0 (personal weather widget)"
    http_timeout_seconds: float = 10.0

    log_level: str = "INFO"

    @field_validator("forecast_url", "ipinfo_url", "reverse_geocode_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @model_validator(mode="after")
    def check_coordinates_pair(self) -> "Settings":
        """Latitude and longitude only make sense together."""
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self

    @property
    def cache_path(self) -> Path:
        """Full path of the single cache record."""
        return Path(self.cache_dir).expanduser() / self.cache_file

    @property
    def has_fixed_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
