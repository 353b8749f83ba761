"""
Logging setup shared by the Paw-Check hosts (CLI and HTTP server).

Usage
-----
In an entrypoint:

    from utils.logging_utils import setup_logging

    def main() -> None:
        setup_logging(level="INFO", job_name="pawcheck")
        ...

In a module:

    from utils.logging_utils import get_tagged_logger

    logger = get_tagged_logger(__name__, tag="cache_store")
    logger.info("Using cached weather data")

Every record carries a `tag` (component) and a `job_name` (host process),
and DEBUG/INFO go to stdout while WARNING and above go to stderr.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Mapping, Optional


# Early records (before setup_logging runs) still get timestamps and levels.
BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
BOOTSTRAP_DATEFMT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=logging.INFO,
    format=BOOTSTRAP_FORMAT,
    datefmt=BOOTSTRAP_DATEFMT,
)

DEFAULT_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(job_name)s | %(tag)s | %(name)s | %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_JOB_NAME = "pawcheck"

_CONFIGURED: bool = False


class MaxLevelFilter(logging.Filter):
    """Pass only records at or below `max_level`."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        return record.levelno <= self.max_level


class EnsureTagFilter(logging.Filter):
    """
    Guarantee a `tag` attribute on every record.

    Records coming through a tagged LoggerAdapter keep their tag; plain
    loggers (uvicorn, requests, ...) get the last segment of their name.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            logger_name = getattr(record, "name", "")
            record.tag = logger_name.split(".")[-1] if logger_name else "-"
        return True


class JobNameFilter(logging.Filter):
    """Stamp the host process name (e.g. "pawcheck-cli") on every record."""

    def __init__(self, job_name: Optional[str] = None) -> None:
        super().__init__()
        self._job_name = job_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "job_name"):
            record.job_name = self._job_name
        return True


def build_logging_config(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = DEFAULT_JOB_NAME,
) -> Mapping[str, Any]:
    """
    Build the dictConfig mapping used by `setup_logging`.

    Parameters
    ----------
    level:
        Root logger level, name or number.
    log_format:
        Formatter pattern; may reference `%(tag)s` and `%(job_name)s`.
    date_format:
        Formatter pattern for `%(asctime)s`.
    job_name:
        Name of the host process, injected as `job_name`.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "ensure_tag": {"()": EnsureTagFilter},
            "job_name": {"()": JobNameFilter, "job_name": job_name},
            "stdout_max_info": {
                "()": MaxLevelFilter,
                "max_level": logging.INFO,
            },
        },
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name", "stdout_max_info"],
                "level": "DEBUG",
                "stream": "ext://sys.stdout",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name"],
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["stdout", "stderr"],
        },
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    job_name: Optional[str] = DEFAULT_JOB_NAME,
    override_existing: bool = False,
) -> None:
    """
    Configure process-wide logging once.

    Repeated calls are no-ops unless `override_existing` is True, so both the
    CLI and the server entrypoint can call it unconditionally.
    """
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    logging.config.dictConfig(build_logging_config(level=level, job_name=job_name))
    _CONFIGURED = True


def get_tagged_logger(
    name: str,
    *,
    tag: Optional[str] = None,
) -> logging.LoggerAdapter:
    """
    Return a LoggerAdapter whose records always carry `tag`.

    `tag` defaults to the last segment of `name`
    ("pawcheck.cache_store" -> "cache_store").
    """
    base_logger = logging.getLogger(name)
    if tag is None:
        tag = name.split(".")[-1]
    return logging.LoggerAdapter(base_logger, {"tag": tag})


def round_coordinate(value: float | None, places: int = 2) -> float | None:
    """Coarsen a latitude/longitude before it is written to a log line.

    Two decimals is roughly a 1 km grid, enough to debug which forecast cell
    was requested without logging the user's exact position.
    """
    if value is None:
        return None
    return round(float(value), places)
