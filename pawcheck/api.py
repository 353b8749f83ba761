"""HTTP API exposing the paw check as JSON."""

from typing import Optional

from fastapi import APIRouter, Query

from .config import settings
from .data_sources import build_data_source
from .presenter import PawCheckResult, build_paw_check
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="pawcheck/api")

router = APIRouter()
DATA_SOURCE = build_data_source(settings)


def run_check(parameter: Optional[str]) -> PawCheckResult:
    """Run the pipeline with the server's shared data source."""
    logger.info(f"Paw check requested (parameter={parameter!r})")
    return build_paw_check(parameter, settings=settings, data_source=DATA_SOURCE)


@router.get("/paw-check", response_model=PawCheckResult)
def get_paw_check(
    parameter: Optional[str] = Query(default=None, description="Invocation parameter; 'force_refresh' bypasses the cache."),
):
    """Current snapshot, surface estimate, status and panel layout."""
    return run_check(parameter)
