"""Lay out the paw-check panel and run the fetch → estimate → classify pipeline."""

from __future__ import annotations

import datetime as dt
import html
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from pawcheck import config as config_module
from pawcheck.cache_store import CacheStore
from pawcheck.data_sources import WeatherDataSource, build_data_source
from pawcheck.domain import AdvisoryConfig, SafetyStatus, SurfaceEstimate, WeatherSnapshot
from pawcheck.safety import classify_safety, surface_value_color, tier_color
from pawcheck.surface_model import estimate_surface_temps
from pawcheck.weather_service import fetch_weather
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="presenter")

TITLE = "Paw-Check 🐾"
REFRESH_HINT = "Tap to refresh"


class FontWeight(str, Enum):
    REGULAR = "regular"
    SEMIBOLD = "semibold"
    BOLD = "bold"


class PanelText(BaseModel):
    """A single line of monospaced panel text."""
    text: str
    color: str
    size: int
    weight: FontWeight = FontWeight.REGULAR


class SurfaceColumn(BaseModel):
    """Label, reading and danger threshold for one surface."""
    label: PanelText
    value: PanelText
    threshold: PanelText


class WidgetPanel(BaseModel):
    """Everything needed to draw the panel, independent of the output medium."""
    background: str
    title: PanelText
    status: PanelText
    conditions: PanelText
    columns: List[SurfaceColumn]
    location: PanelText
    updated: PanelText
    hint: PanelText
    refresh_after: dt.datetime


class PawCheckResult(BaseModel):
    """Pipeline output handed to a host."""
    snapshot: WeatherSnapshot
    surface: SurfaceEstimate
    status: SafetyStatus
    panel: WidgetPanel


def _surface_column(label: str, temp_f: int, config: AdvisoryConfig) -> SurfaceColumn:
    palette, thresholds = config.palette, config.thresholds
    return SurfaceColumn(
        label=PanelText(text=label, color=palette.subtle, size=11),
        value=PanelText(
            text=f"{temp_f}°F",
            color=surface_value_color(temp_f, thresholds=thresholds, palette=palette),
            size=16,
            weight=FontWeight.SEMIBOLD,
        ),
        threshold=PanelText(text=f"Danger: {thresholds.hot_danger_f}°F", color=palette.subtle, size=10),
    )


def build_panel(
    snapshot: WeatherSnapshot,
    surface: SurfaceEstimate,
    status: SafetyStatus,
    *,
    config: AdvisoryConfig,
    now: Optional[dt.datetime] = None,
) -> WidgetPanel:
    """Compose the panel rows and schedule the next automatic refresh."""
    palette = config.palette
    # Aware local time, so `refresh_after` compares with render-time clocks.
    now = (now or dt.datetime.now()).astimezone()
    conditions = f"Outside: {snapshot.air_temp_f}°F (Feels {snapshot.feels_like_f}°F) | {snapshot.description}"

    return WidgetPanel(
        background=palette.bg,
        title=PanelText(text=TITLE, color=palette.fg, size=16, weight=FontWeight.BOLD),
        status=PanelText(
            text=status.label,
            color=tier_color(status.tier, palette),
            size=14,
            weight=FontWeight.SEMIBOLD,
        ),
        conditions=PanelText(text=conditions, color=palette.fg, size=13),
        columns=[
            _surface_column("ASPHALT SURFACE", surface.asphalt_f, config),
            _surface_column("CONCRETE SURFACE", surface.concrete_f, config),
        ],
        location=PanelText(text=f"📍 {snapshot.city}", color=palette.subtle, size=11),
        updated=PanelText(text=f"Updated {snapshot.updated_display}", color=palette.subtle, size=10),
        hint=PanelText(text=REFRESH_HINT, color=palette.subtle, size=10),
        refresh_after=now + dt.timedelta(minutes=config.refresh_interval_minutes),
    )


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def _ansi(text: PanelText, enabled: bool) -> str:
    if not enabled:
        return text.text
    hex_color = text.color.lstrip("#")
    if len(hex_color) == 3:
        hex_color = "".join(c * 2 for c in hex_color)
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    bold = "\x1b[1m" if text.weight is not FontWeight.REGULAR else ""
    return f"{bold}\x1b[38;2;{r};{g};{b}m{text.text}\x1b[0m"


def render_text(panel: WidgetPanel, *, color: bool = True) -> str:
    """Render the panel for a terminal, optionally with 24-bit ANSI colors."""
    left, right = panel.columns
    width = max(len(left.label.text), len(left.value.text), len(left.threshold.text)) + 4

    def pair(a: PanelText, b: PanelText) -> str:
        return _ansi(a, color) + " " * (width - len(a.text)) + _ansi(b, color)

    lines = [
        _ansi(panel.title, color),
        _ansi(panel.status, color),
        "",
        _ansi(panel.conditions, color),
        "",
        pair(left.label, right.label),
        pair(left.value, right.value),
        pair(left.threshold, right.threshold),
        "",
        _ansi(panel.location, color),
        f"{_ansi(panel.updated, color)}  {_ansi(panel.hint, color)}",
    ]
    return "\n".join(lines)


_WEIGHTS = {FontWeight.REGULAR: 400, FontWeight.SEMIBOLD: 600, FontWeight.BOLD: 700}


def _span(text: PanelText, tag: str = "div") -> str:
    style = f"color:{text.color};font-size:{text.size}px;font-weight:{_WEIGHTS[text.weight]}"
    return f'<{tag} style="{style}">{html.escape(text.text)}</{tag}>'


def render_html(panel: WidgetPanel, *, refresh_url: str, now: Optional[dt.datetime] = None) -> str:
    """Render a standalone HTML page that reloads itself at `refresh_after`."""
    now = (now or dt.datetime.now()).astimezone()
    seconds = max(1, int((panel.refresh_after - now).total_seconds()))
    columns = "".join(
        '<div class="col">' + _span(c.label) + _span(c.value) + _span(c.threshold) + "</div>"
        for c in panel.columns
    )
    hint = (
        f'<a href="{html.escape(refresh_url, quote=True)}" '
        f'style="color:{panel.hint.color};font-size:{panel.hint.size}px">{html.escape(panel.hint.text)}</a>'
    )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        f'<meta http-equiv="refresh" content="{seconds}">'
        f"<title>{html.escape(panel.title.text)}</title>"
        "<style>"
        f"body{{background:{panel.background};font-family:ui-monospace,Menlo,monospace;"
        "padding:10px 15px;max-width:360px}"
        ".row{display:flex;justify-content:space-between;gap:15px;margin:6px 0}"
        ".col{display:flex;flex-direction:column;gap:2px}"
        "</style></head><body>"
        + _span(panel.title)
        + _span(panel.status)
        + _span(panel.conditions)
        + f'<div class="row">{columns}</div>'
        + _span(panel.location)
        + f'<div class="row">{_span(panel.updated)}{hint}</div>'
        + "</body></html>\n"
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def build_paw_check(
    parameter: Optional[str] = None,
    *,
    settings: Optional[config_module.Settings] = None,
    config: Optional[AdvisoryConfig] = None,
    cache: Optional[CacheStore] = None,
    data_source: Optional[WeatherDataSource] = None,
    now: Optional[dt.datetime] = None,
) -> PawCheckResult:
    """
    Run one invocation: cached-or-fresh weather, surface estimate, status, panel.

    `parameter` is the host's invocation parameter; the force-refresh sentinel
    bypasses the cache. Fetch failures are not handled here.
    """
    settings = settings or config_module.settings
    config = config or AdvisoryConfig.from_settings(settings)
    cache = cache or CacheStore(settings.cache_path, duration_minutes=config.cache_duration_minutes)
    data_source = data_source or build_data_source(settings)

    force_refresh = parameter == config.force_refresh_sentinel
    if force_refresh:
        logger.info("Force refresh requested via invocation parameter")

    snapshot = fetch_weather(
        force_refresh,
        config=config,
        cache=cache,
        data_source=data_source,
        now=(lambda: now) if now is not None else None,
    )
    surface = estimate_surface_temps(
        snapshot.air_temp_f,
        snapshot.solar_radiation_wm2,
        snapshot.wind_speed_mps,
        snapshot.is_daytime,
        model=config.surface_model,
        thresholds=config.thresholds,
    )
    status = classify_safety(surface.asphalt_f, surface.concrete_f, thresholds=config.thresholds)
    logger.debug(
        "Computed paw check",
        extra={"asphalt_f": surface.asphalt_f, "concrete_f": surface.concrete_f, "tier": status.tier.value},
    )

    panel = build_panel(snapshot, surface, status, config=config, now=now)
    return PawCheckResult(snapshot=snapshot, surface=surface, status=status, panel=panel)
