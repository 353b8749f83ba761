"""Paw-safety classification from surface temperatures."""

from __future__ import annotations

from pawcheck.domain import Palette, SafetyStatus, SafetyTier, Thresholds

DEFAULT_THRESHOLDS = Thresholds()

LABELS = {
    SafetyTier.DANGER: "Ouch! Way Too Hot!",
    SafetyTier.WARNING: "Hot Surface, Caution",
    SafetyTier.COLD: "Too Cold – Paw Risk",
    SafetyTier.SAFE: "Happy Paws – Safe!",
}


def surface_tier(temp_f: int, *, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> SafetyTier:
    """Tier for a single temperature; danger wins over warning over cold."""
    if temp_f >= thresholds.hot_danger_f:
        return SafetyTier.DANGER
    if temp_f >= thresholds.hot_warning_f:
        return SafetyTier.WARNING
    if temp_f <= thresholds.cold_danger_f:
        return SafetyTier.COLD
    return SafetyTier.SAFE


def classify_safety(asphalt_f: int, concrete_f: int, *,
                    thresholds: Thresholds = DEFAULT_THRESHOLDS) -> SafetyStatus:
    """Classify by the hotter of the two surfaces."""
    tier = surface_tier(max(asphalt_f, concrete_f), thresholds=thresholds)
    return SafetyStatus(label=LABELS[tier], tier=tier)


def tier_color(tier: SafetyTier, palette: Palette) -> str:
    return {
        SafetyTier.DANGER: palette.danger,
        SafetyTier.WARNING: palette.warn,
        SafetyTier.COLD: palette.cold,
        SafetyTier.SAFE: palette.safe,
    }[tier]


def surface_value_color(temp_f: int, *, thresholds: Thresholds, palette: Palette) -> str:
    """Color of a per-surface reading; unremarkable temperatures use the foreground."""
    tier = surface_tier(temp_f, thresholds=thresholds)
    if tier is SafetyTier.SAFE:
        return palette.fg
    return tier_color(tier, palette)
