# racepace/formats/pace.py
"""
Pace display formatting.

All values coming in are seconds per kilometer. Conversion to miles happens
here and only here; everything upstream stays metric.
"""

from __future__ import annotations

import math
from typing import Optional

from racepace.errors import UnitsError
from racepace.pace.bounds import within_pace_bounds

METRIC = "metric"
IMPERIAL = "imperial"
UNIT_SYSTEMS = (METRIC, IMPERIAL)

PLACEHOLDER = "--:--"

KM_TO_MI = 0.621371


def parse_units(value: Optional[str]) -> str:
    """Normalize a unit-system name; raises UnitsError for anything unknown."""
    s = (value or "").strip().lower()
    if s not in UNIT_SYSTEMS:
        raise UnitsError(f"Unknown unit system: {value!r} (expected 'metric' or 'imperial')")
    return s


def pace_unit_label(units: str = METRIC) -> str:
    return "/mi" if units == IMPERIAL else "/km"


def format_pace_display(
        pace: Optional[float],
        placeholder: str = PLACEHOLDER,
        units: str = METRIC,
) -> str:
    """
    Format a pace (s/km) as "M:SS" for display.

    Returns `placeholder` for missing, non-finite or out-of-range values. The
    range check is repeated here even if the caller already validated.
    Imperial output is seconds per mile.
    """
    if pace is None or not math.isfinite(pace):
        return placeholder

    if not within_pace_bounds(pace):
        return placeholder

    display_seconds = pace
    if units == IMPERIAL:
        display_seconds = pace / KM_TO_MI

    minutes = math.floor(display_seconds / 60)
    seconds = math.floor(display_seconds % 60)
    return f"{minutes}:{seconds:02d}"


def format_pace_with_unit(
        pace: Optional[float],
        units: str = METRIC,
        placeholder: str = PLACEHOLDER,
) -> str:
    """Like format_pace_display but with a unit suffix, e.g. "5:42 /km"."""
    text = format_pace_display(pace, placeholder=placeholder, units=units)
    if text == placeholder:
        return text
    return f"{text} {pace_unit_label(units)}"


def format_pace_from_speed(
        speed_mps: Optional[float],
        units: str = METRIC,
        placeholder: str = PLACEHOLDER,
) -> str:
    """Format a speed in m/s as pace."""
    if speed_mps is None or not math.isfinite(speed_mps) or speed_mps <= 0:
        return placeholder
    return format_pace_display(1000.0 / speed_mps, placeholder=placeholder, units=units)
