# racepace/pace/average.py
"""
Whole-activity average pace.
"""

from __future__ import annotations

from typing import Optional

from racepace.pace.bounds import within_pace_bounds

DEFAULT_MIN_DISTANCE_M = 50.0


def calculate_average_pace(
        duration_seconds: float,
        distance_meters: float,
        min_distance: float = DEFAULT_MIN_DISTANCE_M,
) -> Optional[float]:
    """Average pace in seconds/km, or None below `min_distance` / under 1 s."""
    if distance_meters < min_distance or duration_seconds < 1:
        return None
    if distance_meters <= 0:
        return None

    pace = (duration_seconds / distance_meters) * 1000
    if not within_pace_bounds(pace):
        return None
    return pace
