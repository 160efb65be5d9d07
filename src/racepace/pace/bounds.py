# racepace/pace/bounds.py
"""
Plausibility range for pace values (seconds per kilometer).

Anything faster than 1:00/km or slower than 30:00/km is treated as a GPS
artifact rather than a real pace.
"""

from __future__ import annotations

import math

MIN_PACE_S_PER_KM = 60.0
MAX_PACE_S_PER_KM = 1800.0


def within_pace_bounds(pace: float) -> bool:
    """True if `pace` is finite and inside [MIN_PACE_S_PER_KM, MAX_PACE_S_PER_KM]."""
    if not math.isfinite(pace):
        return False
    return MIN_PACE_S_PER_KM <= pace <= MAX_PACE_S_PER_KM
