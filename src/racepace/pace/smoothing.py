# racepace/pace/smoothing.py
"""
Exponential moving average for display pace.
"""

from __future__ import annotations

from typing import Optional

MIN_SMOOTHING_FACTOR = 0.1
MAX_SMOOTHING_FACTOR = 0.9


def clamp_smoothing_factor(smoothing_factor: float) -> float:
    return max(MIN_SMOOTHING_FACTOR, min(MAX_SMOOTHING_FACTOR, smoothing_factor))


def smooth_pace(
        current_pace: float,
        previous_smoothed: Optional[float],
        smoothing_factor: float,
) -> float:
    """
    Blend `current_pace` into `previous_smoothed`.

    smoothed = alpha * current + (1 - alpha) * previous

    Lower alpha gives a steadier display, higher alpha reacts faster. Alpha is
    clamped to [0.1, 0.9]. With no previous value the current pace is returned
    as-is. The caller keeps the returned value and passes it back next time.
    """
    alpha = clamp_smoothing_factor(smoothing_factor)

    if previous_smoothed is None:
        return current_pace

    return alpha * current_pace + (1 - alpha) * previous_smoothed
