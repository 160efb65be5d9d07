# racepace/pace/current.py
"""
Windowed (instantaneous) pace from the segment buffer.

The estimate uses the oldest and newest segments inside the last
`window_seconds`. When fewer than two samples fall in the window (activity
start, GPS gaps) it falls back to the whole buffer, as long as the buffer
does not span more than twice the window.
"""

from __future__ import annotations

from typing import Optional, Sequence

from racepace.pace.bounds import within_pace_bounds
from racepace.pace.segments import PaceSegment, now_ms

# Shortest interval (s) a pace may be derived from.
MIN_TIME_DELTA_S = 5.0


def _pace_between(
        oldest: PaceSegment,
        newest: PaceSegment,
        min_segment_distance: float,
) -> Optional[float]:
    distance_delta = newest.distance - oldest.distance
    time_delta_s = (newest.timestamp - oldest.timestamp) / 1000

    # Negative deltas fall below any positive floor.
    if distance_delta < min_segment_distance:
        return None
    if time_delta_s < MIN_TIME_DELTA_S:
        return None
    if distance_delta <= 0:
        return None

    return (time_delta_s / distance_delta) * 1000


def calculate_current_pace(
        segments: Sequence[PaceSegment],
        window_seconds: float,
        min_segment_distance: float,
        *,
        now: Optional[float] = None,
) -> Optional[float]:
    """
    Return the current pace in seconds/km, or None if the data cannot support one.

    `now` is epoch milliseconds and defaults to the wall clock.
    """
    if len(segments) < 2:
        return None

    if now is None:
        now = now_ms()
    window_ms = window_seconds * 1000
    cutoff = now - window_ms

    window_segments = [s for s in segments if s.timestamp >= cutoff]

    if len(window_segments) < 2:
        oldest = segments[0]
        newest = segments[-1]
        timespan = newest.timestamp - oldest.timestamp
        if timespan > window_ms * 2 or timespan < MIN_TIME_DELTA_S * 1000:
            return None
        return _pace_between(oldest, newest, min_segment_distance)

    pace = _pace_between(window_segments[0], window_segments[-1], min_segment_distance)
    if pace is None or not within_pace_bounds(pace):
        return None
    return pace
