# racepace/pace/segments.py
"""
Segment buffer for an in-progress activity.

A buffer is a plain tuple of PaceSegment, oldest first. Every function here
returns a new tuple; nothing is mutated in place, so a recording session can
hold the buffer as an ordinary value.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, Optional

MAX_PACE_SEGMENTS = 30


@dataclass(frozen=True)
class PaceSegment:
    """One GPS sample: epoch milliseconds and cumulative meters at that instant."""

    timestamp: float
    distance: float


def now_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000.0


def append_segment(
        buffer: Iterable[PaceSegment],
        new_segment: PaceSegment,
        max_segments: int = MAX_PACE_SEGMENTS,
) -> tuple[PaceSegment, ...]:
    """
    Append `new_segment` and keep only the most recent `max_segments`.

    The caller is responsible for appending samples in time order.
    """
    updated = tuple(buffer) + (new_segment,)
    if len(updated) > max_segments:
        return updated[len(updated) - max_segments:]
    return updated


def trim_to_window(
        buffer: Iterable[PaceSegment],
        window_seconds: float,
        *,
        now: Optional[float] = None,
) -> tuple[PaceSegment, ...]:
    """Drop segments older than `now - window_seconds` (now in epoch ms)."""
    if now is None:
        now = now_ms()
    cutoff = now - window_seconds * 1000
    return tuple(s for s in buffer if s.timestamp >= cutoff)
