# racepace/recording/session.py
"""
Recording session: owns the state of one in-progress activity.

The pace functions are pure. A session holds the two pieces of state they
need between location updates (the segment buffer and the previous smoothed
pace) and threads them through append -> current pace -> smoothing ->
formatting on every update. Create one session per activity; nothing is
shared between sessions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from racepace.config import PaceSettings
from racepace.formats.pace import format_pace_display
from racepace.pace.current import calculate_current_pace
from racepace.pace.segments import PaceSegment, append_segment, now_ms
from racepace.pace.smoothing import smooth_pace
from racepace.profiles import DEFAULT_GPS_PROFILE, GpsProfile
from racepace.recording.fixes import FilterStats, GpsFix, filter_fix

# Time since last fix (ms) below which signal is "good", then "weak", then "lost".
GPS_GOOD_THRESHOLD_MS = 10_000
GPS_WEAK_THRESHOLD_MS = 30_000


def gps_signal_status(last_fix_ms: Optional[float], now: Optional[float] = None) -> str:
    """Classify GPS signal as "good", "weak" or "lost" by the age of the last fix."""
    if last_fix_ms is None:
        return "lost"
    if now is None:
        now = now_ms()
    age = now - last_fix_ms
    if age < GPS_GOOD_THRESHOLD_MS:
        return "good"
    if age < GPS_WEAK_THRESHOLD_MS:
        return "weak"
    return "lost"


@dataclass(frozen=True)
class PaceReading:
    """Result of one pipeline tick."""

    timestamp_ms: float
    distance_m: float
    raw_pace: Optional[float]
    smoothed_pace: Optional[float]
    display: str


class RecordingSession:
    def __init__(
            self,
            settings: Optional[PaceSettings] = None,
            profile: Optional[GpsProfile] = None,
    ) -> None:
        self.settings = settings or PaceSettings()
        self.profile = profile or DEFAULT_GPS_PROFILE
        self.reset()

    def reset(self) -> None:
        """Start a new activity: empty buffer, no smoothing history."""
        self._segments: tuple[PaceSegment, ...] = ()
        self._previous_smoothed: Optional[float] = None
        self._distance_m = 0.0
        self._last_fix: Optional[GpsFix] = None
        self._last_update_ms: Optional[float] = None
        self.filter_stats = FilterStats()

    @property
    def segments(self) -> tuple[PaceSegment, ...]:
        return self._segments

    @property
    def previous_smoothed(self) -> Optional[float]:
        return self._previous_smoothed

    @property
    def distance_m(self) -> float:
        return self._distance_m

    @property
    def last_fix(self) -> Optional[GpsFix]:
        return self._last_fix

    def add_sample(
            self,
            timestamp_ms: float,
            cumulative_distance: float,
            *,
            now: Optional[float] = None,
    ) -> PaceReading:
        """
        Run one location update through the pipeline.

        When no raw pace is available the smoothing state is kept, so the
        display holds the last smoothed value through short gaps.
        """
        s = self.settings
        self._segments = append_segment(
            self._segments,
            PaceSegment(timestamp=timestamp_ms, distance=cumulative_distance),
            s.max_segments,
        )
        self._distance_m = cumulative_distance

        raw = calculate_current_pace(
            self._segments, s.window_seconds, s.min_segment_distance, now=now,
        )
        if raw is not None:
            self._previous_smoothed = smooth_pace(raw, self._previous_smoothed, s.smoothing_factor)

        return PaceReading(
            timestamp_ms=timestamp_ms,
            distance_m=cumulative_distance,
            raw_pace=raw,
            smoothed_pace=self._previous_smoothed,
            display=format_pace_display(self._previous_smoothed, units=s.units),
        )

    def add_fix(self, fix: GpsFix, *, now: Optional[float] = None) -> Optional[PaceReading]:
        """Filter a raw fix; if accepted, advance distance and run the pipeline."""
        self._last_update_ms = fix.timestamp_ms
        decision = filter_fix(fix, self._last_fix, self.profile)
        self.filter_stats.record(decision)
        if not decision.accepted:
            return None

        self._last_fix = fix
        return self.add_sample(fix.timestamp_ms, self._distance_m + decision.distance_m, now=now)

    def signal_status(self, now: Optional[float] = None) -> str:
        """Signal quality from the last fix received, accepted or not."""
        return gps_signal_status(self._last_update_ms, now)
