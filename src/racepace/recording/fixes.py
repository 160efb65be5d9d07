# racepace/recording/fixes.py
"""
Raw GPS fix filtering for live recording.

Fixes arrive from the platform location service. Before a fix contributes
distance it has to pass three checks against the active GpsProfile:
reported accuracy, minimum movement (GPS drift) and maximum implied speed
(glitches / cold-fix jumps).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from haversine import haversine, Unit

from racepace.profiles import GpsProfile

# Below this reported speed (m/s) the device is probably standing still.
STATIONARY_SPEED_MPS = 0.5
# Drift floor (m) used while stationary.
STATIONARY_MIN_DISTANCE_M = 8.0

ACCEPTED = "accepted"
REJECTED_ACCURACY = "accuracy"
REJECTED_DISTANCE = "distance"
REJECTED_SPEED = "speed"


@dataclass(frozen=True)
class GpsFix:
    """One location fix as delivered by the platform."""

    timestamp_ms: float
    lat: float
    lon: float
    accuracy_m: Optional[float] = None
    speed_mps: Optional[float] = None
    ele: Optional[float] = None


@dataclass(frozen=True)
class FixDecision:
    accepted: bool
    reason: str
    distance_m: float = 0.0


@dataclass
class FilterStats:
    """Running counts of accepted and rejected fixes."""

    accepted: int = 0
    rejected: dict[str, int] = field(default_factory=lambda: {
        REJECTED_ACCURACY: 0,
        REJECTED_DISTANCE: 0,
        REJECTED_SPEED: 0,
    })

    def record(self, decision: FixDecision) -> None:
        if decision.accepted:
            self.accepted += 1
        else:
            self.rejected[decision.reason] = self.rejected.get(decision.reason, 0) + 1

    @property
    def total_rejected(self) -> int:
        return sum(self.rejected.values())

    def summary(self) -> str:
        return (
            f"accepted={self.accepted} "
            f"filtered: {self.rejected[REJECTED_ACCURACY]} accuracy, "
            f"{self.rejected[REJECTED_DISTANCE]} distance, "
            f"{self.rejected[REJECTED_SPEED]} speed"
        )


def fix_distance_m(a: GpsFix, b: GpsFix) -> float:
    """Great-circle distance between two fixes in meters."""
    return haversine((a.lat, a.lon), (b.lat, b.lon), unit=Unit.METERS)


def filter_fix(fix: GpsFix, last_fix: Optional[GpsFix], profile: GpsProfile) -> FixDecision:
    """
    Decide whether `fix` counts, relative to the last accepted fix.

    The first acceptable fix of an activity is accepted with zero distance.
    """
    if fix.accuracy_m is not None and fix.accuracy_m > profile.accuracy_threshold:
        return FixDecision(False, REJECTED_ACCURACY)

    if last_fix is None:
        return FixDecision(True, ACCEPTED, 0.0)

    stationary = fix.speed_mps is not None and fix.speed_mps < STATIONARY_SPEED_MPS
    min_distance = profile.min_distance_threshold
    if stationary:
        min_distance = max(min_distance, STATIONARY_MIN_DISTANCE_M)

    distance = fix_distance_m(last_fix, fix)
    if distance < min_distance:
        return FixDecision(False, REJECTED_DISTANCE, distance)

    dt_s = (fix.timestamp_ms - last_fix.timestamp_ms) / 1000
    if dt_s > 0 and distance / dt_s > profile.max_realistic_speed:
        return FixDecision(False, REJECTED_SPEED, distance)

    return FixDecision(True, ACCEPTED, distance)
