# racepace/profiles.py
"""
GPS filtering profiles per sport.

Each profile tunes how raw fixes are accepted during recording (accuracy
limit, drift floor, glitch speed) for the typical movement of that sport.
Profiles are looked up by sport slug; unknown slugs get DEFAULT_GPS_PROFILE.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class GpsProfile:
    """
    Thresholds applied to incoming fixes.

    - accuracy_threshold: worst acceptable reported accuracy (m)
    - min_distance_threshold: movement below this is treated as drift (m)
    - max_realistic_speed: faster implied speeds are glitches (m/s)
    - min_elevation_change: elevation noise floor (m)
    - time_interval_ms / distance_interval: requested update cadence
    - smoothing_buffer_size: points averaged for position smoothing
    """

    enabled: bool = True
    accuracy_threshold: float = 25.0
    min_distance_threshold: float = 3.0
    max_realistic_speed: float = 15.0
    min_elevation_change: float = 3.0
    time_interval_ms: int = 3000
    distance_interval: float = 5.0
    smoothing_buffer_size: int = 3


DEFAULT_GPS_PROFILE = GpsProfile()

GPS_PROFILES_BY_SLUG: dict[str, GpsProfile] = {
    "running": GpsProfile(max_realistic_speed=12.0),
    "trail-running": GpsProfile(
        accuracy_threshold=30.0,
        max_realistic_speed=12.0,
        min_elevation_change=5.0,
        smoothing_buffer_size=4,
    ),
    "walking": GpsProfile(
        min_distance_threshold=5.0,
        max_realistic_speed=4.0,
        time_interval_ms=5000,
        smoothing_buffer_size=4,
    ),
    "hiking": GpsProfile(
        accuracy_threshold=30.0,
        min_distance_threshold=2.0,
        max_realistic_speed=8.0,
        min_elevation_change=5.0,
        time_interval_ms=5000,
        smoothing_buffer_size=4,
    ),
    "cycling": GpsProfile(
        accuracy_threshold=20.0,
        min_distance_threshold=5.0,
        max_realistic_speed=30.0,
        min_elevation_change=5.0,
        time_interval_ms=2000,
        distance_interval=8.0,
    ),
    "road-cycling": GpsProfile(
        accuracy_threshold=20.0,
        min_distance_threshold=5.0,
        max_realistic_speed=30.0,
        min_elevation_change=5.0,
        time_interval_ms=2000,
        distance_interval=8.0,
    ),
    "mountain-biking": GpsProfile(
        min_distance_threshold=5.0,
        max_realistic_speed=25.0,
        min_elevation_change=5.0,
        time_interval_ms=2000,
        distance_interval=8.0,
    ),
    # GPS is unreliable in the water and useless indoors.
    "swimming": GpsProfile(
        enabled=False,
        accuracy_threshold=50.0,
        min_distance_threshold=5.0,
        max_realistic_speed=3.0,
        min_elevation_change=0.0,
        time_interval_ms=10000,
        distance_interval=10.0,
        smoothing_buffer_size=5,
    ),
    "gym": GpsProfile(
        enabled=False,
        accuracy_threshold=50.0,
        min_distance_threshold=5.0,
        max_realistic_speed=5.0,
        min_elevation_change=0.0,
        time_interval_ms=10000,
        distance_interval=10.0,
    ),
    "other": DEFAULT_GPS_PROFILE,
}


def get_gps_profile(
        slug: Optional[str],
        profiles: Optional[dict[str, GpsProfile]] = None,
) -> GpsProfile:
    """Return the profile for `slug` (case-insensitive), or the default profile."""
    table = GPS_PROFILES_BY_SLUG if profiles is None else profiles
    key = (slug or "").strip().lower()
    return table.get(key, DEFAULT_GPS_PROFILE)


def is_gps_enabled(slug: Optional[str]) -> bool:
    return get_gps_profile(slug).enabled


def apply_overrides(profile: GpsProfile, overrides: dict[str, Any]) -> GpsProfile:
    """
    Return a copy of `profile` with known fields replaced from `overrides`.

    Unknown keys are ignored. Values are coerced to the field's type; a value
    that cannot be coerced raises ValueError.
    """
    changes: dict[str, Any] = {}
    for name, current in vars(profile).items():
        if name not in overrides:
            continue
        raw = overrides[name]
        if isinstance(current, bool):
            if not isinstance(raw, bool):
                raise ValueError(f"{name} must be true or false, got {raw!r}")
            changes[name] = raw
        elif isinstance(raw, bool):
            raise ValueError(f"{name} must be a number, got {raw!r}")
        elif isinstance(current, int):
            changes[name] = int(raw)
        else:
            changes[name] = float(raw)
    return replace(profile, **changes)
