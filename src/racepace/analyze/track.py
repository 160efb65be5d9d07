# racepace/analyze/track.py
"""
Whole-track analysis for racepace
"""

from pathlib import Path

from haversine import haversine, Unit

from racepace.formats.gpx import load_trackpoints
from racepace.formats.pace import METRIC, format_pace_display
from racepace.pace.average import DEFAULT_MIN_DISTANCE_M, calculate_average_pace


def compute_step_metrics(points):
    """Return per-segment dt (s), distance (m), speed (m/s)."""
    dts = []
    ds = []
    vs = []

    for p0, p1 in zip(points, points[1:]):
        dt_s = (p1.time - p0.time).total_seconds()
        if dt_s <= 0:
            continue

        d_m = haversine((p0.lat, p0.lon), (p1.lat, p1.lon), unit=Unit.METERS)
        v = d_m / dt_s

        dts.append(dt_s)
        ds.append(d_m)
        vs.append(v)

    return dts, ds, vs


def summarize_points(points, *, units: str = METRIC, min_distance: float = DEFAULT_MIN_DISTANCE_M) -> dict:
    if len(points) < 2:
        return {
            "points": len(points),
            "segments": 0,
            "avg_pace_s_per_km": None,
            "avg_pace": format_pace_display(None, units=units),
        }

    dts, ds, vs = compute_step_metrics(points)
    distance_m = sum(ds)
    duration_s = sum(dts)
    avg_pace = calculate_average_pace(duration_s, distance_m, min_distance)

    return {
        "points": len(points),
        "segments": len(vs),
        "distance_m": distance_m,
        "duration_s": duration_s,
        "avg_speed_mps": (distance_m / duration_s) if duration_s else 0.0,
        "max_speed_mps": max(vs) if vs else 0.0,
        "avg_pace_s_per_km": avg_pace,
        "avg_pace": format_pace_display(avg_pace, units=units),
    }


def analyze_track(gpx_path: Path, *, units: str = METRIC) -> dict:
    return summarize_points(load_trackpoints(gpx_path), units=units)
