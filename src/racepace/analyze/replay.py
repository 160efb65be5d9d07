#!/usr/bin/env python3
"""
Replay a recorded GPX track through the live pace pipeline.

Each trackpoint is fed to a RecordingSession as if it had just arrived from
the location service, with the trackpoint time as the clock. The output shows
what the recording screen would have displayed at every tick.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from racepace.analyze.track import summarize_points
from racepace.config import PaceSettings, RacePaceConfig, load_config
from racepace.errors import RacePaceError
from racepace.formats.gpx import TrackPoint, load_trackpoints
from racepace.formats.pace import UNIT_SYSTEMS, format_pace_display, parse_units
from racepace.profiles import GpsProfile
from racepace.recording.fixes import GpsFix
from racepace.recording.session import PaceReading, RecordingSession
from racepace.util.logging import log


def replay_track(
        points: Iterable[TrackPoint],
        settings: Optional[PaceSettings] = None,
        profile: Optional[GpsProfile] = None,
        *,
        session: Optional[RecordingSession] = None,
) -> list[PaceReading]:
    """Feed trackpoints as fixes; return one reading per accepted fix."""
    if session is None:
        session = RecordingSession(settings, profile)

    readings: list[PaceReading] = []
    for p in points:
        fix = GpsFix(timestamp_ms=p.timestamp_ms, lat=p.lat, lon=p.lon, ele=p.ele)
        reading = session.add_fix(fix, now=fix.timestamp_ms)
        if reading is not None:
            readings.append(reading)
    return readings


def print_readings(readings: list[PaceReading], *, units: str, tsv: bool) -> None:
    if tsv:
        print("elapsed_s\tdistance_m\traw_pace_s_per_km\tsmoothed_pace_s_per_km\tdisplay")
    start = readings[0].timestamp_ms if readings else 0.0
    for r in readings:
        elapsed = (r.timestamp_ms - start) / 1000
        raw = "" if r.raw_pace is None else f"{r.raw_pace:.1f}"
        smoothed = "" if r.smoothed_pace is None else f"{r.smoothed_pace:.1f}"
        if tsv:
            print(f"{elapsed:.0f}\t{r.distance_m:.1f}\t{raw}\t{smoothed}\t{r.display}")
        else:
            raw_display = format_pace_display(r.raw_pace, units=units)
            print(f"  {elapsed:7.0f}s  {r.distance_m:9.1f} m  raw {raw_display:>6}  pace {r.display:>6}")


def _settings_from_args(args: argparse.Namespace, cfg: RacePaceConfig) -> PaceSettings:
    base = cfg.pace
    return PaceSettings(
        window_seconds=args.window_seconds if args.window_seconds is not None else base.window_seconds,
        min_segment_distance=(
            args.min_segment_distance if args.min_segment_distance is not None else base.min_segment_distance
        ),
        max_segments=args.max_segments if args.max_segments is not None else base.max_segments,
        smoothing_factor=args.smoothing_factor if args.smoothing_factor is not None else base.smoothing_factor,
        units=parse_units(args.units) if args.units else base.units,
    )


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="racepace: replay GPX file(s) through the live pace pipeline.")
    ap.add_argument("gpx", nargs="+", help="One or more GPX files.")
    ap.add_argument("--window-seconds", type=float, default=None,
                    help="Rolling window for current pace (default: from config, 30)")
    ap.add_argument("--min-segment-distance", type=float, default=None,
                    help="Noise floor in meters (default: from config, 10)")
    ap.add_argument("--max-segments", type=int, default=None,
                    help="Segment buffer capacity (default: from config, 30)")
    ap.add_argument("--smoothing-factor", type=float, default=None,
                    help="EMA alpha, clamped to 0.1-0.9 (default: from config, 0.3)")
    ap.add_argument("--units", choices=UNIT_SYSTEMS, default=None,
                    help="Display units (default: from config, metric)")
    ap.add_argument("--profile", default=None,
                    help="GPS profile / sport slug (default: from config, running)")
    ap.add_argument("--tsv", action="store_true",
                    help="Print tab-separated output (good for piping).")
    ap.add_argument("--plot", action="store_true",
                    help="Plot raw and smoothed pace after each file.")

    args = ap.parse_args(argv)

    try:
        cfg = load_config()
        settings = _settings_from_args(args, cfg)
        profile = cfg.get_profile(args.profile)

        for path in (Path(p).expanduser() for p in args.gpx):
            if not path.is_file():
                log(f"Skipping (not a file): {path}")
                continue

            points = load_trackpoints(path)
            session = RecordingSession(settings, profile)
            readings = replay_track(points, session=session)

            if not args.tsv:
                print(f"\n{path}")
            print_readings(readings, units=settings.units, tsv=args.tsv)

            summary = summarize_points(points, units=settings.units)
            log(f"{path.name}: {len(points)} points, {session.filter_stats.summary()}, "
                f"average pace {summary['avg_pace']}")

            if args.plot:
                from racepace.visualize.plot import plot_pace
                plot_pace(readings, units=settings.units, title=path.name)
    except RacePaceError as e:
        log(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
