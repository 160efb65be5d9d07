# racepace/formats/gpx.py
"""
GPX helpers for racepace

This module is intentionally format-focused:
- GPX namespace handling
- safely reading an ElementTree
- extracting timed trackpoints

Recorded GPX tracks are used to replay an activity through the live pace
pipeline and to compute whole-track summaries. Orchestration (CLI, output)
lives in racepace.analyze.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from racepace.errors import InvalidGpxError

# GPX 1.1 default namespace
GPX_NS = {"gpx": "http://www.topografix.com/GPX/1/1"}


def _parse_gpx_time(text: str) -> Optional[_dt.datetime]:
    """
    Parse an ISO-8601 timestamp commonly found in GPX <time> nodes.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+00:00"
    """
    if not text:
        return None
    s = text.strip()
    if not s:
        return None

    # GPX times commonly use Z for UTC.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError:
        return None

    # Ensure tz-aware; if naive, assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)

    return dt.astimezone(_dt.timezone.utc)


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      InvalidGpxError if the file is missing or not well-formed XML
    """
    try:
        return ET.parse(path)
    except (ET.ParseError, OSError) as e:
        raise InvalidGpxError(f"Cannot read GPX file {path}: {e}") from e


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    time: _dt.datetime
    ele: float | None = None

    @property
    def timestamp_ms(self) -> float:
        return self.time.timestamp() * 1000.0


def extract_trackpoints(tree: ET.ElementTree) -> list[TrackPoint]:
    """Extract ordered trackpoints from a GPX tree, skipping points without time."""
    root = tree.getroot()
    pts: list[TrackPoint] = []

    for trkpt in root.findall(".//gpx:trkpt", GPX_NS):
        try:
            lat = float(trkpt.get("lat"))
            lon = float(trkpt.get("lon"))
        except (TypeError, ValueError) as e:
            raise InvalidGpxError(f"Trackpoint without valid lat/lon: {trkpt.attrib}") from e

        time = _parse_gpx_time(trkpt.findtext("gpx:time", default="", namespaces=GPX_NS))
        if time is None:
            continue   # skip points without timestamps

        ele_text = trkpt.findtext("gpx:ele", default="", namespaces=GPX_NS).strip()
        try:
            ele = float(ele_text) if ele_text else None
        except ValueError:
            ele = None

        pts.append(TrackPoint(lat=lat, lon=lon, time=time, ele=ele))

    return pts


def load_trackpoints(path: Path) -> list[TrackPoint]:
    return extract_trackpoints(read_gpx(path))
