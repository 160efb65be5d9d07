import datetime as dt
import math
from pathlib import Path

import pytest

from racepace.pace.segments import PaceSegment

# Mean Earth radius used by the haversine package.
EARTH_RADIUS_M = 6371008.8


def meters_to_lat_deg(meters: float) -> float:
    return math.degrees(meters / EARTH_RADIUS_M)


def _gpx_document(trkpts: list[str]) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
        "  <trk><name>test</name><trkseg>\n"
        + "\n".join(trkpts)
        + "\n  </trkseg></trk>\n</gpx>\n"
    )


@pytest.fixture
def segments_at_pace():
    """Factory: `n` segments at a constant pace (s/km), one every `step_s` seconds."""

    def _make(pace_s_per_km: float, n: int, step_s: float = 1.0, start_ms: float = 0.0):
        meters_per_s = 1000.0 / pace_s_per_km
        return tuple(
            PaceSegment(timestamp=start_ms + i * step_s * 1000, distance=i * step_s * meters_per_s)
            for i in range(n)
        )

    return _make


@pytest.fixture
def write_gpx(tmp_path: Path):
    """Factory: write a GPX file heading due north at a constant pace."""

    def _write(
        name: str = "track.gpx",
        *,
        pace_s_per_km: float = 300.5,
        n: int = 121,
        step_s: int = 2,
        extra_trkpts: tuple[str, ...] = (),
    ) -> Path:
        start = dt.datetime(2025, 4, 26, 8, 0, 0, tzinfo=dt.timezone.utc)
        step_m = step_s * 1000.0 / pace_s_per_km
        trkpts = []
        for i in range(n):
            lat = 45.0 + meters_to_lat_deg(i * step_m)
            t = (start + dt.timedelta(seconds=i * step_s)).strftime("%Y-%m-%dT%H:%M:%SZ")
            trkpts.append(
                f'    <trkpt lat="{lat:.10f}" lon="7.0000000000"><ele>250.0</ele><time>{t}</time></trkpt>'
            )
        trkpts.extend(extra_trkpts)
        path = tmp_path / name
        path.write_text(_gpx_document(trkpts), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_gpx_path(write_gpx) -> Path:
    return write_gpx()
