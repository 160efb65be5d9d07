import pytest

from conftest import meters_to_lat_deg
from racepace.config import PaceSettings
from racepace.profiles import get_gps_profile
from racepace.recording.fixes import GpsFix
from racepace.recording.session import RecordingSession, gps_signal_status


def _run(session, seconds, meters_per_s=3.0, start_s=0):
    """Feed one sample per second; returns the readings."""
    return [
        session.add_sample(t * 1000, t * meters_per_s, now=t * 1000)
        for t in range(start_s, start_s + seconds)
    ]


def test_first_samples_have_no_pace():
    session = RecordingSession()
    readings = _run(session, 3)
    assert all(r.raw_pace is None for r in readings)
    assert all(r.smoothed_pace is None for r in readings)
    assert all(r.display == "--:--" for r in readings)


def test_constant_pace_pipeline():
    session = RecordingSession(PaceSettings(window_seconds=30, min_segment_distance=10))
    readings = _run(session, 20)

    # 5 s of data are needed before a pace appears
    assert readings[4].raw_pace is None
    assert readings[5].raw_pace == pytest.approx(1000 / 3)

    last = readings[-1]
    assert last.raw_pace == pytest.approx(1000 / 3)
    assert last.smoothed_pace == pytest.approx(1000 / 3)
    assert last.display == "5:33"
    assert last.distance_m == 57.0
    assert session.previous_smoothed == pytest.approx(1000 / 3)


def test_imperial_display():
    session = RecordingSession(PaceSettings(units="imperial"))
    readings = _run(session, 10)
    # 333.3 s/km = 536.4 s/mi
    assert readings[-1].display == "8:56"


def test_smoothing_blends_pace_changes():
    session = RecordingSession(PaceSettings(window_seconds=5, smoothing_factor=0.5))
    _run(session, 10, meters_per_s=4.0)
    before = session.previous_smoothed
    # slow down to 2 m/s (500 s/km)
    t0, d0 = 10, 36.0
    for i in range(1, 11):
        session.add_sample((t0 + i) * 1000, d0 + 2.0 * i, now=(t0 + i) * 1000)

    assert before == pytest.approx(250.0)
    assert 250.0 < session.previous_smoothed <= 500.0
    assert session.previous_smoothed == pytest.approx(500.0, rel=0.05)


def test_gap_keeps_last_smoothed_value():
    session = RecordingSession(PaceSettings(window_seconds=10))
    last_good = _run(session, 10)[-1]
    assert last_good.smoothed_pace is not None

    # one sample 30 s later: nothing else in the window, span too long for the fallback
    r = session.add_sample(40_000, 40.0, now=40_000)
    assert r.raw_pace is None
    assert r.smoothed_pace == last_good.smoothed_pace
    assert r.display == last_good.display


def test_buffer_respects_max_segments():
    session = RecordingSession(PaceSettings(max_segments=5))
    _run(session, 12)
    assert len(session.segments) == 5
    assert [s.timestamp for s in session.segments] == [7000, 8000, 9000, 10000, 11000]


def test_reset_clears_state():
    session = RecordingSession()
    _run(session, 10)
    session.reset()
    assert session.segments == ()
    assert session.previous_smoothed is None
    assert session.distance_m == 0.0
    assert session.last_fix is None


def test_sessions_are_independent():
    a = RecordingSession()
    b = RecordingSession()
    _run(a, 10)
    assert b.segments == ()
    assert b.previous_smoothed is None


def _fix(meters_north, t_s, **kw):
    return GpsFix(timestamp_ms=t_s * 1000, lat=45.0 + meters_to_lat_deg(meters_north), lon=7.0, **kw)


def test_add_fix_accumulates_distance():
    session = RecordingSession(profile=get_gps_profile("running"))
    readings = [session.add_fix(_fix(4.0 * t, t), now=t * 1000) for t in range(0, 30, 2)]

    assert all(r is not None for r in readings)
    assert session.distance_m == pytest.approx(4.0 * 28, rel=1e-6)
    assert readings[-1].smoothed_pace == pytest.approx(250.0, rel=1e-4)
    assert session.filter_stats.accepted == len(readings)


def test_add_fix_rejects_without_touching_pipeline():
    session = RecordingSession(profile=get_gps_profile("running"))
    session.add_fix(_fix(0, 0), now=0)
    segments = session.segments

    assert session.add_fix(_fix(1, 2), now=2000) is None            # drift
    assert session.add_fix(_fix(500, 4), now=4000) is None          # glitch
    assert session.add_fix(_fix(10, 6, accuracy_m=80), now=6000) is None

    assert session.segments == segments
    assert session.distance_m == 0.0
    assert session.filter_stats.total_rejected == 3


@pytest.mark.parametrize(
    "last_fix_ms, now, expected",
    [
        (None, 0, "lost"),
        (0, 0, "good"),
        (0, 9_999, "good"),
        (0, 10_000, "weak"),
        (0, 29_999, "weak"),
        (0, 30_000, "lost"),
    ],
)
def test_gps_signal_status(last_fix_ms, now, expected):
    assert gps_signal_status(last_fix_ms, now) == expected


def test_session_signal_status_counts_rejected_fixes():
    session = RecordingSession()
    assert session.signal_status(now=0) == "lost"
    session.add_fix(_fix(0, 0), now=0)
    session.add_fix(_fix(0.5, 20), now=20_000)   # rejected as drift, but signal is alive
    assert session.signal_status(now=21_000) == "good"
    assert session.signal_status(now=45_000) == "weak"
