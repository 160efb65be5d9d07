# racepace/visualize/plot.py
"""
Plotting routines for racepace
"""

import matplotlib.pyplot as plt

from racepace.formats.pace import IMPERIAL, KM_TO_MI, METRIC, pace_unit_label


def pace_series(readings, units=METRIC):
    """Return (elapsed_s, raw, smoothed) lists; missing paces become None."""
    if not readings:
        return [], [], []

    scale = 1 / KM_TO_MI if units == IMPERIAL else 1.0
    start = readings[0].timestamp_ms
    elapsed = [(r.timestamp_ms - start) / 1000 for r in readings]
    raw = [r.raw_pace * scale if r.raw_pace is not None else None for r in readings]
    smoothed = [r.smoothed_pace * scale if r.smoothed_pace is not None else None for r in readings]
    return elapsed, raw, smoothed


def plot_pace(readings, units=METRIC, title="Pace", show=True):
    elapsed, raw, smoothed = pace_series(readings, units)
    # matplotlib leaves gaps for NaN
    raw = [float("nan") if v is None else v / 60 for v in raw]
    smoothed = [float("nan") if v is None else v / 60 for v in smoothed]

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(elapsed, raw, ".", markersize=3, alpha=0.5, label="raw")
    ax.plot(elapsed, smoothed, "-", label="smoothed")
    ax.invert_yaxis()
    ax.set_xlabel("Elapsed (s)")
    ax.set_ylabel(f"Pace (min{pace_unit_label(units)})")
    ax.set_title(title)
    ax.legend()
    if show:
        plt.show()
    return fig
