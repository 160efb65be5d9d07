"""
racepace configuration loader

This module centralizes configuration handling for the racepace tools.

The pace functions themselves take plain parameters and never read config.
This loader exists so that command-line tools and recording sessions can
share one set of defaults without repeating them on every call.

Design goals:
- CLI flags override everything.
- Sensible defaults if no config exists.
- Per-machine config without committing personal preferences:
    ~/.config/racepace/config.toml
- Repo-local config:
    <repo_root>/config/config.toml
- Environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by each tool)
2) Environment variables (RACEPACE_*)
3) User config: ~/.config/racepace/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults (see PaceSettings)

TOML layout:

    [pace]
    window_seconds = 30
    min_segment_distance = 10
    max_segments = 30
    smoothing_factor = 0.3
    units = "metric"

    [gps]
    profile = "running"

    [gps.profiles.running]
    accuracy_threshold = 20

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from racepace.errors import ConfigError
from racepace.formats.pace import METRIC, parse_units
from racepace.pace.segments import MAX_PACE_SEGMENTS
from racepace.profiles import GPS_PROFILES_BY_SLUG, GpsProfile, apply_overrides, get_gps_profile


# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8")) or {}
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "pace.window_seconds")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_float(v: Any, key: str) -> float:
    if isinstance(v, bool):
        raise ConfigError(f"{key}: expected a number, got {v!r}")
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key}: expected a number, got {v!r}") from e


def _as_int(v: Any, key: str) -> int:
    if isinstance(v, bool):
        raise ConfigError(f"{key}: expected an integer, got {v!r}")
    try:
        return int(v)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key}: expected an integer, got {v!r}") from e


def _as_str(v: Any, default: str) -> str:
    """
    Coerce config values into strings.

    Always returns a string; never raises.
    """
    if v is None:
        return default
    return str(v)


def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PaceSettings:
    """
    Parameters of the live pace pipeline.

    - window_seconds: rolling window for instantaneous pace (typical 30-60)
    - min_segment_distance: meters; below this the window counts as standing still
    - max_segments: segment buffer capacity
    - smoothing_factor: EMA alpha, clamped to [0.1, 0.9] when applied
    - units: "metric" or "imperial", display only
    """

    window_seconds: float = 30.0
    min_segment_distance: float = 10.0
    max_segments: int = MAX_PACE_SEGMENTS
    smoothing_factor: float = 0.3
    units: str = METRIC


@dataclass(frozen=True)
class RacePaceConfig:
    """
    Fully merged racepace configuration.

    Attributes:
    - pace: pipeline parameters
    - gps_profile: name of the selected sport profile
    - profiles: sport slug -> GpsProfile, including TOML overrides
    - source: provenance map showing where each value came from
    """

    pace: PaceSettings
    gps_profile: str
    profiles: dict[str, GpsProfile] = field(default_factory=dict)
    source: dict[str, str] = field(default_factory=dict)

    def get_profile(self, name: Optional[str] = None) -> GpsProfile:
        """Return profile `name`, or the configured one when name is None."""
        return get_gps_profile(name or self.gps_profile, self.profiles)


# (dotted key, env var, coercion)
_PACE_KEYS = (
    ("pace.window_seconds", "RACEPACE_WINDOW_SECONDS", _as_float),
    ("pace.min_segment_distance", "RACEPACE_MIN_SEGMENT_DISTANCE", _as_float),
    ("pace.max_segments", "RACEPACE_MAX_SEGMENTS", _as_int),
    ("pace.smoothing_factor", "RACEPACE_SMOOTHING_FACTOR", _as_float),
)


def _coerce_units(v: Any) -> str:
    # UnitsError is already a ConfigError
    return parse_units(_as_str(v, METRIC))


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> RacePaceConfig:
    """
    Load, merge, and normalize all racepace configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "racepace" / "config.toml"

    # Load raw TOML dicts
    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    defaults = PaceSettings()
    values: dict[str, Any] = {
        "pace.window_seconds": defaults.window_seconds,
        "pace.min_segment_distance": defaults.min_segment_distance,
        "pace.max_segments": defaults.max_segments,
        "pace.smoothing_factor": defaults.smoothing_factor,
        "pace.units": defaults.units,
        "gps.profile": "running",
    }

    # Track provenance for debugging
    src = {k: "default" for k in values}

    # ------------------------------------------------------------------
    # Repo + user overrides (user wins)
    # ------------------------------------------------------------------
    profiles: dict[str, GpsProfile] = dict(GPS_PROFILES_BY_SLUG)

    for cfg, label, path in ((repo_cfg, "repo", repo_config_path), (user_cfg, "user", user_config_path)):
        for key, _env, coerce in _PACE_KEYS:
            v = _deep_get(cfg, key)
            if v is None:
                continue
            values[key] = coerce(v, key)
            src[key] = f"{label}:{path}"

        v = _deep_get(cfg, "pace.units")
        if v is not None:
            values["pace.units"] = _coerce_units(v)
            src["pace.units"] = f"{label}:{path}"

        v = _deep_get(cfg, "gps.profile")
        if v is not None:
            values["gps.profile"] = _as_str(v, "running").strip().lower()
            src["gps.profile"] = f"{label}:{path}"

        blocks = _deep_get(cfg, "gps.profiles") or {}
        if not isinstance(blocks, dict):
            raise ConfigError(f"gps.profiles must be a table ({label}:{path})")
        for pname, block in blocks.items():
            if not isinstance(block, dict):
                raise ConfigError(f"gps.profiles.{pname} must be a table ({label}:{path})")
            slug = str(pname).strip().lower()
            try:
                profiles[slug] = apply_overrides(get_gps_profile(slug, profiles), block)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"gps.profiles.{pname}: {e} ({label}:{path})") from e
            src[f"gps.profiles.{slug}"] = f"{label}:{path}"

    # Environment variable overrides (highest non-CLI precedence)
    for key, env, coerce in _PACE_KEYS:
        v = os.environ.get(env)
        if not v:
            continue
        values[key] = coerce(v, env)
        src[key] = f"env:{env}"

    v = os.environ.get("RACEPACE_UNITS")
    if v:
        values["pace.units"] = _coerce_units(v)
        src["pace.units"] = "env:RACEPACE_UNITS"

    v = os.environ.get("RACEPACE_PROFILE")
    if v:
        values["gps.profile"] = v.strip().lower()
        src["gps.profile"] = "env:RACEPACE_PROFILE"

    pace = PaceSettings(
        window_seconds=values["pace.window_seconds"],
        min_segment_distance=values["pace.min_segment_distance"],
        max_segments=values["pace.max_segments"],
        smoothing_factor=values["pace.smoothing_factor"],
        units=values["pace.units"],
    )

    # A buffer needs two samples to yield any pace at all.
    if pace.max_segments < 2:
        raise ConfigError(
            f"pace.max_segments must be at least 2, got {pace.max_segments} "
            f"({src['pace.max_segments']})"
        )
    if pace.window_seconds <= 0:
        raise ConfigError(
            f"pace.window_seconds must be positive, got {pace.window_seconds} "
            f"({src['pace.window_seconds']})"
        )
    if pace.min_segment_distance < 0:
        raise ConfigError(
            f"pace.min_segment_distance must not be negative, got {pace.min_segment_distance} "
            f"({src['pace.min_segment_distance']})"
        )

    return RacePaceConfig(
        pace=pace,
        gps_profile=values["gps.profile"],
        profiles=profiles,
        source=src,
    )
