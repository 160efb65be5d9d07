import pytest

from racepace.profiles import (
    DEFAULT_GPS_PROFILE,
    GPS_PROFILES_BY_SLUG,
    apply_overrides,
    get_gps_profile,
    is_gps_enabled,
)


@pytest.mark.parametrize("slug", ["running", "Running", "  RUNNING "])
def test_lookup_is_case_insensitive(slug):
    assert get_gps_profile(slug) is GPS_PROFILES_BY_SLUG["running"]


@pytest.mark.parametrize("slug", ["curling", "", None])
def test_unknown_slug_falls_back_to_default(slug):
    assert get_gps_profile(slug) is DEFAULT_GPS_PROFILE


def test_profile_values():
    cycling = get_gps_profile("cycling")
    assert cycling.accuracy_threshold == 20
    assert cycling.max_realistic_speed == 30
    assert get_gps_profile("running").max_realistic_speed == 12


@pytest.mark.parametrize(
    "slug, enabled",
    [("running", True), ("hiking", True), ("swimming", False), ("gym", False), ("unknown", True)],
)
def test_is_gps_enabled(slug, enabled):
    assert is_gps_enabled(slug) is enabled


def test_apply_overrides_coerces_and_ignores_unknown_keys():
    p = apply_overrides(DEFAULT_GPS_PROFILE, {"accuracy_threshold": "20", "time_interval_ms": 2000.0, "colour": "red"})
    assert p.accuracy_threshold == 20.0
    assert p.time_interval_ms == 2000
    assert p.max_realistic_speed == DEFAULT_GPS_PROFILE.max_realistic_speed
    # shared default is not modified
    assert DEFAULT_GPS_PROFILE.accuracy_threshold == 25.0


def test_apply_overrides_rejects_non_bool_enabled():
    with pytest.raises(ValueError):
        apply_overrides(DEFAULT_GPS_PROFILE, {"enabled": "yes"})


@pytest.mark.parametrize("field", ["accuracy_threshold", "time_interval_ms", "max_realistic_speed"])
def test_apply_overrides_rejects_bool_for_numbers(field):
    with pytest.raises(ValueError, match=field):
        apply_overrides(DEFAULT_GPS_PROFILE, {field: True})
