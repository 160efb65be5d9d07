# racepace/errors

"""
racepace.errors

Central exception hierarchy for racepace.

The pace engine itself never raises: it reports missing or implausible data
as None. These errors belong to the layers around it (configuration, track
input, command-line tools).

Callers can catch RacePaceError (broad) or specific subclasses (narrow).
"""


class RacePaceError(RuntimeError):
    """Base class for all racepace runtime errors."""


# ---- Configuration errors ----------------------

class ConfigError(RacePaceError):
    """Configuration could not be read or holds an unusable value."""

class UnitsError(ConfigError, ValueError):
    """Unknown unit system (expected 'metric' or 'imperial')."""


# ---- Track input errors ------------------------

class TrackError(RacePaceError):
    """Errors reading or interpreting a recorded track."""

class InvalidGpxError(TrackError):
    """GPX file could not be parsed or did not contain usable trackpoints."""
