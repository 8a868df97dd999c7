"""Errors raised by the acquisition layer before the tuner loop starts.

Conditions inside the loop (no new data, no period found, stream closed) are
not exceptions: they are ordinary outcomes handled by ``TunerLoop``.
"""


class TunerError(Exception):
    """Base class for SeaTuner errors."""


class DeviceUnavailableError(TunerError):
    """The requested audio input device could not be opened."""


class ConfigurationError(TunerError, ValueError):
    """The audio source or tuner was configured with unusable settings."""
