"""
Exception types raised by the crane control core.

Only InvariantViolation and InvalidShape are ever fatal. InvalidDestination is
raised for NaN and, under the "reject" destination policy, for destinations
off the track. DegenerateInference is recovered inside the regulator and
never leaves it.
"""


class CraneError(Exception):
    """Base class for all crane control errors."""


class InvariantViolation(CraneError):
    """A state handed to StateStore.commit() lies outside the track or sway limits."""


class InvalidDestination(CraneError, ValueError):
    """A requested destination lies outside [0, track_length]."""


class InvalidShape(CraneError, ValueError):
    """A membership function was constructed with missing or unordered breakpoints."""


class DegenerateInference(CraneError):
    """No rule fired, so the fuzzy output has zero total membership."""
