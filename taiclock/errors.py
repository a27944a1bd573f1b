"""Exceptions raised by the time conversions.

Every error is final for the operation that raised it: nothing is clamped or
retried, and callers should treat them as hard failures.
"""


class FormatError(ValueError):
    """Malformed time text, leap-second table entry or binary time code."""


class RangeError(ValueError):
    """A value lies outside the domain supported by a conversion.

    Examples are UTC conversions before 1972-01-01, CUC fields that do not fit
    their bit widths, or calendar fields that do not name a real instant.
    """


class ConfigurationError(RuntimeError):
    """The leap-second table could not be located or read."""
