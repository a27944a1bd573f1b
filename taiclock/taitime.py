"""Absolute time with microsecond resolution.

A `TaiTime` is the number of SI microseconds elapsed since the TAI epoch
1958-01-01T00:00:00 TAI. It knows nothing about calendars, time scales or leap
seconds; those are handled by `timescale`, `gregorian` and `leapsecond`.

Examples
--------
>>> t = TaiTime(1000)
>>> t.add_seconds(3).subtract(t)
3000000
>>> t + 7 > t
True
"""

import numbers
from dataclasses import dataclass

from .constants import TimeConstant


@dataclass(frozen=True, order=True)
class TaiTime:
    """Immutable absolute time, microseconds since 1958-01-01T00:00:00 TAI.

    The usable range is roughly +/-290,000 years around the epoch (the range of
    a signed 64-bit microsecond count). Arithmetic is not checked against that
    limit.

    Parameters
    ----------
    microseconds : int
        Number of microseconds since the epoch.

    """

    microseconds: int

    def __post_init__(self):
        if isinstance(self.microseconds, bool) or not isinstance(self.microseconds, numbers.Integral):
            raise TypeError(f"TaiTime requires an integer number of microseconds, not: {self.microseconds!r}")
        object.__setattr__(self, "microseconds", int(self.microseconds))

    @property
    def seconds(self) -> float:
        """Seconds since the epoch (float, loses precision far from 1958)."""
        return self.microseconds / TimeConstant.SEC_TO_USEC

    def add_microseconds(self, offset: int) -> "TaiTime":
        """Return a new time, `offset` SI microseconds later than this one.

        Calendar seconds in a non-linear scale (e.g. TDB) are not SI seconds;
        convert through the scale when that distinction matters.
        """
        return TaiTime(self.microseconds + offset)

    def add_seconds(self, offset: int) -> "TaiTime":
        """Return a new time, `offset` SI seconds later than this one."""
        return TaiTime(self.microseconds + offset * TimeConstant.SEC_TO_USEC)

    def subtract(self, other: "TaiTime") -> int:
        """Microseconds difference: self - other."""
        return self.microseconds - other.microseconds

    def earliest(self, other: "TaiTime") -> "TaiTime":
        """Return the earlier of the two times."""
        return self if self.microseconds < other.microseconds else other

    def latest(self, other: "TaiTime") -> "TaiTime":
        """Return the later of the two times."""
        return self if self.microseconds > other.microseconds else other

    def __add__(self, offset):
        if isinstance(offset, numbers.Integral) and not isinstance(offset, bool):
            return self.add_microseconds(offset)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, TaiTime):
            return self.subtract(other)
        if isinstance(other, numbers.Integral) and not isinstance(other, bool):
            return TaiTime(self.microseconds - other)
        return NotImplemented

    def __int__(self):
        return self.microseconds

    def __repr__(self):
        return f"{self.__class__.__name__}({self.microseconds})"

    def __str__(self):
        # Only format values a four digit calendar year can show.
        if 0 < self.microseconds < 100000000000000000:
            from .timeformat import TAI_FORMAT

            return f"{TAI_FORMAT.format(self)} ({self.microseconds})"
        return str(self.microseconds)
