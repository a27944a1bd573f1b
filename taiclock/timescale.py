"""Astronomical time scales.

A `TimeScale` maps TAI microseconds onto the microsecond count of another scale
with the same 1958 origin, and back:

TAI
    International Atomic Time. Identity.
UTC
    Coordinated Universal Time. Also the identity: UTC differs from TAI by a
    table-driven whole number of seconds, and a leap second repeats a calendar
    reading, which no offset function can express. The calendar and day-count
    codecs apply the leap seconds themselves (see `gregorian` and `julian`).
TT
    Terrestrial Time, TAI + 32.184 s.
TDB
    Barycentric Dynamical Time, TT plus a periodic correction of less than
    2 ms (see `tdb_minus_tt`).
"""

import math
from enum import Enum

from .constants import EpochDays, EpochOffset, TimeConstant
from .errors import FormatError

# Series for the TDB-TT correction, using the orbit of the Earth-Moon barycentre.
_TDB_AMPLITUDE = 0.0016567  # seconds
_EMB_ECCENTRICITY = 0.01671
_EMB_MEAN_ANOMALY_2000 = 6.231435  # radians at 2000-01-01T00:00:00 TAI
_EMB_MEAN_MOTION = 0.01720197  # radians per day


def tdb_minus_tt(tai):
    """TDB - TT in microseconds at TAI microseconds `tai`.

    Uses the mean anomaly M of the Earth-Moon barycentre and its eccentric
    anomaly E, to first order in the eccentricity. The result is rounded to the
    nearest microsecond and stays within +/-1657 microseconds.
    """
    days = tai / TimeConstant.DAY_TO_USEC - EpochDays.MJD2000_1958
    mean_anomaly = _EMB_MEAN_ANOMALY_2000 + _EMB_MEAN_MOTION * days
    eccentric_anomaly = mean_anomaly + _EMB_ECCENTRICITY * (
        math.sin(mean_anomaly) + 0.5 * _EMB_ECCENTRICITY * math.sin(2 * mean_anomaly)
    )
    offset = _TDB_AMPLITUDE * math.sin(eccentric_anomaly)
    return int(math.floor(offset * TimeConstant.SEC_TO_USEC + 0.5))


class TimeScale(Enum):
    """Time scales supported by the codecs."""

    TAI = "TAI"
    UTC = "UTC"
    TT = "TT"
    TDB = "TDB"

    @property
    def suffix(self):
        """Suffix used by the text format ("Z" for UTC)."""
        return "Z" if self is TimeScale.UTC else self.value

    @property
    def label(self):
        """Suffix as written after a time ("Z" or a space and the name)."""
        return "Z" if self is TimeScale.UTC else f" {self.value}"

    @property
    def is_leap_aware(self):
        """True if calendar readings in this scale include leap seconds."""
        return self is TimeScale.UTC

    def tai_to_scale(self, tai: int) -> int:
        """Convert TAI microseconds to this scale's microseconds."""
        if self is TimeScale.TAI or self is TimeScale.UTC:
            return tai
        if self is TimeScale.TT:
            return tai + EpochOffset.TT_MINUS_TAI_USEC
        if self is TimeScale.TDB:
            return tai + EpochOffset.TT_MINUS_TAI_USEC + tdb_minus_tt(tai)
        raise NotImplementedError(self)

    def scale_to_tai(self, scale: int) -> int:
        """Convert this scale's microseconds to TAI microseconds.

        The TDB inverse evaluates the correction once, at the TT estimate of
        TAI. The correction changes by far less than a microsecond over 2 ms,
        so one step leaves a residual error below 1 microsecond.
        """
        if self is TimeScale.TAI or self is TimeScale.UTC:
            return scale
        if self is TimeScale.TT:
            return scale - EpochOffset.TT_MINUS_TAI_USEC
        if self is TimeScale.TDB:
            tai = scale - EpochOffset.TT_MINUS_TAI_USEC
            return tai - tdb_minus_tt(tai)
        raise NotImplementedError(self)

    @classmethod
    def parse(cls, name):
        """Look up a scale by name (case-insensitive), or pass a scale through."""
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise FormatError(f"Unknown time scale: {name!r}. Valid: {[s.value for s in cls]}") from None
