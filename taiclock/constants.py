"""Time constants.

All offsets are integers in microseconds unless the name says otherwise.
"""

from enum import IntEnum

LEAP_1972 = 10  # TAI-UTC seconds when leap seconds were introduced


class TimeConstant(IntEnum):
    """Time related constants."""

    SEC_TO_USEC = 1000000
    DAY_TO_USEC = 86400000000


class EpochOffset(IntEnum):
    """Microseconds between epochs."""

    TAI_EPOCH_UNIX_USEC = -4383 * 86400000000  # 1958-01-01T00:00:00 as Unix microseconds
    UTC_1972_UNIX_USEC = 730 * 86400000000  # 1972-01-01T00:00:00Z as Unix microseconds
    UTC_1972_TAI_USEC = (5113 * 86400 + LEAP_1972) * 1000000  # 1972-01-01T00:00:00Z as TAI microseconds
    TT_MINUS_TAI_USEC = 32184000


class EpochDays(IntEnum):
    """Whole days between day-count epochs and the 1958 TAI epoch."""

    MJD_1958 = 36204  # MJD of 1958-01-01
    MJD2000_1958 = 15340  # Days from 1958-01-01 to 2000-01-01
