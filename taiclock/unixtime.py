"""Bridge between `TaiTime` and Unix time or `datetime.datetime`.

Unix time counts 86400 seconds per day and so cannot name an instant within a
leap second. See `leapsecond.LeapSecondTable.tai_to_unix` for the two aliasing
conventions.
"""

import datetime
import logging

from . import leapsecond
from .taitime import TaiTime

logger = logging.getLogger(__name__)

UNIX_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_ONE_USEC = datetime.timedelta(microseconds=1)


def tai_to_unix_time(time, freeze=False) -> int:
    """Convert a time to Unix microseconds.

    Parameters
    ----------
    time : TaiTime or int
        Time to convert.
    freeze : bool, optional
        Map every instant of a leap second onto the start of the next Unix
        second. Default=False follows POSIX: the leap second runs through the
        next second's values and Unix time then jumps back.

    Returns
    -------
    int

    Raises
    ------
    RangeError
        If the time is before 1972 UTC.

    """
    return leapsecond.tai_to_unix(int(time), freeze=freeze)


def unix_to_tai_time(unix) -> TaiTime:
    """Convert Unix microseconds to a time (never within a leap second)."""
    return TaiTime(leapsecond.unix_to_tai(int(unix)))


def tai_to_datetime(time) -> datetime.datetime:
    """Convert a time to a timezone-aware UTC datetime.

    Instants within a leap second become 00:00:00 of the following day.
    """
    return UNIX_EPOCH + datetime.timedelta(microseconds=tai_to_unix_time(time, freeze=True))


def datetime_to_tai(dt: datetime.datetime) -> TaiTime:
    """Convert a datetime to a time. Naive datetimes are read as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return unix_to_tai_time((dt - UNIX_EPOCH) // _ONE_USEC)
