"""Gregorian calendar with leap seconds and microsecond resolution.

The calendar is proleptic: Gregorian rules are applied before the 1582
reform, so 1582-10-04 is followed by 1582-10-05. Splitting whole seconds into
dates is done by numpy's ``datetime64``, which uses the same rules.

When leap seconds are enabled, time values are TAI microseconds and readings
such as 23:59:60 are produced for instants within a leap second. Otherwise the
value is treated as a plain count of calendar seconds from 1958-01-01 in some
time scale, which is how the TAI, TT and TDB formats use it.
"""

import logging
from typing import NamedTuple

import numpy as np

from . import leapsecond
from .constants import EpochOffset, TimeConstant
from .errors import RangeError
from .taitime import TaiTime

logger = logging.getLogger(__name__)

_EPOCH_UNIX_SEC = int(EpochOffset.TAI_EPOCH_UNIX_USEC) // TimeConstant.SEC_TO_USEC


class CalendarFields(NamedTuple):
    """Calendar reading of an instant."""

    year: int
    month: int  # 1 to 12
    day: int  # 1 to 31
    hour: int  # 0 to 23
    minute: int  # 0 to 59
    second: int  # 0 to 60
    microsecond: int  # 0 to 999999


def _split_seconds(seconds, microsecond, leap):
    """Split whole seconds since 1958 into calendar fields."""
    instant = np.datetime64(seconds + _EPOCH_UNIX_SEC, "s")
    day = instant.astype("M8[D]")
    month = instant.astype("M8[M]")
    year = int(instant.astype("M8[Y]").astype(np.int64)) + 1970

    second_of_day = int((instant - day.astype("M8[s]")).astype(np.int64))
    hour, rem = divmod(second_of_day, 3600)
    minute, second = divmod(rem, 60)
    return CalendarFields(
        year=year,
        month=int(month.astype(np.int64)) % 12 + 1,
        day=int((day - month.astype("M8[D]")).astype(np.int64)) + 1,
        hour=hour,
        minute=minute,
        second=60 if leap else second,
        microsecond=microsecond,
    )


class GregorianTimeCalendar:
    """Convert between time values and calendar fields.

    Parameters
    ----------
    leap_seconds : bool, optional
        Interpret values as TAI and apply leap seconds (UTC readings).
        Default=False.
    table : LeapSecondTable, optional
        Leap-second table to use. Default is the table loaded at the time of
        each call (see `leapsecond.get_table`).

    """

    def __init__(self, leap_seconds=False, table=None):
        self.leap_seconds = bool(leap_seconds)
        self._table = table

    def __repr__(self):
        return f"{self.__class__.__name__}(leap_seconds={self.leap_seconds})"

    def _get_table(self):
        return leapsecond.get_table() if self._table is None else self._table

    def to_fields(self, time) -> CalendarFields:
        """Split a time value into calendar fields.

        Parameters
        ----------
        time : TaiTime or int
            Time value, in microseconds.

        Returns
        -------
        CalendarFields

        Raises
        ------
        RangeError
            With leap seconds enabled, if the time is before 1972 UTC.

        """
        value = int(time)
        seconds, microsecond = divmod(value, TimeConstant.SEC_TO_USEC)

        leap = False
        if self.leap_seconds:
            table = self._get_table()
            leap = table.is_leap_second(seconds * TimeConstant.SEC_TO_USEC)
            if leap:
                seconds -= 1  # Read second 60 as 59, then relabel.
            seconds -= table.leap_seconds(seconds * TimeConstant.SEC_TO_USEC)

        return _split_seconds(seconds, microsecond, leap)

    def from_fields(self, fields) -> TaiTime:
        """Combine calendar fields into a time value.

        Parameters
        ----------
        fields : CalendarFields or sequence of int
            (year, month, day, hour, minute, second, microsecond).

        Returns
        -------
        TaiTime
            TAI time if leap seconds are enabled, otherwise the time value in
            the calendar's scale.

        Raises
        ------
        RangeError
            If a field is out of range, the day does not exist in the month,
            second 60 names an instant that is not a leap second, or (with leap
            seconds enabled) the date precedes 1972 UTC.

        """
        fields = tuple(fields)
        if len(fields) != len(CalendarFields._fields):
            raise RangeError(f"Invalid calendar fields: {fields}")
        year, month, day, hour, minute, second, microsecond = (int(f) for f in fields)

        max_second = 60 if self.leap_seconds else 59
        if (
            not 1 <= month <= 12
            or not 1 <= day <= 31
            or not 0 <= hour <= 23
            or not 0 <= minute <= 59
            or not 0 <= second <= max_second
            or not 0 <= microsecond <= 999999
        ):
            raise RangeError(f"Invalid calendar fields: {fields}")

        month_start = np.datetime64(year - 1970, "Y").astype("M8[M]") + (month - 1)
        first_day = month_start.astype("M8[D]")
        month_length = int(((month_start + 1).astype("M8[D]") - first_day).astype(np.int64))
        if day > month_length:
            raise RangeError(f"Invalid calendar fields, day {day} of a {month_length} day month: {fields}")

        leap_second = second == 60
        stamp = (first_day + (day - 1)).astype("M8[us]") + np.timedelta64(
            hour * 3600 + minute * 60 + (59 if leap_second else second), "s"
        )
        whole = int(stamp.astype(np.int64))
        if whole % TimeConstant.SEC_TO_USEC:
            raise AssertionError(f"State invariant error: calendar left a sub-second remainder ({whole})")

        if self.leap_seconds:
            table = self._get_table()
            value = table.unix_to_tai(whole + microsecond)
            if leap_second:
                value += TimeConstant.SEC_TO_USEC
                if not table.is_leap_second(value):
                    raise RangeError(f"Not a leap second: {fields}")
        else:
            value = whole - int(EpochOffset.TAI_EPOCH_UNIX_USEC) + microsecond

        return TaiTime(value)
