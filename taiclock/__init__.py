"""Precise astronomical time with leap seconds and microsecond resolution.

Module Listings
---------------
taitime
    `TaiTime`, microseconds since 1958-01-01T00:00:00 TAI.
leapsecond
    Leap-second table and the UTC/Unix aliasing rules. The table included
    with this package is loaded on import.
timescale
    TAI, UTC, TT and TDB.
gregorian
    Proleptic Gregorian calendar with leap seconds.
timeformat
    Calendar text format, e.g. "2016-12-31T23:59:60.500Z".
julian
    MJD and MJD2000 day counts.
cuc
    CCSDS Unsegmented Time Code.
unixtime, native
    Unix time and datetime conversions, scalar and vectorized.
interval
    `TimeInterval`.
convert
    `adapt` for converting from one format to another.

Examples
--------
>>> import taiclock
>>> utc = taiclock.SimpleTimeFormat('UTC', taiclock.FormatConfig(decimals=1))
>>> t = utc.parse('2016-12-31T23:59:60.5Z')
>>> taiclock.leapsecond.is_leap_second(int(t))
True
>>> utc.format(t.add_seconds(1))
'2017-01-01T00:00:00.5Z'
"""

from . import constants, leapsecond, native, utils
from .convert import adapt
from .cuc import CucConverter
from .epoch import J2000, TAI_1958, UTC_1972
from .errors import ConfigurationError, FormatError, RangeError
from .gregorian import CalendarFields, GregorianTimeCalendar
from .interval import TimeInterval
from .julian import Mjd2000TimeFormat, MjdTimeFormat
from .taitime import TaiTime
from .timeformat import FormatConfig, SimpleTimeFormat
from .timescale import TimeScale
from .unixtime import datetime_to_tai, tai_to_datetime, tai_to_unix_time, unix_to_tai_time

__all__ = [
    "constants",
    "leapsecond",
    "native",
    "utils",
    "adapt",
    "CucConverter",
    "J2000",
    "TAI_1958",
    "UTC_1972",
    "ConfigurationError",
    "FormatError",
    "RangeError",
    "CalendarFields",
    "GregorianTimeCalendar",
    "TimeInterval",
    "MjdTimeFormat",
    "Mjd2000TimeFormat",
    "TaiTime",
    "FormatConfig",
    "SimpleTimeFormat",
    "TimeScale",
    "datetime_to_tai",
    "tai_to_datetime",
    "tai_to_unix_time",
    "unix_to_tai_time",
]
