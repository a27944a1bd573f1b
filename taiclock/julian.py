"""Modified Julian Date formats.

MJD
    Fractional days since 1858-11-17T00:00:00 in the chosen time scale.
MJD2000
    Fractional days since 2000-01-01T00:00:00 in the chosen time scale (not
    the J2000.0 epoch, which is at mid-day).

Days always have 86400 seconds, so UTC day counts cannot represent a leap
second: every instant within it maps onto the start of the next day, and
decoding that value returns the instant after the leap second.

Examples
--------
>>> Mjd2000TimeFormat(TimeScale.TAI).format(TaiTime(15340 * 86400000000))
'0.0'
"""

import logging
import math

from . import leapsecond
from .constants import EpochDays, EpochOffset, TimeConstant
from .errors import FormatError
from .taitime import TaiTime
from .timescale import TimeScale

logger = logging.getLogger(__name__)


class DayCountFormat:
    """Fractional day count in a time scale, relative to some epoch.

    Subclasses set `EPOCH_1958`, the whole days from 1958-01-01 to the day
    count's zero.

    Parameters
    ----------
    scale : TimeScale or str, optional
        Time scale of the day count. Default=TAI.

    """

    EPOCH_1958 = 0

    def __init__(self, scale=TimeScale.TAI):
        self._scale = TimeScale.parse(scale)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._scale.name})"

    @property
    def scale(self) -> TimeScale:
        return self._scale

    def to_days(self, time) -> float:
        """Convert a time to a fractional day count.

        Raises
        ------
        RangeError
            For UTC, if the time is before 1972.

        """
        tai = int(time)

        if self._scale is TimeScale.UTC:
            table = leapsecond.get_table()
            nsec = table.leap_seconds(tai)
            whole = tai - tai % TimeConstant.SEC_TO_USEC
            if table.is_leap_second(whole):
                tai = whole
            tai -= nsec * TimeConstant.SEC_TO_USEC

        value = self._scale.tai_to_scale(tai)
        return (value - self.EPOCH_1958 * TimeConstant.DAY_TO_USEC) / TimeConstant.DAY_TO_USEC

    def from_days(self, days: float) -> TaiTime:
        """Convert a fractional day count to a time, to the nearest microsecond.

        Raises
        ------
        RangeError
            For UTC, if the day count is before 1972.

        """
        value = round(days * TimeConstant.DAY_TO_USEC) + self.EPOCH_1958 * TimeConstant.DAY_TO_USEC
        tai = self._scale.scale_to_tai(value)

        if self._scale is TimeScale.UTC:
            tai = leapsecond.get_table().unix_to_tai(tai + int(EpochOffset.TAI_EPOCH_UNIX_USEC))
        return TaiTime(tai)

    def format(self, time) -> str:
        """Format a time as a decimal day count."""
        return repr(self.to_days(time))

    def parse(self, text: str) -> TaiTime:
        """Parse a decimal day count.

        Raises
        ------
        FormatError
            If the text is not a finite number.

        """
        try:
            days = float(text)
        except (TypeError, ValueError):
            raise FormatError(f"Invalid day count: {text!r}") from None
        if not math.isfinite(days):
            raise FormatError(f"Invalid day count: {text!r}")
        return self.from_days(days)


class MjdTimeFormat(DayCountFormat):
    """Modified Julian Date (days since 1858-11-17)."""

    EPOCH_1958 = -EpochDays.MJD_1958

    def to_mjd(self, time) -> float:
        return self.to_days(time)

    def from_mjd(self, mjd: float) -> TaiTime:
        return self.from_days(mjd)


class Mjd2000TimeFormat(DayCountFormat):
    """Modified Julian Date 2000 (days since 2000-01-01T00:00:00)."""

    EPOCH_1958 = EpochDays.MJD2000_1958

    def to_mjd2000(self, time) -> float:
        return self.to_days(time)

    def from_mjd2000(self, mjd2000: float) -> TaiTime:
        return self.from_days(mjd2000)
