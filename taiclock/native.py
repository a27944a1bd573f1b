"""Vectorized time conversions on numpy arrays.

Times are int64 microseconds: TAI from 1958-01-01T00:00:00 TAI, Unix from
1970-01-01T00:00:00 UTC omitting leap seconds. Each function uses a single
leap-second table snapshot for the whole array.
"""

import logging

import numpy as np

from . import leapsecond
from .arrays import InputAsArray
from .constants import LEAP_1972, EpochOffset, TimeConstant
from .errors import RangeError

logger = logging.getLogger(__name__)


def _check_range(times, minimum):
    bad = times < minimum
    if bad.any():
        raise RangeError(f"Cannot handle [{bad.sum()}] times before 1972 UTC: [{times[bad]}]")


def _leap_mask(boundaries, times, idx):
    """Mask of the times within a leap second, given their `searchsorted` index."""
    mask = idx < boundaries.size
    mask[mask] = boundaries[idx[mask]] - times[mask] <= TimeConstant.SEC_TO_USEC
    return mask


@InputAsArray(np.int64)
def is_leap_second(times):
    """Flag TAI microseconds that fall within a leap second."""
    boundaries = leapsecond.get_table().boundaries
    _check_range(times, EpochOffset.UTC_1972_TAI_USEC)
    idx = np.searchsorted(boundaries, times, side="right")
    return _leap_mask(boundaries, times, idx)


@InputAsArray(np.int64)
def tai2unix(times, freeze=False):
    """Convert TAI microseconds to Unix microseconds.

    Parameters
    ----------
    times : int or list[int] or numpy.ndarray or pandas.Series
        One or more TAI times to convert.
    freeze : bool, optional
        Map times within a leap second onto the start of the next Unix second.
        Default=False, the POSIX convention: a leap second runs through the
        next second's Unix values and Unix time then jumps back one second.

    Returns
    -------
    int or numpy.ndarray
        Converted times - output is a scalar if the input was, otherwise it's
        an array.

    """
    boundaries = leapsecond.get_table().boundaries
    _check_range(times, EpochOffset.UTC_1972_TAI_USEC)

    idx = np.searchsorted(boundaries, times, side="right")
    if freeze:
        leap = _leap_mask(boundaries, times, idx)
        if leap.any():
            times = times.copy()
            times[leap] -= times[leap] % TimeConstant.SEC_TO_USEC
    return times + int(EpochOffset.TAI_EPOCH_UNIX_USEC) - (LEAP_1972 + idx) * TimeConstant.SEC_TO_USEC


@InputAsArray(np.int64)
def unix2tai(times):
    """Convert Unix microseconds to TAI microseconds.

    Returns
    -------
    int or numpy.ndarray
        Converted times, never within a leap second - output is a scalar if
        the input was, otherwise it's an array.

    """
    unix_boundaries = leapsecond.get_table().unix_boundaries
    _check_range(times, EpochOffset.UTC_1972_UNIX_USEC)

    idx = np.searchsorted(unix_boundaries, times, side="right")
    return times - int(EpochOffset.TAI_EPOCH_UNIX_USEC) + (LEAP_1972 + idx) * TimeConstant.SEC_TO_USEC


@InputAsArray(np.int64)
def tai2datetime64(times, ceil_leapseconds=True):
    """Convert TAI microseconds to datetime64[us].

    Fast conversion; very convenient for plotting.

    Parameters
    ----------
    times : int or list[int] or numpy.ndarray or pandas.Series
        One or more TAI times to convert.
    ceil_leapseconds : bool, optional
        Ceil times within a leapsecond. Datetime64 does not support times within
        leapseconds. Default=True, otherwise throws a RangeError if encountered.

    Returns
    -------
    numpy.datetime64 or numpy.ndarray
        Converted times - output is a scalar if the input was, otherwise it's
        an array.

    """
    boundaries = leapsecond.get_table().boundaries
    _check_range(times, EpochOffset.UTC_1972_TAI_USEC)

    idx = np.searchsorted(boundaries, times, side="right")
    leap = _leap_mask(boundaries, times, idx)
    if leap.any():
        # Option to error since dt64 doesn't support leapseconds.
        if not ceil_leapseconds:
            raise RangeError(
                "Datetime64 does not support times within leapseconds! Set `ceil_leapseconds=True`"
                " to round up those times and prevent this error (default)."
                f" Found [{leap.sum()}] times: [{times[leap]}]"
            )
        times = times.copy()
        times[leap] -= times[leap] % TimeConstant.SEC_TO_USEC

    usec = times + int(EpochOffset.TAI_EPOCH_UNIX_USEC) - (LEAP_1972 + idx) * TimeConstant.SEC_TO_USEC
    return usec.astype("M8[us]")


@InputAsArray("M8[us]")
def datetime642tai(times):
    """Convert datetime64[us] to TAI microseconds.

    Parameters
    ----------
    times : numpy.datetime64 or numpy.ndarray
        Scalar or array of datetime64 values with microsecond precision.

    Returns
    -------
    int or numpy.ndarray
        Converted TAI times - output is a scalar if the input was, otherwise
        it's an array.

    """
    return unix2tai(times.astype(np.int64))
