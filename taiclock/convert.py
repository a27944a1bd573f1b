"""Convert between time formats (ttype).

Routine Listings
----------------
adapt
    Convert from one time format to another. Maintains container type (e.g.,
    scalar input returns a scalar, list input returns a list).

Examples
--------
>>> adapt([1120176000000000, 1120176000000001], from_='tai', to='utc', decimals=3)
['1993-06-30T23:59:33.000Z', '1993-06-30T23:59:33.000Z']
>>> adapt(['1993-06-30T23:59:60.5Z'], from_='iso', to='tai')
[1120176027500000]
"""

import logging
from types import MappingProxyType

import numpy as np

from . import arrays, cuc, native
from .julian import Mjd2000TimeFormat, MjdTimeFormat
from .taitime import TaiTime
from .timeformat import FormatConfig, SimpleTimeFormat
from .timescale import TimeScale

logger = logging.getLogger(__name__)


def adapt(dt_val, from_=None, to=None, **kwargs):
    """Convert between different date time formats.

    Time Formats
    ------------
    tai : int64, microseconds
        International Atomic Time, microseconds since 1958-01-01T00:00:00 TAI.
        All times are converted to and from TAI.
    taitime : TaiTime
        `TaiTime` objects.
    unix : int64, microseconds
        Microseconds since 1970-01-01T00:00:00 UTC omitting leap seconds. Times
        within a leap second take the next second's Unix values, after which
        Unix time jumps back one second (POSIX). With `freeze=True` they all
        map onto the start of the next second instead.
    dt64 : np.datetime64, us
        Numpy datetime64 type with microsecond precision. Does *not* support
        leapseconds. Default is to round those times up to the nearest second.
        Set `ceil_leapseconds=False` to raise errors instead.
    utc : str, ISO
        Coordinated Universal Time text, e.g. "2016-12-31T23:59:60.000000Z".
        Output has `decimals` fractional digits (default 6). Input accepts
        zero to six.
    iso : str, ISO
        Alias for utc.
    mjd : float64, days
        Modified Julian Date in the time scale `scale` (default UTC). UTC day
        counts cannot represent leap seconds; those times map onto the next
        day.
    mjd2000 : float64, days
        Fractional days since 2000-01-01T00:00:00 in `scale`. See `mjd`.
    cuc : int64
        48-bit CCSDS Unsegmented Time Code, 32 bits of seconds and 16 bits of
        fraction since `epoch` (TAI microseconds, default 1958).

    Parameters
    ----------
    dt_val : scalar or list or tuple or numpy.ndarray of str or int or float
        One or more time values to convert from one time format to another.
    from_ : str, optional
        Time format (ttype) of the input data `dt_val`. Default='tai'.
        Note: Either one or both of `from_` or `to` must be specified.
    to : str, optional
        Time format (ttype) to convert the input data `dt_val`, to.
        Default='tai'.
    **kwargs
        Passes extra keywords to the conversion functions that support them
        (e.g., "decimals" when `to="utc"`).

    Returns
    -------
    scalar or list or tuple or numpy.ndarray
        The converted time(s). When converting multiple times, the output
        container matches the input `dt_val`.

    Raises
    ------
    ValueError
        If a format name is unknown. Errors from the codecs (`FormatError`,
        `RangeError`) are also ValueErrors.

    """
    if from_ is to is None:
        raise ValueError("Keywords either `from_` or `to` must not be None.")

    from_ = "tai" if from_ is None else from_.lower()
    to = "tai" if to is None else to.lower()

    if logger.isEnabledFor(5):  # Trace-ish level.
        logger.log(
            5,
            "Time conversion [%s] -> [%s] for [%d] values of type [%s]",
            from_,
            to,
            1 if np.isscalar(dt_val) or not np.iterable(dt_val) else len(dt_val),
            type(dt_val),
        )

    # Determine how to convert between the formats and then apply it.
    out_val = arrays.apply_conversions(arrays.find_mapping_path(conversions, from_, to), dt_val, **kwargs)

    # Make output match input if it was a list or tuple.
    if isinstance(out_val, np.ndarray) and isinstance(dt_val, (list, tuple)):
        out_val = type(dt_val)(out_val.tolist())

    return out_val


@arrays.InputAsArray(object)
def from_taitime(dt_val):
    """Convert `TaiTime` objects to TAI microseconds."""
    return np.array([int(t) for t in dt_val], dtype=np.int64)


@arrays.InputAsArray(np.int64)
def to_taitime(dt_val):
    """Convert TAI microseconds to `TaiTime` objects."""
    out = np.empty(dt_val.size, dtype=object)
    out[:] = [TaiTime(int(t)) for t in dt_val]
    return out


@arrays.InputAsArray(np.str_)
def from_utc(dt_val):
    """Convert UTC strings to TAI microseconds."""
    fmt = SimpleTimeFormat(TimeScale.UTC)
    return np.array([int(fmt.parse(str(t))) for t in dt_val], dtype=np.int64)


@arrays.InputAsArray(np.int64)
def to_utc(dt_val, decimals=6):
    """Convert TAI microseconds to UTC strings."""
    fmt = SimpleTimeFormat(TimeScale.UTC, FormatConfig(decimals=decimals))
    return np.array([fmt.format(int(t)) for t in dt_val], dtype=np.str_)


def _day_count_converters(format_cls):
    """Build the (from, to) conversions of a day-count format."""

    @arrays.InputAsArray(np.float64)
    def from_days(dt_val, scale="UTC"):
        fmt = format_cls(scale)
        return np.array([int(fmt.from_days(float(d))) for d in dt_val], dtype=np.int64)

    @arrays.InputAsArray(np.int64)
    def to_days(dt_val, scale="UTC"):
        fmt = format_cls(scale)
        return np.array([fmt.to_days(int(t)) for t in dt_val], dtype=np.float64)

    from_days.__doc__ = f"Convert {format_cls.__name__} day counts to TAI microseconds."
    to_days.__doc__ = f"Convert TAI microseconds to {format_cls.__name__} day counts."
    return from_days, to_days


from_mjd, to_mjd = _day_count_converters(MjdTimeFormat)
from_mjd2000, to_mjd2000 = _day_count_converters(Mjd2000TimeFormat)


#
# Map every conversion to itself (mostly) and at least one other!
# The shortest conversion path is used, or if multiple are tied, the order they
# are defined in is used.
#
conversions = MappingProxyType(
    dict(
        tai=dict(
            tai=arrays.noop_int64,
            taitime=to_taitime,
            unix=native.tai2unix,
            dt64=native.tai2datetime64,
            utc=to_utc,
            iso=to_utc,
            mjd=to_mjd,
            mjd2000=to_mjd2000,
            cuc=cuc.tai2cuc,
        ),
        taitime=dict(
            taitime=arrays.noop_object,
            tai=from_taitime,
        ),
        unix=dict(
            unix=arrays.noop_int64,
            tai=native.unix2tai,
        ),
        dt64=dict(
            dt64=arrays.noop_dt64,
            tai=native.datetime642tai,
        ),
        # Note: Text formats only map to TAI so that utc -> utc reformats the
        #   text (e.g. with a different number of decimals).
        utc=dict(
            tai=from_utc,
        ),
        iso=dict(
            tai=from_utc,
        ),
        mjd=dict(
            mjd=arrays.noop_float64,
            tai=from_mjd,
        ),
        mjd2000=dict(
            mjd2000=arrays.noop_float64,
            tai=from_mjd2000,
        ),
        cuc=dict(
            cuc=arrays.noop_int64,
            tai=cuc.cuc2tai,
        ),
    )
)
