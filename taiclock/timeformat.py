"""Calendar text format for times (CCSDS ASCII time code A).

Times are written as ``YYYY-MM-DDThh:mm:ss[.ffffff]`` followed by ``Z`` for UTC
or a space and the scale name otherwise, e.g.::

    1993-06-30T23:59:60.500000Z
    1993-06-30T23:59:59 TAI
    2000-01-01T11:59:27.816 TT

Examples
--------
>>> tai = SimpleTimeFormat(TimeScale.TAI, FormatConfig(decimals=6))
>>> t = tai.parse("1993-06-30T23:59:59 TAI")
>>> tai.format(t)
'1993-06-30T23:59:59.000000 TAI'
>>> SimpleTimeFormat(TimeScale.UTC).format(t)
'1993-06-30T23:59:32Z'
"""

import dataclasses
import logging

from .constants import TimeConstant
from .errors import FormatError, RangeError
from .gregorian import GregorianTimeCalendar
from .taitime import TaiTime
from .timescale import TimeScale

logger = logging.getLogger(__name__)

MAX_DECIMALS = 6
_DIGITS = frozenset("0123456789")

# Offsets of the separators in "YYYY-MM-DDThh:mm:ss".
_SEPARATORS = ((4, "-"), (7, "-"), (10, "T"), (13, ":"), (16, ":"))
_FIELD_SLICES = (slice(0, 4), slice(5, 7), slice(8, 10), slice(11, 13), slice(14, 16), slice(17, 19))
_DATETIME_WIDTH = 19


@dataclasses.dataclass(frozen=True)
class FormatConfig:
    """Options of a `SimpleTimeFormat`.

    Attributes
    ----------
    decimals : int
        Digits of fractional seconds written by `format`, 0 to 6. Default=0.
    rounding : bool
        Round to the last written digit instead of truncating. Default=False.
    strict_fraction : bool
        Require exactly `decimals` fractional digits when parsing (none if
        `decimals` is 0). Otherwise 1 to 6 digits, or none, are accepted.
        Default=False.

    """

    decimals: int = 0
    rounding: bool = False
    strict_fraction: bool = False

    def __post_init__(self):
        if not 0 <= self.decimals <= MAX_DECIMALS:
            raise RangeError(f"Decimal places must be in range 0 to {MAX_DECIMALS}, not: {self.decimals}")


def _is_digits(text):
    return bool(text) and _DIGITS.issuperset(text)


class _FieldParser:
    """Parser for the fixed ``YYYY-MM-DDThh:mm:ss[.f]`` grammar."""

    def __init__(self, config: FormatConfig):
        if config.strict_fraction:
            self.min_fraction = self.max_fraction = config.decimals
        else:
            self.min_fraction, self.max_fraction = 0, MAX_DECIMALS

    def __call__(self, text):
        """Return the seven integer calendar fields of `text`.

        Raises
        ------
        FormatError
            If the text does not follow the grammar.

        """
        if len(text) < _DATETIME_WIDTH:
            raise FormatError(f"Invalid time: {text!r}")
        for pos, sep in _SEPARATORS:
            if text[pos] != sep:
                raise FormatError(f"Invalid time, expected {sep!r} at position {pos}: {text!r}")

        groups = [text[part] for part in _FIELD_SLICES]
        if not all(_is_digits(group) for group in groups):
            raise FormatError(f"Invalid time: {text!r}")

        fraction = text[_DATETIME_WIDTH:]
        if fraction:
            if fraction[0] != "." or not _is_digits(fraction[1:]):
                raise FormatError(f"Invalid fractional seconds: {text!r}")
            fraction = fraction[1:]
        if not self.min_fraction <= len(fraction) <= self.max_fraction:
            raise FormatError(
                f"Invalid time, expected {self.min_fraction} to {self.max_fraction} fractional digits: {text!r}"
            )

        fields = [int(group) for group in groups]
        fields.append(int(fraction.ljust(MAX_DECIMALS, "0")) if fraction else 0)
        return fields


def round_decimals(value, decimals):
    """Round microseconds half-up to `decimals` places of seconds."""
    if decimals >= MAX_DECIMALS:
        return value
    step = 10 ** (MAX_DECIMALS - decimals)
    return (value + step // 2) // step * step


def format_decimals(value, decimals):
    """Fractional seconds of microseconds `value`, truncated to `decimals`."""
    if decimals <= 0:
        return ""
    fraction = value % TimeConstant.SEC_TO_USEC // 10 ** (MAX_DECIMALS - decimals)
    return f".{fraction:0{decimals}d}"


class SimpleTimeFormat:
    """Format and parse times as calendar text in a given time scale.

    Instances are immutable; use `replace` to derive a formatter with other
    options.

    Parameters
    ----------
    scale : TimeScale or str, optional
        Time scale of the text. Default=TAI.
    config : FormatConfig, optional
        Formatting options. Default=`FormatConfig()`.

    """

    def __init__(self, scale=TimeScale.TAI, config=None):
        self._scale = TimeScale.parse(scale)
        self._config = FormatConfig() if config is None else config
        self._calendar = GregorianTimeCalendar(leap_seconds=self._scale.is_leap_aware)
        self._parser = _FieldParser(self._config)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._scale.name}, {self._config})"

    @property
    def scale(self) -> TimeScale:
        return self._scale

    @property
    def config(self) -> FormatConfig:
        return self._config

    def replace(self, scale=None, **changes):
        """Return a new formatter with a different scale and/or options.

        Parameters
        ----------
        scale : TimeScale or str, optional
            New time scale. Default=unchanged.
        **changes
            `FormatConfig` fields to change (e.g. ``decimals=3``).

        """
        config = dataclasses.replace(self._config, **changes) if changes else self._config
        return self.__class__(self._scale if scale is None else scale, config)

    def format(self, time: TaiTime) -> str:
        """Format a time.

        Raises
        ------
        RangeError
            If the year can not be written with four digits, or a UTC time is
            before 1972.

        """
        value = self._scale.tai_to_scale(int(time))
        if self._config.rounding:
            value = round_decimals(value, self._config.decimals)

        fields = self._calendar.to_fields(value)
        if not 0 <= fields.year <= 9999:
            raise RangeError(f"Year {fields.year} can not be formatted: {time!r}")

        return (
            f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}"
            f"T{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}"
            f"{format_decimals(value, self._config.decimals)}{self._scale.label}"
        )

    def parse(self, text: str) -> TaiTime:
        """Parse a time.

        Raises
        ------
        FormatError
            If the suffix does not match the scale or the text is malformed.
        RangeError
            If the fields do not name a valid instant.

        """
        text = text.strip()
        label = self._scale.label
        if not text.endswith(label):
            raise FormatError(f"Suffix {label.strip()!r} expected: {text!r}")

        fields = self._parser(text[: -len(label)])
        value = self._calendar.from_fields(fields)
        return TaiTime(self._scale.scale_to_tai(int(value)))


TAI_FORMAT = SimpleTimeFormat(TimeScale.TAI, FormatConfig(decimals=6))
