"""CCSDS Unsegmented Time Code (CUC).

The 48-bit code used here has a 32-bit `coarse` field of whole seconds and a
16-bit `fine` field of 1/65536 second units, counted from an epoch (by default
the 1958 TAI epoch). It is written big-endian, optionally preceded by the
P-field octet 0b00011110, which announces exactly this layout with the 1958
epoch.

Times have microsecond resolution, which is finer than a fine unit
(about 15.3 us), so every (coarse, fine) pair survives a round trip through
`TaiTime`:

>>> conv = CucConverter()
>>> t = conv.to_tai_time(1514764836, 12345)
>>> conv.coarse(t), conv.fine(t)
(1514764836, 12345)
"""

import logging

import numpy as np

from .arrays import InputAsArray
from .constants import TimeConstant
from .errors import FormatError, RangeError
from .taitime import TaiTime

logger = logging.getLogger(__name__)

FINE_BITS = 16
COARSE_BITS = 32
FINE_MOD = 1 << FINE_BITS
HALF_FINE_MOD = FINE_MOD // 2
COARSE_MOD = 1 << COARSE_BITS
CUC_MOD = 1 << (COARSE_BITS + FINE_BITS)
CUC_BYTES = (COARSE_BITS + FINE_BITS) // 8

RESOLUTION = int(TimeConstant.SEC_TO_USEC)
HALF_RES = RESOLUTION // 2

# P-field: time code ID 001 (1958 epoch), 4 octets of coarse, 2 octets of fine.
PFIELD = 0b00011110


class CucConverter:
    """Convert between `TaiTime` and CUC values.

    Decoding rounds to the nearest microsecond and encoding to the nearest fine
    unit, so decoding then encoding returns the same (coarse, fine).

    Parameters
    ----------
    epoch : TaiTime or int, optional
        Time of CUC zero, in TAI microseconds. Default=0 (1958 TAI epoch).

    """

    def __init__(self, epoch=0):
        self._epoch = int(epoch)

    def __repr__(self):
        return f"{self.__class__.__name__}(epoch={self._epoch})"

    @property
    def epoch(self) -> TaiTime:
        return TaiTime(self._epoch)

    @staticmethod
    def _fine_to_micros(fine):
        return (fine * RESOLUTION + HALF_FINE_MOD) // FINE_MOD

    @staticmethod
    def split(cuc):
        """Split a 48-bit CUC value into (coarse, fine).

        Raises
        ------
        RangeError
            If the value does not fit in 48 bits.

        """
        if not 0 <= cuc < CUC_MOD:
            raise RangeError(f"CUC value out of range: {cuc}")
        return divmod(int(cuc), FINE_MOD)

    def to_microseconds(self, cuc) -> int:
        """Microseconds since the CUC epoch of a 48-bit CUC value."""
        coarse, fine = self.split(cuc)
        return coarse * RESOLUTION + self._fine_to_micros(fine)

    def to_tai_time(self, coarse, fine) -> TaiTime:
        """Convert a (coarse, fine) pair to a time.

        Raises
        ------
        RangeError
            If a field does not fit its bit width.

        """
        if not 0 <= coarse < COARSE_MOD or not 0 <= fine < FINE_MOD:
            raise RangeError(f"CUC fields out of range: coarse={coarse} fine={fine}")
        return TaiTime(int(coarse) * RESOLUTION + self._fine_to_micros(int(fine)) + self._epoch)

    def from_cuc(self, cuc) -> TaiTime:
        """Convert a 48-bit CUC value to a time."""
        return self.to_tai_time(*self.split(cuc))

    def _offset(self, time):
        offset = int(time) - self._epoch
        if offset < 0:
            raise RangeError(f"Time before CUC epoch: {time!r}")
        return offset

    def cuc_value(self, time) -> int:
        """48-bit CUC value of a time, rounded half-up to the nearest fine unit.

        Raises
        ------
        RangeError
            If the time is before the epoch or too late for 32 bits of coarse.

        """
        coarse, micros = divmod(self._offset(time), RESOLUTION)
        # Within the last 7 us of a second, fine rounds up to FINE_MOD and carries.
        cuc = coarse * FINE_MOD + (micros * FINE_MOD + HALF_RES) // RESOLUTION
        if cuc >= CUC_MOD:
            raise RangeError(f"Time beyond CUC range: {time!r}")
        return cuc

    def coarse(self, time) -> int:
        """Whole seconds since the CUC epoch (see `cuc_value`)."""
        return self.cuc_value(time) // FINE_MOD

    def fine(self, time) -> int:
        """Fraction of the second in 1/65536 units (see `cuc_value`)."""
        return self.cuc_value(time) % FINE_MOD

    def encode(self, time, pfield=False) -> bytes:
        """Encode a time as 6 big-endian octets (7 with the P-field)."""
        data = self.cuc_value(time).to_bytes(CUC_BYTES, "big")
        return bytes([PFIELD]) + data if pfield else data

    def decode(self, data) -> TaiTime:
        """Decode 6 octets of CUC, or 7 starting with the P-field.

        Raises
        ------
        FormatError
            If the length or the P-field is not the expected one.

        """
        data = bytes(data)
        if len(data) == CUC_BYTES + 1:
            if data[0] != PFIELD:
                raise FormatError(f"Unsupported CUC P-field: {data[0]:#010b}")
            data = data[1:]
        elif len(data) != CUC_BYTES:
            raise FormatError(f"CUC data must be {CUC_BYTES} octets (or {CUC_BYTES + 1} with P-field): {len(data)}")
        return self.from_cuc(int.from_bytes(data, "big"))


@InputAsArray(np.int64)
def cuc2tai(times, epoch=0):
    """Convert 48-bit CUC values to TAI microseconds.

    Parameters
    ----------
    times : int or list[int] or numpy.ndarray
        One or more CUC values.
    epoch : int, optional
        TAI microseconds of CUC zero. Default=0.

    Returns
    -------
    int or numpy.ndarray
        TAI microseconds - output is a scalar if the input was, otherwise it's
        an array.

    """
    if np.any((times < 0) | (times >= CUC_MOD)):
        raise RangeError(f"CUC values out of range: {times[(times < 0) | (times >= CUC_MOD)]}")
    coarse, fine = np.divmod(times, FINE_MOD)
    return coarse * RESOLUTION + (fine * RESOLUTION + HALF_FINE_MOD) // FINE_MOD + int(epoch)


@InputAsArray(np.int64)
def tai2cuc(times, epoch=0):
    """Convert TAI microseconds to 48-bit CUC values.

    Raises
    ------
    RangeError
        If a time is before the epoch or beyond the 32-bit coarse range.

    """
    offset = times - int(epoch)
    coarse, micros = np.divmod(offset, RESOLUTION)
    cuc = coarse * FINE_MOD + (micros * FINE_MOD + HALF_RES) // RESOLUTION
    bad = (offset < 0) | (cuc >= CUC_MOD)
    if np.any(bad):
        raise RangeError(f"Times outside the CUC range: {times[bad]}")
    return cuc
