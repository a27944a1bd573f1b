"""Well-known epochs."""

from .constants import EpochOffset
from .julian import MjdTimeFormat
from .taitime import TaiTime
from .timescale import TimeScale

# 1958-01-01T00:00:00 TAI, origin of `TaiTime`.
TAI_1958 = TaiTime(0)

# 1972-01-01T00:00:00Z, start of the leap-second era (TAI-UTC = 10 s).
UTC_1972 = TaiTime(int(EpochOffset.UTC_1972_TAI_USEC))

# 2000-01-01T12:00:00 TT.
J2000 = MjdTimeFormat(TimeScale.TT).from_mjd(51544.5)
