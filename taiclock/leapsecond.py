"""Leap-second table and the UTC/Unix aliasing rules.

Importing this module loads the default leap-second table that is included
with this library (see `find_default_file`). Failing to find or parse it is
fatal, since every UTC conversion depends on it. A different table can be
loaded at any time with `load()`; the new table replaces the old one as a
whole, so lookups running concurrently always see one complete table.

Table File Format
-----------------
One entry per line, ``YYYY-MM``, optionally followed by whitespace and a
``# comment``. Blank lines and lines starting with ``#`` are ignored. An entry
names the month at whose start a leap second ended (e.g. ``2017-01`` for
2016-12-31T23:59:60Z). Only January and July entries from 1972-07 onwards are
accepted. Negative leap seconds are not supported.

Time Values
-----------
Functions in this module take and return integer microseconds: TAI values are
counted from 1958-01-01T00:00:00 TAI, Unix values from
1970-01-01T00:00:00 UTC omitting leap seconds.
"""

import datetime
import logging
import os
import re
import threading
import time
from pathlib import Path

import numpy as np
import pandas as pd

from .constants import LEAP_1972, EpochOffset, TimeConstant
from .errors import ConfigurationError, FormatError, RangeError

logger = logging.getLogger(__name__)

_DEFAULT_FILE = Path(__file__).parent / "data" / "leapseconds.txt"
_ENTRY_REGEX = re.compile(r"^(\d{4})-(\d{2})(?:\s+#.*)?$")
_LSK_ENTRY_REGEX = re.compile(r"([0-9]+),\s*@([0-9]{4}-[A-Z]{3}-[0-9]+)", re.I)

LEAPSECOND_ENV = "TAICLOCK_LEAPSECOND_FILE"
LEAPSECOND_USER_FILE_PATH = None


def check_tai(tai):
    """Reject TAI microseconds before 1972-01-01T00:00:00 UTC.

    Raises
    ------
    RangeError
        If the time precedes the leap-second era.

    """
    if tai < EpochOffset.UTC_1972_TAI_USEC:
        raise RangeError(f"Cannot handle time before 1972 UTC: {tai}")


def check_unix(unix):
    """Reject Unix microseconds before 1972-01-01T00:00:00 UTC."""
    if unix < EpochOffset.UTC_1972_UNIX_USEC:
        raise RangeError(f"Cannot handle time before 1972 UTC: {unix}")


class LeapSecondTable:
    """Immutable snapshot of the announced leap seconds.

    Each boundary is the TAI instant at which a leap second ends (00:00:00 of
    the following day, not 23:59:60). The arrays are read-only, so a table can
    be shared freely between threads.

    Parameters
    ----------
    boundaries : sequence of int
        TAI microseconds of each boundary, strictly increasing.
    source : str, optional
        Description of where the table came from (for logging and repr).

    """

    def __init__(self, boundaries, source=None):
        boundaries = np.array(boundaries, dtype=np.int64).ravel()
        if boundaries.size and np.any(np.diff(boundaries) <= 0):
            raise FormatError(f"Leap-second boundaries must be strictly increasing: {boundaries.tolist()}")
        if boundaries.size and boundaries[0] <= EpochOffset.UTC_1972_TAI_USEC:
            raise FormatError(f"First leap-second boundary precedes 1972: {boundaries[0]}")
        if np.any(boundaries % TimeConstant.SEC_TO_USEC):
            raise FormatError("Leap-second boundaries must fall on whole seconds.")

        # Unix time of each boundary: the count has already increased there.
        counts = LEAP_1972 + 1 + np.arange(boundaries.size, dtype=np.int64)
        unix_boundaries = boundaries + int(EpochOffset.TAI_EPOCH_UNIX_USEC) - counts * TimeConstant.SEC_TO_USEC

        # Boundary i must be a 1 January or 1 July midnight, 11+i s after it in TAI.
        days = unix_boundaries.astype("M8[us]").astype("M8[D]")
        months = days.astype("M8[M]")
        misplaced = (
            (unix_boundaries % TimeConstant.DAY_TO_USEC != 0)
            | (days != months.astype("M8[D]"))
            | (months.astype(np.int64) % 6 != 0)
        )
        if np.any(misplaced):
            raise FormatError(
                f"Leap seconds must end at 1 January or 1 July 00:00:00 UTC: {days[misplaced].astype(str).tolist()}"
            )

        boundaries.flags.writeable = False
        unix_boundaries.flags.writeable = False
        self._boundaries = boundaries
        self._unix_boundaries = unix_boundaries
        self.source = source

    def __repr__(self):
        return f"{self.__class__.__name__}(entries={len(self)}, source={self.source!r})"

    def __len__(self):
        return self._boundaries.size

    @property
    def boundaries(self):
        """Read-only int64 array of TAI boundary instants."""
        return self._boundaries

    @property
    def unix_boundaries(self):
        """Read-only int64 array of the boundaries as Unix microseconds."""
        return self._unix_boundaries

    @classmethod
    def from_months(cls, months, source=None):
        """Build a table from (year, month) announcements.

        Parameters
        ----------
        months : iterable of (int, int)
            UTC year and month (1 or 7) at whose start each leap second ended.
        source : str, optional
            Table description.

        Returns
        -------
        LeapSecondTable

        """
        months = list(months)
        for year, month in months:
            if month not in (1, 7):
                raise FormatError(f"Leap seconds only occur at the end of June or December, not: {year}-{month:02d}")
            if (year, month) < (1972, 7):
                raise FormatError(f"Leap-second entries must be on or after 1972-07, not: {year}-{month:02d}")

        dates = np.array([f"{year:04d}-{month:02d}" for year, month in months], dtype="M8[M]")
        unix_days = dates.astype("M8[D]").astype(np.int64)
        counts = LEAP_1972 + 1 + np.arange(len(months), dtype=np.int64)
        boundaries = (
            unix_days * TimeConstant.DAY_TO_USEC
            - int(EpochOffset.TAI_EPOCH_UNIX_USEC)
            + counts * TimeConstant.SEC_TO_USEC
        )
        return cls(boundaries, source=source)

    @classmethod
    def from_lines(cls, lines, source=None):
        """Parse the text table format (see module docs).

        Raises
        ------
        FormatError
            If any non-comment line is malformed.

        """
        months = []
        for lineno, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            match = _ENTRY_REGEX.match(line)
            if match is None:
                raise FormatError(f"Invalid entry in leap-second table (line {lineno}): {line!r}")
            months.append((int(match.group(1)), int(match.group(2))))

        if not months:
            logger.warning("Leap-second table contains no entries: %s", source)
        return cls.from_months(months, source=source)

    @classmethod
    def from_file(cls, filename):
        """Read a leap-second table file.

        Raises
        ------
        ConfigurationError
            If the file cannot be read.
        FormatError
            If the content is malformed.

        """
        filename = Path(filename)
        try:
            txt = filename.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read leap-second table: {filename}") from e
        table = cls.from_lines(txt.splitlines(), source=str(filename))
        logger.debug("Read [%d] leap-second entries from: %s", len(table), filename)
        return table

    @classmethod
    def from_lsk(cls, filename):
        """Read the leap seconds from a NAIF leapsecond kernel (LSK).

        Only the ``DELTET/DELTA_AT`` assignments within ``\\begindata`` blocks
        are used. The first entry must be TAI-UTC=10 at 1972-JAN-1 and each
        later entry must add exactly one second.

        Raises
        ------
        ConfigurationError
            If the file cannot be read.
        FormatError
            If no entries are found, or a step is not a single positive second.

        """
        filename = Path(filename)
        try:
            txt = filename.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read leapsecond kernel: {filename}") from e

        entries = []
        for data in re.findall(r"\\begindata(.*?)(?:\\begintext|\Z)", txt, re.I | re.M | re.DOTALL):
            for delta_at in re.findall(r"DELTET/DELTA_AT\s*=\s*\((.*?)\)", data, re.I | re.M | re.DOTALL):
                entries.extend(_LSK_ENTRY_REGEX.findall(delta_at))
        if not entries:
            raise FormatError(f"No DELTET/DELTA_AT entries found in kernel: {filename}")

        months = []
        previous = None
        for nsec, date in entries:
            nsec = int(nsec)
            when = datetime.datetime.strptime(date.title(), "%Y-%b-%d")
            if when.day != 1:
                raise FormatError(f"Leap-second date is not the first of a month: {date}")
            if previous is None:
                if nsec != LEAP_1972 or (when.year, when.month) != (1972, 1):
                    raise FormatError(f"Kernel must start with TAI-UTC={LEAP_1972} at 1972-JAN-1, not: {nsec} @{date}")
            elif nsec < previous:
                raise FormatError(f"Negative leap seconds are not supported: {previous} -> {nsec} @{date}")
            elif nsec != previous + 1:
                raise FormatError(f"Leap-second steps must be exactly one second: {previous} -> {nsec} @{date}")
            else:
                months.append((when.year, when.month))
            previous = nsec

        table = cls.from_months(months, source=str(filename))
        logger.debug("Read [%d] leap-second entries from kernel: %s", len(table), filename)
        return table

    def is_leap_second(self, tai):
        """Return True if the time is within a leap second.

        That is the UTC second reads in the range [60, 60.999999].

        Parameters
        ----------
        tai : int
            Microseconds since the TAI epoch.

        Returns
        -------
        bool

        Raises
        ------
        RangeError
            If the time is before 1972-01-01 UTC.

        """
        check_tai(tai)
        idx = int(np.searchsorted(self._boundaries, tai, side="right"))
        return idx < self._boundaries.size and int(self._boundaries[idx]) - tai <= TimeConstant.SEC_TO_USEC

    def leap_seconds(self, tai):
        """Return TAI-UTC in whole seconds at the specified time.

        The count includes the 10 seconds that existed in 1972 and increments
        at the end of each leap second (i.e. at midnight UTC).

        Parameters
        ----------
        tai : int
            Microseconds since the TAI epoch.

        Returns
        -------
        int

        Raises
        ------
        RangeError
            If the time is before 1972-01-01 UTC.

        """
        check_tai(tai)
        return LEAP_1972 + int(np.searchsorted(self._boundaries, tai, side="right"))

    def tai_to_unix(self, tai, freeze=False):
        """Convert TAI microseconds to Unix microseconds.

        With `freeze` False the POSIX convention applies: the Unix time runs
        through the leap second and then jumps back by one second, so two TAI
        times map onto the same Unix time. With `freeze` True every time within
        the leap second maps onto the start of the next Unix second, so the
        Unix time never runs backwards but repeats for a second.

        Parameters
        ----------
        tai : int
            Microseconds since the TAI epoch.
        freeze : bool, optional
            Freeze time during a leap second. Default=False (POSIX).

        Returns
        -------
        int
            Microseconds since 1970 omitting leap seconds.

        """
        check_tai(tai)
        idx = int(np.searchsorted(self._boundaries, tai, side="right"))
        if freeze and idx < self._boundaries.size:
            if int(self._boundaries[idx]) - tai <= TimeConstant.SEC_TO_USEC:
                tai = tai - tai % TimeConstant.SEC_TO_USEC
        return tai + int(EpochOffset.TAI_EPOCH_UNIX_USEC) - (LEAP_1972 + idx) * TimeConstant.SEC_TO_USEC

    def unix_to_tai(self, unix):
        """Convert Unix microseconds to TAI microseconds.

        Unix times that could name an instant within a leap second are aliased
        onto the following second, so the result is never inside a leap second.

        Parameters
        ----------
        unix : int
            Microseconds since 1970 omitting leap seconds.

        Returns
        -------
        int
            Microseconds since the TAI epoch.

        """
        check_unix(unix)
        idx = int(np.searchsorted(self._unix_boundaries, unix, side="right"))
        return unix - int(EpochOffset.TAI_EPOCH_UNIX_USEC) + (LEAP_1972 + idx) * TimeConstant.SEC_TO_USEC

    def to_frame(self):
        """Leap-second data as a table.

        Returns
        -------
        pandas.DataFrame
            Index is the UTC date at which each leap second ended. Columns:
                nsec : int, TAI-UTC from that date onwards
                tai : int, TAI microseconds of the boundary
                unix : int, Unix microseconds of the boundary

        """
        index = pd.DatetimeIndex(self._unix_boundaries.astype("M8[us]"), name="utc")
        return pd.DataFrame(
            {
                "nsec": LEAP_1972 + 1 + np.arange(len(self), dtype=np.int64),
                "tai": self._boundaries,
                "unix": self._unix_boundaries,
            },
            index=index,
        )


class LeapSecondContext:
    """Holder of the current leap-second table.

    Readers take the `table` reference once and use that snapshot for the rest
    of an operation. `reload` builds a complete new table before swapping the
    reference, so readers never observe a partially loaded table.
    """

    def __init__(self, table=None):
        self._lock = threading.Lock()
        self._table = table

    def __repr__(self):
        return f"{self.__class__.__name__}({self._table!r})"

    @property
    def table(self) -> LeapSecondTable:
        """Current table snapshot."""
        table = self._table
        if table is None:
            raise ConfigurationError("No leap-second table has been loaded.")
        return table

    def swap(self, table: LeapSecondTable) -> LeapSecondTable:
        """Replace the current table, returning the previous one."""
        with self._lock:
            previous, self._table = self._table, table
        logger.debug("Swapped leap-second table: %r -> %r", previous, table)
        return previous

    def reload(self, filename=None) -> LeapSecondTable:
        """Load a table file (default: `find_default_file()`) and swap it in."""
        if filename is None:
            filename = find_default_file()
        table = LeapSecondTable.from_file(filename)
        self.swap(table)
        return table


def find_default_file():
    """Find the leap-second table to load by default.

    Order of precedence: the module variable `LEAPSECOND_USER_FILE_PATH`, the
    environment variable ``TAICLOCK_LEAPSECOND_FILE``, then the table included
    with this library.

    Returns
    -------
    pathlib.Path
        Path object for the default leap-second table.

    Raises
    ------
    ConfigurationError
        If the resolved file does not exist.

    """
    if LEAPSECOND_USER_FILE_PATH is not None:
        path = Path(LEAPSECOND_USER_FILE_PATH)
    elif os.getenv(LEAPSECOND_ENV, None):
        path = Path(os.getenv(LEAPSECOND_ENV))
    else:
        path = _DEFAULT_FILE

    if not path.is_file():
        raise ConfigurationError(f"Unable to find the leap-second table file: {path}")
    logger.debug("Found default leap-second table: %s", path)

    # The IERS announces leap seconds about six months ahead.
    if (time.time() - path.stat().st_mtime) > int(63072000 / 2 * 3):
        logger.debug("The leap-second table is older than three years. Check IERS Bulletin C for updates.")

    return path


def get_table() -> LeapSecondTable:
    """Return the current leap-second table snapshot."""
    return context.table


def load(filename=None) -> LeapSecondTable:
    """Load a leap-second table, replacing the current one.

    Parameters
    ----------
    filename : str or pathlib.Path, optional
        Table file to load. If omitted, use `find_default_file()`.

    Returns
    -------
    LeapSecondTable
        The newly loaded table.

    """
    return context.reload(filename)


def read_leapseconds(filename=None):
    """Read a leap-second table file into a DataFrame.

    Parameters
    ----------
    filename : str, optional
        Table to read. Default=the currently loaded table.

    Returns
    -------
    pandas.DataFrame
        See `LeapSecondTable.to_frame`.

    """
    table = get_table() if filename is None else LeapSecondTable.from_file(filename)
    return table.to_frame()


def is_leap_second(tai):
    """Return True if TAI microseconds `tai` is within a leap second."""
    return get_table().is_leap_second(tai)


def leap_seconds(tai):
    """Return TAI-UTC seconds at TAI microseconds `tai`."""
    return get_table().leap_seconds(tai)


def tai_to_unix(tai, freeze=False):
    """Convert TAI microseconds to Unix microseconds (see `LeapSecondTable`)."""
    return get_table().tai_to_unix(tai, freeze=freeze)


def unix_to_tai(unix):
    """Convert Unix microseconds to TAI microseconds (see `LeapSecondTable`)."""
    return get_table().unix_to_tai(unix)


context = LeapSecondContext()
context.reload()
