"""Time intervals."""

from dataclasses import dataclass
from typing import Optional

from .errors import RangeError
from .taitime import TaiTime


@dataclass(frozen=True)
class TimeInterval:
    """Half-open interval [start, start + duration).

    Parameters
    ----------
    start : TaiTime
        First instant of the interval.
    duration : int
        Length in microseconds, zero or more. A zero length interval is null
        and contains nothing.

    """

    start: TaiTime
    duration: int

    def __post_init__(self):
        if not isinstance(self.start, TaiTime):
            object.__setattr__(self, "start", TaiTime(self.start))
        if self.duration < 0:
            raise RangeError(f"Interval duration must not be negative: {self.duration}")
        object.__setattr__(self, "duration", int(self.duration))

    @classmethod
    def from_times(cls, start: TaiTime, stop: TaiTime) -> "TimeInterval":
        """Interval from `start` up to, not including, `stop`."""
        return cls(start, stop - start)

    @property
    def finish(self) -> TaiTime:
        """First instant after the interval."""
        return self.start + self.duration

    @property
    def is_null(self) -> bool:
        return self.duration == 0

    def contains(self, other) -> bool:
        """True if a time (TaiTime or int), or all of a non-null interval, lies within this one."""
        if isinstance(other, TimeInterval):
            if other.is_null:
                return self.contains(other.start)
            return self.start <= other.start and other.finish <= self.finish
        return self.start <= _as_time(other) < self.finish

    def intersection(self, other: "TimeInterval") -> Optional["TimeInterval"]:
        """Overlap of two intervals, or None if they are disjoint.

        Intervals that only touch (one finishes where the other starts) give a
        null interval at that instant.
        """
        start = self.start.latest(other.start)
        finish = self.finish.earliest(other.finish)
        if finish < start:
            return None
        return TimeInterval.from_times(start, finish)

    def starts_before(self, other) -> bool:
        """True if this interval starts before a time or another interval."""
        return self.start < _as_time(other)

    def starts_after(self, other) -> bool:
        """True if this interval starts after a time or another interval."""
        return self.start > _as_time(other)

    def starts_at_or_before(self, other) -> bool:
        return not self.starts_after(other)

    def starts_at_or_after(self, other) -> bool:
        return not self.starts_before(other)

    def __str__(self):
        return f"{self.start} to {self.finish}"


def _as_time(other) -> TaiTime:
    """Start of an interval, or a time given as TaiTime or integer microseconds."""
    if isinstance(other, TimeInterval):
        return other.start
    return other if isinstance(other, TaiTime) else TaiTime(other)
