"""Immutable points in game time."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from ..errors import TimeOverflowError
from .conventions import GREGORIAN, YMDH, CalendarConvention

MIN_HOURS = -(2**63)
MAX_HOURS = 2**63 - 1


def _checked(total_hours: int) -> int:
    if not MIN_HOURS <= total_hours <= MAX_HOURS:
        raise TimeOverflowError(
            f"{total_hours} hours is outside the representable range "
            f"[{MIN_HOURS}, {MAX_HOURS}]"
        )
    return total_hours


@total_ordering
@dataclass(frozen=True, eq=False)
class TimeValue:
    """An absolute point in game time, measured in hours since the epoch.

    The epoch (``total_hours == 0``) is year 1, month 1, day 1, hour 0.
    Values are ordered and compared by ``total_hours`` alone, so the same
    instant converted under different conventions compares equal.
    """

    total_hours: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.total_hours, bool) or not isinstance(self.total_hours, int):
            raise TypeError("total_hours must be an integer")
        _checked(self.total_hours)

    @classmethod
    def from_ymd(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        *,
        convention: CalendarConvention | None = None,
    ) -> TimeValue:
        """Build a value from calendar components.

        Raises :class:`~gamecal.errors.InvalidDateError` for components outside
        the convention's ranges and :class:`~gamecal.errors.TimeOverflowError`
        when the year is too far from the epoch.
        """

        active = convention or GREGORIAN
        return cls(_checked(active.hours_from_ymd(year, month, day, hour)))

    def to_ymd(self, convention: CalendarConvention | None = None) -> YMDH:
        """Return ``(year, month, day, hour)`` under ``convention``."""

        return (convention or GREGORIAN).ymd_from_hours(self.total_hours)

    def add(self, hours: int) -> TimeValue:
        """Return a new value ``hours`` later (or earlier when negative)."""

        if isinstance(hours, bool) or not isinstance(hours, int):
            raise TypeError("hours must be an integer")
        return TimeValue(_checked(self.total_hours + hours))

    def difference(self, other: TimeValue) -> int:
        """Hours from ``other`` to ``self``; positive when ``self`` is later."""

        return self.total_hours - other.total_hours

    @property
    def year(self) -> int:
        return self.to_ymd()[0]

    @property
    def month(self) -> int:
        return self.to_ymd()[1]

    @property
    def day(self) -> int:
        return self.to_ymd()[2]

    @property
    def hour(self) -> int:
        return self.to_ymd()[3]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeValue):
            return NotImplemented
        return self.total_hours == other.total_hours

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeValue):
            return NotImplemented
        return self.total_hours < other.total_hours

    def __hash__(self) -> int:
        return hash(self.total_hours)

    def __add__(self, hours: object) -> TimeValue:
        if isinstance(hours, bool) or not isinstance(hours, int):
            return NotImplemented
        return self.add(hours)

    def __sub__(self, other: object) -> int | TimeValue:
        if isinstance(other, TimeValue):
            return self.difference(other)
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return self.add(-other)

    def __str__(self) -> str:
        year, month, day, hour = self.to_ymd()
        return f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:00"


EPOCH = TimeValue(0)


__all__ = ["EPOCH", "MAX_HOURS", "MIN_HOURS", "TimeValue"]
