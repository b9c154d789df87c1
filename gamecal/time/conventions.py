"""Calendar conventions mapping hour counts to year/month/day/hour tuples.

Two conventions are provided:

* :class:`GregorianConvention` uses the proleptic Gregorian calendar with
  astronomical year numbering, so year ``0`` exists and years before it are
  negative.  Days are 24 hours long and leap years follow the 4/100/400 rule.
* :class:`FixedConvention` models a simplified fantasy calendar in which every
  month has the same number of days and there are no leap years.

Both measure hours from the same epoch: year 1, month 1, day 1, hour 0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..errors import InvalidDateError

YMDH = tuple[int, int, int, int]

# Days between 0000-03-01 (the start of the shifted civil era) and 1970-01-01,
# and between 1970-01-01 and 0001-01-01.
_CIVIL_EPOCH_SHIFT = 719468
_UNIX_TO_EPOCH_DAYS = 719162
_DAYS_PER_ERA = 146097

_GREGORIAN_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return ``True`` when ``year`` is a proleptic Gregorian leap year."""

    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _require_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return value


class CalendarConvention(ABC):
    """Interface shared by the supported calendar conventions."""

    @property
    @abstractmethod
    def hours_per_day(self) -> int:
        """Number of hours in a single day."""

    @property
    @abstractmethod
    def months_per_year(self) -> int:
        """Number of months in a single year."""

    @abstractmethod
    def days_in_month(self, year: int, month: int) -> int:
        """Return the length of ``month`` in ``year``."""

    @abstractmethod
    def _days_from_ymd(self, year: int, month: int, day: int) -> int: ...

    @abstractmethod
    def _ymd_from_days(self, days: int) -> tuple[int, int, int]: ...

    def validate(self, year: int, month: int, day: int, hour: int = 0) -> None:
        """Raise :class:`InvalidDateError` unless the components form a date."""

        _require_int("year", year)
        _require_int("month", month)
        _require_int("day", day)
        _require_int("hour", hour)
        if not 1 <= month <= self.months_per_year:
            raise InvalidDateError(
                f"month {month} outside 1..{self.months_per_year}"
            )
        month_days = self.days_in_month(year, month)
        if not 1 <= day <= month_days:
            raise InvalidDateError(
                f"day {day} outside 1..{month_days} for {year:04d}-{month:02d}"
            )
        self.validate_hour(hour)

    def validate_hour(self, hour: int) -> None:
        _require_int("hour", hour)
        if not 0 <= hour < self.hours_per_day:
            raise InvalidDateError(
                f"hour {hour} outside 0..{self.hours_per_day - 1}"
            )

    def hours_from_ymd(self, year: int, month: int, day: int, hour: int = 0) -> int:
        """Return hours since the epoch for a validated date."""

        self.validate(year, month, day, hour)
        return self._days_from_ymd(year, month, day) * self.hours_per_day + hour

    def ymd_from_hours(self, total_hours: int) -> YMDH:
        """Return the ``(year, month, day, hour)`` tuple for ``total_hours``."""

        days, hour = divmod(total_hours, self.hours_per_day)
        year, month, day = self._ymd_from_days(days)
        return year, month, day, hour


@dataclass(frozen=True)
class GregorianConvention(CalendarConvention):
    """Proleptic Gregorian calendar with 24-hour days."""

    @property
    def hours_per_day(self) -> int:
        return 24

    @property
    def months_per_year(self) -> int:
        return 12

    def days_in_month(self, year: int, month: int) -> int:
        if month == 2 and is_leap_year(year):
            return 29
        return _GREGORIAN_MONTH_DAYS[month - 1]

    def _days_from_ymd(self, year: int, month: int, day: int) -> int:
        shifted_year = year - 1 if month <= 2 else year
        era = shifted_year // 400
        year_of_era = shifted_year - era * 400
        day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
        day_of_era = (
            year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
        )
        return era * _DAYS_PER_ERA + day_of_era - _CIVIL_EPOCH_SHIFT + _UNIX_TO_EPOCH_DAYS

    def _ymd_from_days(self, days: int) -> tuple[int, int, int]:
        shifted = days - _UNIX_TO_EPOCH_DAYS + _CIVIL_EPOCH_SHIFT
        era = shifted // _DAYS_PER_ERA
        day_of_era = shifted - era * _DAYS_PER_ERA
        year_of_era = (
            day_of_era
            - day_of_era // 1460
            + day_of_era // 36524
            - day_of_era // 146096
        ) // 365
        day_of_year = day_of_era - (
            365 * year_of_era + year_of_era // 4 - year_of_era // 100
        )
        shifted_month = (5 * day_of_year + 2) // 153
        day = day_of_year - (153 * shifted_month + 2) // 5 + 1
        month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
        year = year_of_era + era * 400 + (1 if month <= 2 else 0)
        return year, month, day


@dataclass(frozen=True)
class FixedConvention(CalendarConvention):
    """Calendar with equal-length months and no leap years."""

    day_length: int = 24
    days_per_month: int = 30
    month_count: int = 12

    def __post_init__(self) -> None:
        for name in ("day_length", "days_per_month", "month_count"):
            value = _require_int(name, getattr(self, name))
            if value <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def hours_per_day(self) -> int:
        return self.day_length

    @property
    def months_per_year(self) -> int:
        return self.month_count

    @property
    def days_per_year(self) -> int:
        return self.days_per_month * self.month_count

    def days_in_month(self, year: int, month: int) -> int:
        return self.days_per_month

    def _days_from_ymd(self, year: int, month: int, day: int) -> int:
        return (
            (year - 1) * self.days_per_year
            + (month - 1) * self.days_per_month
            + (day - 1)
        )

    def _ymd_from_days(self, days: int) -> tuple[int, int, int]:
        year_offset, day_of_year = divmod(days, self.days_per_year)
        month_offset, day_offset = divmod(day_of_year, self.days_per_month)
        return year_offset + 1, month_offset + 1, day_offset + 1


GREGORIAN = GregorianConvention()


__all__ = [
    "CalendarConvention",
    "FixedConvention",
    "GREGORIAN",
    "GregorianConvention",
    "YMDH",
    "is_leap_year",
]
