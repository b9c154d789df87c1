"""Exception hierarchy shared by the calendar subsystem."""

from __future__ import annotations


class CalendarError(Exception):
    """Base class for every calendar failure."""


class InvalidDateError(CalendarError, ValueError):
    """A year, month, day or hour lies outside the active calendar convention."""


class InvalidArgumentError(CalendarError, ValueError):
    """An operation received an argument it cannot act on."""


class InvalidPeriodError(CalendarError, ValueError):
    """A period definition is malformed."""


class DuplicateIdError(CalendarError, KeyError):
    """A period with the same identifier is already registered."""


class NotFoundError(CalendarError, KeyError):
    """No period is registered under the requested identifier."""


class TimeOverflowError(CalendarError, OverflowError):
    """Time arithmetic left the representable range."""


__all__ = [
    "CalendarError",
    "DuplicateIdError",
    "InvalidArgumentError",
    "InvalidDateError",
    "InvalidPeriodError",
    "NotFoundError",
    "TimeOverflowError",
]
