"""Game calendar: an in-game clock with recurring period notifications."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported only for type checkers
    from .config import CalendarConfig, PeriodSpec
    from .errors import (
        CalendarError,
        DuplicateIdError,
        InvalidArgumentError,
        InvalidDateError,
        InvalidPeriodError,
        NotFoundError,
        TimeOverflowError,
    )
    from .events.sink import CallbackSink, EventSink, PeriodFiring
    from .time.calendar import Calendar, game_calendar
    from .time.period import Period
    from .time.time_value import TimeValue

__version__ = "0.1.0"

__all__ = [
    "Calendar",
    "CalendarConfig",
    "CalendarError",
    "CallbackSink",
    "DuplicateIdError",
    "EventSink",
    "InvalidArgumentError",
    "InvalidDateError",
    "InvalidPeriodError",
    "NotFoundError",
    "Period",
    "PeriodFiring",
    "PeriodSpec",
    "TimeOverflowError",
    "TimeValue",
    "game_calendar",
]

_EXPORTS = {
    "Calendar": "gamecal.time.calendar",
    "game_calendar": "gamecal.time.calendar",
    "CalendarConfig": "gamecal.config",
    "PeriodSpec": "gamecal.config",
    "CalendarError": "gamecal.errors",
    "DuplicateIdError": "gamecal.errors",
    "InvalidArgumentError": "gamecal.errors",
    "InvalidDateError": "gamecal.errors",
    "InvalidPeriodError": "gamecal.errors",
    "NotFoundError": "gamecal.errors",
    "TimeOverflowError": "gamecal.errors",
    "CallbackSink": "gamecal.events.sink",
    "EventSink": "gamecal.events.sink",
    "PeriodFiring": "gamecal.events.sink",
    "Period": "gamecal.time.period",
    "TimeValue": "gamecal.time.time_value",
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = import_module(_EXPORTS[name])
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted({*globals(), *__all__})
