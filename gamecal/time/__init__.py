"""Timekeeping: time values, calendar conventions, periods and the clock."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported only for type checkers
    from .calendar import Calendar
    from .conventions import CalendarConvention, FixedConvention, GregorianConvention
    from .period import Period
    from .time_value import TimeValue

__all__ = [
    "Calendar",
    "CalendarConvention",
    "FixedConvention",
    "GregorianConvention",
    "Period",
    "TimeValue",
]

_EXPORTS = {
    "Calendar": "gamecal.time.calendar",
    "CalendarConvention": "gamecal.time.conventions",
    "FixedConvention": "gamecal.time.conventions",
    "GregorianConvention": "gamecal.time.conventions",
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
