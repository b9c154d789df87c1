"""Text-based user interface components for the game calendar."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported only for type checkers
    from .app import CalendarApp
    from .channels import NotificationChannel, NotificationRecord
    from .dashboard import CalendarView

__all__ = ["CalendarApp", "CalendarView", "NotificationChannel", "NotificationRecord"]

_EXPORTS = {
    "CalendarApp": "gamecal.ui.app",
    "CalendarView": "gamecal.ui.dashboard",
    "NotificationChannel": "gamecal.ui.channels",
    "NotificationRecord": "gamecal.ui.channels",
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
