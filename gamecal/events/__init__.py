"""Event sinks receiving elapsed period notifications."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported only for type checkers
    from .event_queue import EventQueueSink, QueuedEvent
    from .sink import CallbackSink, EventSink, PeriodFiring

__all__ = ["CallbackSink", "EventQueueSink", "EventSink", "PeriodFiring", "QueuedEvent"]

_EXPORTS = {
    "CallbackSink": "gamecal.events.sink",
    "EventSink": "gamecal.events.sink",
    "PeriodFiring": "gamecal.events.sink",
    "EventQueueSink": "gamecal.events.event_queue",
    "QueuedEvent": "gamecal.events.event_queue",
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
