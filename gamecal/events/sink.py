"""Notification targets for elapsed calendar periods."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..time.time_value import TimeValue

logger = logging.getLogger(__name__)

PeriodCallback = Callable[[str, TimeValue], None]


@dataclass(frozen=True)
class PeriodFiring:
    """A single elapsed cycle of a registered period."""

    period_id: str
    fired_at: TimeValue


@runtime_checkable
class EventSink(Protocol):
    """Receives a call for every elapsed period cycle."""

    def notify(self, period_id: str, fired_at: TimeValue) -> None: ...


class CallbackSink:
    """Fan notifications out to subscribed callables in subscription order."""

    def __init__(self) -> None:
        self._subscribers: list[PeriodCallback] = []

    def subscribe(self, callback: PeriodCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: PeriodCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscribers(self) -> tuple[PeriodCallback, ...]:
        return tuple(self._subscribers)

    def notify(self, period_id: str, fired_at: TimeValue) -> None:
        logger.debug(
            "Dispatching %s at %s to %d subscriber(s)",
            period_id,
            fired_at,
            len(self._subscribers),
        )
        for callback in list(self._subscribers):
            callback(period_id, fired_at)


__all__ = ["CallbackSink", "EventSink", "PeriodCallback", "PeriodFiring"]
