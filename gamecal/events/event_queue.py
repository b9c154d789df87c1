"""Event queue collecting period firings until the turn loop drains them."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from itertools import count
from typing import Any

from ..time.time_value import TimeValue


@dataclass
class QueuedEvent:
    """A period firing waiting to be handled by game logic."""

    fired_at: TimeValue
    period_id: str
    payload: dict[str, Any] = field(default_factory=dict)


class EventQueueSink:
    """Event sink that queues firings keyed by the hour they occurred.

    Events fired at the same hour keep their delivery order, so draining the
    queue reproduces the order in which the calendar emitted them.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, QueuedEvent]] = []
        self._counter = count()

    def notify(self, period_id: str, fired_at: TimeValue) -> None:
        self.schedule(fired_at, period_id)

    def schedule(
        self,
        fired_at: TimeValue,
        period_id: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Queue an event for ``fired_at``."""

        event = QueuedEvent(fired_at=fired_at, period_id=period_id, payload=payload or {})
        heapq.heappush(self._heap, (fired_at.total_hours, next(self._counter), event))

    def events_at(self, when: TimeValue) -> list[QueuedEvent]:
        """Return events queued for ``when`` without removing them."""

        return [
            entry[2] for entry in sorted(self._heap) if entry[0] == when.total_hours
        ]

    def pop_due(self, until: TimeValue) -> list[QueuedEvent]:
        """Remove and return every event fired at or before ``until``."""

        popped: list[QueuedEvent] = []
        while self._heap and self._heap[0][0] <= until.total_hours:
            _, _, event = heapq.heappop(self._heap)
            popped.append(event)
        return popped

    def has_events(self) -> bool:
        return bool(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def pending_times(self) -> list[TimeValue]:
        return [TimeValue(hours) for hours in sorted({hours for hours, _, _ in self._heap})]

    def clear(self) -> None:
        self._heap.clear()
        self._counter = count()


__all__ = ["EventQueueSink", "QueuedEvent"]
