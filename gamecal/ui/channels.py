"""Notification channel feeding period firings to the dashboard."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..events.sink import PeriodFiring
from ..time.conventions import GREGORIAN, CalendarConvention
from ..time.time_value import TimeValue


@dataclass
class NotificationRecord:
    """Light-weight notification for surfacing period firings to the UI."""

    fired_at: TimeValue
    period_id: str
    category: str = "period"
    payload: dict[str, Any] = field(default_factory=dict)

    def format_when(self, convention: CalendarConvention | None = None) -> str:
        year, month, day, hour = self.fired_at.to_ymd(convention)
        return f"{year:04d}-{month:02d}-{day:02d} {hour:02d}h"

    def format_brief(self, convention: CalendarConvention | None = None) -> str:
        payload_bits = [f"{key}={value}" for key, value in self.payload.items()]
        payload_text = f" ({', '.join(payload_bits)})" if payload_bits else ""
        return f"[{self.category}] {self.format_when(convention)}: {self.period_id}{payload_text}"


class NotificationChannel:
    """Event sink that keeps the most recent firings for display."""

    def __init__(
        self,
        *,
        max_entries: int = 200,
        convention: CalendarConvention | None = None,
    ) -> None:
        self.max_entries = max_entries
        self.convention = convention or GREGORIAN
        self._notifications: list[NotificationRecord] = []

    @property
    def notifications(self) -> Sequence[NotificationRecord]:
        return tuple(self._notifications)

    def push(self, notification: NotificationRecord) -> None:
        self._notifications.append(notification)
        if len(self._notifications) > self.max_entries:
            self._notifications = self._notifications[-self.max_entries :]

    def notify(self, period_id: str, fired_at: TimeValue) -> None:
        self.push(NotificationRecord(fired_at=fired_at, period_id=period_id))

    def extend_from_firings(self, firings: Iterable[PeriodFiring]) -> None:
        for firing in firings:
            self.notify(firing.period_id, firing.fired_at)

    def clear(self) -> None:
        """Remove all stored notifications."""

        self._notifications.clear()

    def render_panel(self, *, title: str = "Notifications", limit: int = 10):
        from rich.panel import Panel
        from rich.table import Table

        table = Table(expand=True)
        table.add_column("Category", no_wrap=True)
        table.add_column("Message", overflow="fold")

        recent = self._notifications[-limit:] if limit > 0 else []
        for record in reversed(recent):
            table.add_row(record.category, record.format_brief(self.convention))

        return Panel(table, title=title, border_style="magenta")


__all__ = ["NotificationChannel", "NotificationRecord"]
