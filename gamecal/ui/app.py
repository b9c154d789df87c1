"""Textual application for watching the game calendar tick."""

from __future__ import annotations

import logging
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import CalendarConfig, PeriodSpec
from ..errors import CalendarError
from ..time.calendar import Calendar
from .channels import NotificationChannel
from .dashboard import CalendarView

logger = logging.getLogger(__name__)


def demo_config() -> CalendarConfig:
    return CalendarConfig(
        periods=[
            PeriodSpec(id="dawn", name="Dawn", hours=24),
            PeriodSpec(id="watch", name="Night watch", hours=8),
            PeriodSpec(id="market", name="Market day", hours=24 * 7),
        ]
    )


class CalendarApp(App[Any]):
    """Interactive viewer that advances a calendar with key presses."""

    CSS = """
    * {
        background: #141414;
        color: #c0c0c0;
    }
    Header, Footer {
        background: #1c1c1c;
        color: #7a7a7a;
        text-style: bold;
    }
    CalendarView {
        height: 1fr;
        padding: 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("h", "advance(1)", "+1 Hour"),
        Binding("space", "advance(24)", "+1 Day"),
        Binding("w", "advance(168)", "+1 Week"),
    ]

    def __init__(
        self,
        *,
        config: CalendarConfig | None = None,
        calendar: Calendar | None = None,
        notification_channel: NotificationChannel | None = None,
    ) -> None:
        super().__init__()
        if calendar is None:
            calendar = (config or demo_config()).build_calendar()
        self.calendar = calendar
        self.notification_channel = notification_channel or NotificationChannel(
            convention=calendar.convention
        )
        if calendar.event_sink is None:
            calendar.attach_sink(self.notification_channel)
        self.calendar_view = CalendarView(
            calendar, notification_channel=self.notification_channel
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield self.calendar_view
        yield Footer()

    def action_advance(self, hours: int) -> None:
        try:
            firings = self.calendar.advance(hours)
        except CalendarError as err:
            logger.warning("Advance by %s hour(s) failed: %s", hours, err)
            self.notify(str(err), severity="error")
            return
        if self.calendar.event_sink is not self.notification_channel:
            self.notification_channel.extend_from_firings(firings)
        self.calendar_view.refresh()


__all__ = ["CalendarApp", "demo_config"]
