"""Clock widget for the calendar dashboard."""

from __future__ import annotations

from rich.console import RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from textual.binding import Binding
from textual.widget import Widget

from ..time.calendar import Calendar
from .channels import NotificationChannel


def _build_clock_panel(calendar: Calendar) -> RenderableType:
    year, month, day, hour = calendar.current_ymd()
    table = Table.grid(padding=(0, 1), expand=True)
    table.add_row("[bold]Date[/bold]", f"{year:04d}-{month:02d}-{day:02d}")
    table.add_row("[bold]Hour[/bold]", f"{hour:02d}")
    table.add_row("[bold]Total hours[/bold]", str(calendar.current_time.total_hours))
    return Panel(table, title="Calendar", border_style="blue")


def _build_periods_panel(calendar: Calendar) -> RenderableType:
    if not calendar.periods:
        return Panel("No periods registered", title="Periods", border_style="cyan")
    table = Table(expand=True)
    table.add_column("Period", overflow="fold")
    table.add_column("Every", justify="right", no_wrap=True)
    table.add_column("Next", justify="right", no_wrap=True)
    convention = calendar.convention
    for period in calendar.periods:
        year, month, day, hour = convention.ymd_from_hours(
            calendar.next_firing(period.id).total_hours
        )
        table.add_row(
            period.label,
            f"{period.duration_hours}h",
            f"{year:04d}-{month:02d}-{day:02d} {hour:02d}h",
        )
    return Panel(table, title="Periods", border_style="cyan")


class CalendarView(Widget):
    """Display the clock, registered periods and recent notifications."""

    BINDINGS = [
        Binding("c", "clear_notifications", "Clear Notifs", show=False),
    ]

    def __init__(
        self,
        calendar: Calendar,
        *,
        notification_channel: NotificationChannel | None = None,
    ) -> None:
        super().__init__(id="calendar")
        self.calendar = calendar
        self.notification_channel = notification_channel or NotificationChannel(
            convention=calendar.convention
        )

    def action_clear_notifications(self) -> None:
        self.notification_channel.clear()
        self.refresh()

    def render(self) -> RenderableType:
        layout = Layout(name="calendar")
        layout.split_column(
            Layout(_build_clock_panel(self.calendar), name="clock", size=7),
            Layout(_build_periods_panel(self.calendar), name="periods", ratio=1),
            Layout(
                self.notification_channel.render_panel(title="Notifications"),
                name="notifications",
                ratio=1,
            ),
        )
        return layout


__all__ = ["CalendarView"]
