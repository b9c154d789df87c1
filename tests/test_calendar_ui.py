from __future__ import annotations

from rich.layout import Layout
from rich.panel import Panel

from gamecal.config import CalendarConfig, PeriodSpec
from gamecal.time.calendar import Calendar
from gamecal.time.period import Period
from gamecal.time.time_value import TimeValue
from gamecal.ui.app import CalendarApp, demo_config
from gamecal.ui.channels import NotificationChannel, NotificationRecord
from gamecal.ui.dashboard import CalendarView


def test_notification_channel_records_calendar_firings() -> None:
    channel = NotificationChannel()
    calendar = Calendar(event_sink=channel)
    calendar.register_period(Period("dawn", duration_hours=24))

    calendar.advance(48)

    assert [(record.period_id, record.fired_at) for record in channel.notifications] == [
        ("dawn", TimeValue(24)),
        ("dawn", TimeValue(48)),
    ]


def test_notification_channel_trims_to_max_entries() -> None:
    channel = NotificationChannel(max_entries=3)
    for hour in range(5):
        channel.notify("tick", TimeValue(hour))

    assert [record.fired_at.total_hours for record in channel.notifications] == [2, 3, 4]
    channel.clear()
    assert channel.notifications == ()


def test_format_brief() -> None:
    record = NotificationRecord(
        fired_at=TimeValue.from_ymd(1, 1, 2, 0), period_id="dawn", payload={"phase": 1}
    )

    assert record.format_brief() == "[period] 0001-01-02 00h: dawn (phase=1)"


def test_render_panel_returns_rich_panel() -> None:
    channel = NotificationChannel()
    channel.notify("dawn", TimeValue(24))

    assert isinstance(channel.render_panel(), Panel)


def test_calendar_view_renders_layout() -> None:
    calendar = CalendarConfig(periods=[PeriodSpec(id="dawn", hours=24)]).build_calendar()
    view = CalendarView(calendar)

    assert isinstance(view.render(), Layout)


def test_app_attaches_notification_channel_as_sink() -> None:
    app = CalendarApp()

    assert app.calendar.event_sink is app.notification_channel
    assert [period.id for period in app.calendar.periods] == [
        spec.id for spec in demo_config().periods
    ]


def test_app_keeps_existing_sink() -> None:
    channel = NotificationChannel()
    calendar = Calendar(event_sink=channel)

    app = CalendarApp(calendar=calendar)

    assert calendar.event_sink is channel
    assert app.notification_channel is not channel


def test_render_panel_rows_use_brief_format() -> None:
    channel = NotificationChannel()
    channel.notify("dawn", TimeValue(24))
    channel.notify("dusk", TimeValue(36))

    table = channel.render_panel(limit=1).renderable

    assert table.row_count == 1
    assert list(table.columns[0].cells) == ["period"]
    assert list(table.columns[1].cells) == ["[period] 0001-01-02 12h: dusk"]


def test_render_panel_with_non_positive_limit_is_empty() -> None:
    channel = NotificationChannel()
    for hour in range(3):
        channel.notify("tick", TimeValue(hour))

    assert channel.render_panel(limit=0).renderable.row_count == 0
    assert channel.render_panel(limit=-2).renderable.row_count == 0
