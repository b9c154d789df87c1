from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gamecal.events.event_queue import EventQueueSink  # noqa: E402
from gamecal.events.sink import CallbackSink, EventSink  # noqa: E402
from gamecal.time.calendar import Calendar  # noqa: E402
from gamecal.time.period import Period  # noqa: E402
from gamecal.time.time_value import TimeValue  # noqa: E402
from gamecal.ui.channels import NotificationChannel  # noqa: E402


@pytest.mark.parametrize("sink_type", [CallbackSink, EventQueueSink, NotificationChannel])
def test_bundled_sinks_satisfy_protocol(sink_type: type) -> None:
    assert isinstance(sink_type(), EventSink)


def test_callback_sink_fans_out_in_subscription_order() -> None:
    sink = CallbackSink()
    calls: list[str] = []

    def first(period_id: str, fired_at: TimeValue) -> None:
        calls.append(f"first:{period_id}:{fired_at.total_hours}")

    def second(period_id: str, fired_at: TimeValue) -> None:
        calls.append(f"second:{period_id}:{fired_at.total_hours}")

    sink.subscribe(first)
    sink.subscribe(second)
    sink.subscribe(first)
    sink.notify("dawn", TimeValue(24))

    assert calls == ["first:dawn:24", "second:dawn:24"]
    assert sink.subscribers == (first, second)

    sink.unsubscribe(first)
    sink.unsubscribe(first)
    sink.notify("dusk", TimeValue(36))
    assert calls[-1] == "second:dusk:36"
    assert len(calls) == 3


def test_queue_events_at_same_hour_are_deterministic() -> None:
    queue = EventQueueSink()
    queue.notify("alpha", TimeValue(5))
    queue.schedule(TimeValue(5), "beta", {"payload": True})
    queue.notify("earlier", TimeValue(3))
    queue.notify("gamma", TimeValue(5))

    assert [event.period_id for event in queue.events_at(TimeValue(5))] == [
        "alpha",
        "beta",
        "gamma",
    ]

    due = queue.pop_due(TimeValue(4))
    assert [event.period_id for event in due] == ["earlier"]
    assert len(queue) == 3

    remaining = queue.pop_due(TimeValue(5))
    assert [event.period_id for event in remaining] == ["alpha", "beta", "gamma"]
    assert remaining[1].payload == {"payload": True}
    assert not queue.has_events()


def test_queue_drains_calendar_firings_chronologically() -> None:
    queue = EventQueueSink()
    calendar = Calendar(event_sink=queue)
    calendar.register_period(Period("slow", duration_hours=10))
    calendar.register_period(Period("fast", duration_hours=4))

    calendar.advance(12)
    drained = queue.pop_due(calendar.current_time)

    assert [(event.period_id, event.fired_at.total_hours) for event in drained] == [
        ("fast", 4),
        ("fast", 8),
        ("slow", 10),
        ("fast", 12),
    ]


def test_large_batch_preserves_order() -> None:
    queue = EventQueueSink()
    for index in range(500):
        queue.notify(f"evt-{index}", TimeValue(10))

    popped = queue.pop_due(TimeValue(10))
    assert [event.period_id for event in popped] == [f"evt-{index}" for index in range(500)]
    assert not queue.has_events()


@pytest.mark.parametrize(
    "hours, expected",
    [
        ((1, 5, 3, 5), [1, 3, 5]),
        ((2,), [2]),
        ((), []),
    ],
)
def test_pending_times_sorted(hours: tuple[int, ...], expected: list[int]) -> None:
    queue = EventQueueSink()
    for hour in hours:
        queue.notify(f"event-{hour}", TimeValue(hour))

    assert queue.pending_times() == [TimeValue(hour) for hour in expected]


def test_clear_resets_queue() -> None:
    queue = EventQueueSink()
    queue.notify("dawn", TimeValue(1))
    queue.clear()

    assert not queue.has_events()
    assert queue.pop_due(TimeValue(100)) == []
