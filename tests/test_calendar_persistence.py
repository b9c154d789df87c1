from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from gamecal import persistence
from gamecal.config import CalendarConfig, PeriodSpec
from gamecal.persistence import (
    create_calendar_engine,
    init_calendar_storage,
    iter_snapshots,
    load_calendar_config_slot,
    load_calendar_state,
    load_snapshot,
    save_calendar_state,
    store_calendar_config,
    store_snapshot,
)
from gamecal.save_models import CalendarSnapshot
from gamecal.time.calendar import Calendar
from gamecal.time.period import Period
from gamecal.time.time_value import MAX_HOURS


def _calendar() -> Calendar:
    calendar = Calendar()
    calendar.register_period(Period("dawn", duration_hours=24))
    calendar.register_period(Period("watch", duration_hours=8))
    return calendar


def test_snapshot_model_validation() -> None:
    snapshot = CalendarSnapshot(current_hours=30, last_fired={"dawn": 24})
    assert snapshot.pending_jump_hours is None

    with pytest.raises(ValidationError):
        CalendarSnapshot(current_hours=MAX_HOURS + 1)
    with pytest.raises(ValidationError):
        CalendarSnapshot.model_validate({"current_hours": 0, "extra": 1})


def test_snapshot_metadata_summary() -> None:
    created = datetime(2024, 1, 1, tzinfo=UTC)
    metadata = CalendarSnapshot(current_hours=30, last_fired={"dawn": 24}).metadata(
        created_at=created
    )

    assert metadata.current_hours == 30
    assert metadata.period_count == 1
    assert metadata.created_at == created
    assert metadata.summary == "Hour 30: 1 period(s)"


def test_quick_save_round_trip(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        persistence,
        "user_data_dir",
        lambda app_name, appauthor=False: str(tmp_path / app_name),
    )
    calendar = _calendar()
    calendar.advance(30)

    assert load_calendar_state(slot="campaign") is None
    path = save_calendar_state(calendar.snapshot(), slot="campaign")
    assert path == tmp_path / "gamecal" / "campaign_calendar.json"

    loaded = load_calendar_state(slot="campaign")
    assert loaded == calendar.snapshot()

    restored = _calendar()
    restored.restore(loaded)
    assert restored.current_time == calendar.current_time
    assert restored.last_fired("watch") == calendar.last_fired("watch")


def test_sqlite_storage_round_trip(tmp_path) -> None:
    engine = create_calendar_engine(tmp_path / "saves" / "calendar.sqlite")
    init_calendar_storage(engine)

    config = CalendarConfig(periods=[PeriodSpec(id="dawn", hours=24)], strict_unregister=True)
    store_calendar_config(engine, "slot-a", config)
    assert load_calendar_config_slot(engine, "slot-a") == config
    assert load_calendar_config_slot(engine, "slot-b") is None

    calendar = _calendar()
    calendar.advance(10)
    early = calendar.snapshot()
    store_snapshot(engine, "slot-a", early)
    calendar.advance(40)
    late = calendar.snapshot()
    metadata = store_snapshot(engine, "slot-a", late, summary="after the storm")

    assert metadata.summary == "after the storm"
    latest = load_snapshot(engine, "slot-a")
    assert latest is not None
    assert latest[1] == late
    assert latest[0].summary == "after the storm"

    specific = load_snapshot(engine, "slot-a", early.current_hours)
    assert specific is not None
    assert specific[1] == early
    assert load_snapshot(engine, "slot-a", 999) is None
    assert load_snapshot(engine, "slot-b") is None

    hours = [snapshot.current_hours for _, snapshot in iter_snapshots(engine, "slot-a")]
    assert hours == [10, 50]
    engine.close()


def test_storing_same_hour_replaces_snapshot(tmp_path) -> None:
    engine = create_calendar_engine(tmp_path / "calendar.sqlite")
    init_calendar_storage(engine)

    store_snapshot(engine, "slot", CalendarSnapshot(current_hours=5, last_fired={"dawn": 0}))
    store_snapshot(engine, "slot", CalendarSnapshot(current_hours=5, last_fired={"dawn": 5}))

    stored = list(iter_snapshots(engine, "slot"))
    assert len(stored) == 1
    assert stored[0][1].last_fired == {"dawn": 5}
    engine.close()


def test_storage_requires_sqlite_connection() -> None:
    with pytest.raises(TypeError):
        init_calendar_storage(object())  # type: ignore[arg-type]
