"""Pydantic models describing persisted calendar state."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .time.time_value import MAX_HOURS, MIN_HOURS


class CalendarSnapshot(BaseModel):
    """Clock position plus the last firing time of every registered period."""

    model_config = ConfigDict(extra="forbid")

    current_hours: int = Field(ge=MIN_HOURS, le=MAX_HOURS)
    last_fired: dict[str, int] = Field(default_factory=dict)
    pending_jump_hours: int | None = Field(default=None, ge=MIN_HOURS, le=MAX_HOURS)

    @field_validator("last_fired", mode="before")
    @classmethod
    def _normalise_last_fired(cls, value: object) -> dict[str, int]:
        if value in (None, {}):
            return {}
        if not isinstance(value, Mapping):
            raise TypeError("last_fired must be a mapping of period ids to hours")
        normalised: dict[str, int] = {}
        for key, hours in value.items():
            if isinstance(hours, bool) or not isinstance(hours, int):
                raise TypeError("last_fired values must be integer hour counts")
            if not MIN_HOURS <= hours <= MAX_HOURS:
                raise ValueError(f"last_fired value for {key!r} is out of range")
            normalised[str(key)] = hours
        return normalised

    def metadata(
        self, *, summary: str | None = None, created_at: datetime | None = None
    ) -> CalendarSnapshotMetadata:
        return CalendarSnapshotMetadata.from_snapshot(
            self, summary=summary, created_at=created_at
        )


class CalendarSnapshotMetadata(BaseModel):
    """Lightweight descriptor stored alongside each snapshot payload."""

    model_config = ConfigDict(extra="forbid")

    current_hours: int
    period_count: int = Field(ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    summary: str | None = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: CalendarSnapshot,
        *,
        summary: str | None = None,
        created_at: datetime | None = None,
    ) -> CalendarSnapshotMetadata:
        if summary is None:
            summary = (
                f"Hour {snapshot.current_hours}: {len(snapshot.last_fired)} period(s)"
            )
        return cls(
            current_hours=snapshot.current_hours,
            period_count=len(snapshot.last_fired),
            created_at=created_at or datetime.now(UTC),
            summary=summary,
        )


__all__ = ["CalendarSnapshot", "CalendarSnapshotMetadata"]
