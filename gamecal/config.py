"""Validated configuration models for building a game calendar."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import InvalidDateError
from .time.conventions import GREGORIAN, CalendarConvention, FixedConvention
from .time.time_value import TimeValue

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .events.sink import EventSink
    from .time.calendar import Calendar

logger = logging.getLogger(__name__)


class ConventionKind(str, Enum):
    """Selects how hours map onto years, months and days."""

    GREGORIAN = "gregorian"
    FIXED = "fixed"


class FixedCalendarSettings(BaseModel):
    """Shape of a fixed-length fantasy calendar."""

    model_config = ConfigDict(extra="forbid")

    hours_per_day: int = Field(default=24, ge=1)
    days_per_month: int = Field(default=30, ge=1)
    months_per_year: int = Field(default=12, ge=1)


class StartDate(BaseModel):
    """Calendar position at process start."""

    model_config = ConfigDict(extra="forbid")

    year: int = 1
    month: int = Field(default=1, ge=1)
    day: int = Field(default=1, ge=1)
    hour: int = Field(default=0, ge=0)


class PeriodSpec(BaseModel):
    """Declared ``(id, name, hours)`` tuple for a recurring period."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    name: str | None = None
    hours: int = Field(gt=0)

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("period id cannot be blank")
        return stripped


class CalendarConfig(BaseModel):
    """Top-level configuration payload describing a calendar."""

    model_config = ConfigDict(extra="forbid")

    convention: ConventionKind = Field(default=ConventionKind.GREGORIAN)
    fixed: FixedCalendarSettings = Field(default_factory=FixedCalendarSettings)
    start: StartDate = Field(default_factory=StartDate)
    periods: list[PeriodSpec] = Field(default_factory=list)
    strict_unregister: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def _ensure_metadata_mapping(cls, value: object) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise TypeError("metadata must be a mapping")
        return {str(key): item for key, item in value.items()}

    @model_validator(mode="after")
    def _check_unique_periods(self) -> CalendarConfig:
        seen: set[str] = set()
        for spec in self.periods:
            if spec.id in seen:
                raise ValueError(f"duplicate period id {spec.id!r}")
            seen.add(spec.id)
        return self

    @model_validator(mode="after")
    def _check_start_date(self) -> CalendarConfig:
        start = self.start
        try:
            self.build_convention().validate(start.year, start.month, start.day, start.hour)
        except InvalidDateError as exc:
            raise ValueError(str(exc)) from exc
        return self

    def build_convention(self) -> CalendarConvention:
        if self.convention is ConventionKind.FIXED:
            return FixedConvention(
                day_length=self.fixed.hours_per_day,
                days_per_month=self.fixed.days_per_month,
                month_count=self.fixed.months_per_year,
            )
        return GREGORIAN

    def start_time(self) -> TimeValue:
        start = self.start
        return TimeValue.from_ymd(
            start.year,
            start.month,
            start.day,
            start.hour,
            convention=self.build_convention(),
        )

    def build_calendar(self, *, event_sink: EventSink | None = None) -> Calendar:
        """Instantiate a :class:`~gamecal.time.calendar.Calendar` and register periods."""

        from .time.calendar import Calendar
        from .time.period import Period

        calendar = Calendar(
            start=self.start_time(),
            convention=self.build_convention(),
            event_sink=event_sink,
            strict_unregister=self.strict_unregister,
        )
        for spec in self.periods:
            calendar.register_period(Period.from_spec(spec))
        return calendar


def load_calendar_config(path: Path | str) -> CalendarConfig:
    """Read and validate a JSON calendar configuration file."""

    config_path = Path(path)
    logger.debug("Loading calendar config from %s", config_path)
    data = json.loads(config_path.read_text(encoding="utf-8"))
    return CalendarConfig.model_validate(data)


__all__ = [
    "CalendarConfig",
    "ConventionKind",
    "FixedCalendarSettings",
    "PeriodSpec",
    "StartDate",
    "load_calendar_config",
]
