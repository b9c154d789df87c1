"""Recurring durations used to schedule calendar notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import InvalidPeriodError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import PeriodSpec


@dataclass(frozen=True)
class Period:
    """A named recurring span of game time.

    Periods are pure definitions; the calendar keeps the "last fired"
    bookkeeping for each registered period.  Two periods are equal when their
    identifiers match.
    """

    id: str
    duration_hours: int = field(compare=False)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidPeriodError("period id must be a non-empty string")
        if isinstance(self.duration_hours, bool) or not isinstance(
            self.duration_hours, int
        ):
            raise InvalidPeriodError(
                f"period {self.id!r} duration must be an integer number of hours"
            )
        if self.duration_hours <= 0:
            raise InvalidPeriodError(
                f"period {self.id!r} duration must be positive, got {self.duration_hours}"
            )

    @classmethod
    def create(
        cls, id: str, name: str | None = None, *, duration_hours: int
    ) -> Period:
        return cls(id=id, duration_hours=duration_hours, name=name)

    @classmethod
    def from_spec(cls, spec: PeriodSpec) -> Period:
        """Build a period from a validated configuration entry."""

        return cls(id=spec.id, duration_hours=spec.hours, name=spec.name)

    @property
    def label(self) -> str:
        """Display label, falling back to the identifier."""

        return self.name or self.id


__all__ = ["Period"]
