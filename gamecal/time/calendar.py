"""Process-wide game clock and period scheduler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import DuplicateIdError, InvalidArgumentError, NotFoundError
from ..events.sink import EventSink, PeriodFiring
from ..save_models import CalendarSnapshot
from .conventions import GREGORIAN, CalendarConvention
from .period import Period
from .time_value import EPOCH, TimeValue

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import CalendarConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Registration:
    period: Period
    last_fired: TimeValue


class Calendar:
    """Owns the authoritative game clock and fires registered periods.

    Time moves forward through :meth:`advance`.  :meth:`set_ymd` and
    :meth:`set_time` jump the clock to an arbitrary point; jumps do not
    replay missed cycles.  Instead the next evaluation (the next
    :meth:`advance` or an explicit :meth:`evaluate`) fires each period whose
    threshold the jump crossed exactly once, tagged at the latest crossed
    threshold.  Periods whose last firing lies after a backward jump restart
    their cadence at the jump target.

    Every mutator computes its full result before committing, so a failing
    call leaves the calendar unchanged.  Notifications are delivered to the
    optional event sink after the new state is committed, in registration
    order and chronologically within each period.
    """

    def __init__(
        self,
        *,
        start: TimeValue | None = None,
        convention: CalendarConvention | None = None,
        event_sink: EventSink | None = None,
        strict_unregister: bool = False,
    ) -> None:
        self._convention = convention or GREGORIAN
        self._current = start if start is not None else EPOCH
        self._registrations: dict[str, _Registration] = {}
        self._event_sink = event_sink
        self._strict_unregister = strict_unregister
        self._pending_jump: TimeValue | None = None

    # ------------------------------------------------------------------
    @property
    def current_time(self) -> TimeValue:
        return self._current

    @property
    def convention(self) -> CalendarConvention:
        return self._convention

    @property
    def event_sink(self) -> EventSink | None:
        return self._event_sink

    @property
    def strict_unregister(self) -> bool:
        return self._strict_unregister

    @property
    def periods(self) -> tuple[Period, ...]:
        """Registered periods in registration order."""

        return tuple(entry.period for entry in self._registrations.values())

    @property
    def has_pending_jump(self) -> bool:
        return self._pending_jump is not None

    def attach_sink(self, sink: EventSink) -> None:
        self._event_sink = sink

    def detach_sink(self) -> None:
        self._event_sink = None

    # ------------------------------------------------------------------
    def set_ymd(self, year: int, month: int, day: int) -> None:
        """Jump to ``year``/``month``/``day`` keeping the current hour of day."""

        hour = self._convention.ymd_from_hours(self._current.total_hours)[3]
        target = TimeValue.from_ymd(year, month, day, hour, convention=self._convention)
        self._jump(target)

    def set_time(self, hour: int) -> None:
        """Replace the hour of day without touching the date."""

        year, month, day, _ = self._convention.ymd_from_hours(self._current.total_hours)
        target = TimeValue.from_ymd(year, month, day, hour, convention=self._convention)
        self._jump(target)

    def _jump(self, target: TimeValue) -> None:
        logger.debug("Calendar jump %s -> %s", self._current, target)
        self._current = target
        self._pending_jump = target

    def advance(self, hours: int) -> list[PeriodFiring]:
        """Move the clock forward and fire every elapsed period cycle."""

        if isinstance(hours, bool) or not isinstance(hours, int):
            raise InvalidArgumentError(f"advance expects an integer, got {hours!r}")
        if hours <= 0:
            raise InvalidArgumentError(f"advance expects a positive hour count, got {hours}")
        target = self._current.add(hours)
        logger.debug("Calendar advance %d hour(s) %s -> %s", hours, self._current, target)
        return self._evaluate_at(target)

    def evaluate(self) -> list[PeriodFiring]:
        """Settle any pending jump without moving the clock."""

        return self._evaluate_at(self._current)

    def _evaluate_at(self, target: TimeValue) -> list[PeriodFiring]:
        jump = self._pending_jump
        updated: dict[str, _Registration] = {}
        firings: list[PeriodFiring] = []
        for period_id, entry in self._registrations.items():
            duration = entry.period.duration_hours
            last = entry.last_fired
            if jump is not None:
                if last > jump:
                    last = jump
                else:
                    cycles = jump.difference(last) // duration
                    if cycles:
                        last = last.add(cycles * duration)
                        firings.append(PeriodFiring(period_id, last))
            while target.difference(last) >= duration:
                last = last.add(duration)
                firings.append(PeriodFiring(period_id, last))
            updated[period_id] = _Registration(entry.period, last)

        self._registrations = updated
        self._current = target
        self._pending_jump = None
        self._deliver(firings)
        return firings

    def _deliver(self, firings: list[PeriodFiring]) -> None:
        if not firings:
            return
        sink = self._event_sink
        if sink is None:
            logger.debug("%d period firing(s) with no event sink attached", len(firings))
            return
        for firing in firings:
            sink.notify(firing.period_id, firing.fired_at)

    # ------------------------------------------------------------------
    def register_period(self, period: Period) -> None:
        if not isinstance(period, Period):
            raise TypeError("register_period expects a Period")
        if period.id in self._registrations:
            raise DuplicateIdError(period.id)
        self._registrations[period.id] = _Registration(period, self._current)
        logger.info(
            "Registered period %s every %d hour(s) from %s",
            period.id,
            period.duration_hours,
            self._current,
        )

    def unregister_period(self, period_id: str) -> None:
        """Remove a period.

        Missing identifiers are ignored unless the calendar was built with
        ``strict_unregister=True``, in which case :class:`NotFoundError` is
        raised.
        """

        if period_id not in self._registrations:
            if self._strict_unregister:
                raise NotFoundError(period_id)
            return
        del self._registrations[period_id]
        logger.info("Unregistered period %s", period_id)

    def get_period(self, period_id: str) -> Period:
        return self._registration(period_id).period

    def last_fired(self, period_id: str) -> TimeValue:
        return self._registration(period_id).last_fired

    def next_firing(self, period_id: str) -> TimeValue:
        entry = self._registration(period_id)
        return entry.last_fired.add(entry.period.duration_hours)

    def _registration(self, period_id: str) -> _Registration:
        try:
            return self._registrations[period_id]
        except KeyError:
            raise NotFoundError(period_id) from None

    # ------------------------------------------------------------------
    def date_diff(self, other: TimeValue) -> int:
        """Hours from ``other`` to the current time."""

        return self._current.difference(other)

    def current_ymd(self) -> tuple[int, int, int, int]:
        return self._convention.ymd_from_hours(self._current.total_hours)

    # ------------------------------------------------------------------
    def snapshot(self) -> CalendarSnapshot:
        """Capture the clock and per-period bookkeeping."""

        return CalendarSnapshot(
            current_hours=self._current.total_hours,
            last_fired={
                period_id: entry.last_fired.total_hours
                for period_id, entry in self._registrations.items()
            },
            pending_jump_hours=(
                self._pending_jump.total_hours if self._pending_jump is not None else None
            ),
        )

    def restore(self, snapshot: CalendarSnapshot) -> None:
        """Load state captured by :meth:`snapshot`.

        Every period named in the snapshot must already be registered.
        Registered periods missing from the snapshot restart their cadence at
        the restored time.
        """

        missing = [pid for pid in snapshot.last_fired if pid not in self._registrations]
        if missing:
            raise NotFoundError(", ".join(sorted(missing)))
        current = TimeValue(snapshot.current_hours)
        pending = (
            TimeValue(snapshot.pending_jump_hours)
            if snapshot.pending_jump_hours is not None
            else None
        )
        restored: dict[str, _Registration] = {}
        for period_id, entry in self._registrations.items():
            hours = snapshot.last_fired.get(period_id)
            last = TimeValue(hours) if hours is not None else current
            restored[period_id] = _Registration(entry.period, last)
        self._registrations = restored
        self._current = current
        self._pending_jump = pending
        logger.debug("Restored calendar at %s", current)


# ---------------------------------------------------------------------------
# Shared process-wide calendar
# ---------------------------------------------------------------------------

_shared_calendar: Calendar | None = None


def game_calendar() -> Calendar:
    """Return the shared calendar, creating a default one on first use."""

    global _shared_calendar
    if _shared_calendar is None:
        _shared_calendar = Calendar()
    return _shared_calendar


def configure_game_calendar(
    config: CalendarConfig | None = None, *, event_sink: EventSink | None = None
) -> Calendar:
    """Replace the shared calendar with one built from ``config``."""

    global _shared_calendar
    if config is None:
        calendar = Calendar(event_sink=event_sink)
    else:
        calendar = config.build_calendar(event_sink=event_sink)
    _shared_calendar = calendar
    return calendar


def set_date(year: int, month: int, day: int) -> None:
    game_calendar().set_ymd(year, month, day)


def set_time(hour: int) -> None:
    game_calendar().set_time(hour)


def calendar_time() -> TimeValue:
    return game_calendar().current_time


def calendar_diff(value: TimeValue) -> int:
    return game_calendar().date_diff(value)


__all__ = [
    "Calendar",
    "calendar_diff",
    "calendar_time",
    "configure_game_calendar",
    "game_calendar",
    "set_date",
    "set_time",
]
