"""Persistence helpers for calendar state.

Two persistence strategies are supported:

* A light-weight JSON quick-save (``save_calendar_state`` /
  ``load_calendar_state``) stored in the per-user data directory.
* A SQLite slot store holding validated
  :class:`~gamecal.config.CalendarConfig` payloads and a history of
  :class:`~gamecal.save_models.CalendarSnapshot` entries.

Both persist only the clock position and the per-period "last fired" hours;
period definitions come from configuration.
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from .config import CalendarConfig
from .save_models import CalendarSnapshot, CalendarSnapshotMetadata

logger = logging.getLogger(__name__)

APP_NAME = "gamecal"


# ---------------------------------------------------------------------------
# JSON quick-save helpers
# ---------------------------------------------------------------------------


def _get_save_dir(app_name: str = APP_NAME) -> Path:
    """Return the directory used to store quick-save files, creating it."""

    path = Path(user_data_dir(app_name, appauthor=False))
    path.mkdir(parents=True, exist_ok=True)
    return path


def quick_save_path(slot: str = "default", *, app_name: str = APP_NAME) -> Path:
    return _get_save_dir(app_name) / f"{slot}_calendar.json"


def save_calendar_state(
    snapshot: CalendarSnapshot,
    *,
    slot: str = "default",
    app_name: str = APP_NAME,
) -> Path:
    """Write ``snapshot`` to ``<slot>_calendar.json`` and return the path."""

    filepath = quick_save_path(slot, app_name=app_name)
    filepath.write_text(
        json.dumps(snapshot.model_dump(mode="json"), indent=2), encoding="utf-8"
    )
    logger.debug("Saved calendar slot %s to %s", slot, filepath)
    return filepath


def load_calendar_state(
    *, slot: str = "default", app_name: str = APP_NAME
) -> CalendarSnapshot | None:
    """Load a quick-saved snapshot, or ``None`` when the slot is empty."""

    filepath = quick_save_path(slot, app_name=app_name)
    if not filepath.exists():
        return None
    data = json.loads(filepath.read_text(encoding="utf-8"))
    logger.debug("Loaded calendar slot %s from %s", slot, filepath)
    return CalendarSnapshot.model_validate(data)


# ---------------------------------------------------------------------------
# SQLite slot storage helpers
# ---------------------------------------------------------------------------

ConnectionLike = sqlite3.Connection


def create_calendar_engine(path: os.PathLike[str] | str) -> ConnectionLike:
    """Create a SQLite connection for calendar persistence.

    The parent directory is created automatically.  The connection has row
    access by column name enabled for convenience.
    """

    db_path = Path(path)
    if not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(db_path)
    connection.row_factory = sqlite3.Row
    return connection


def _require_connection(engine: ConnectionLike) -> ConnectionLike:
    if isinstance(engine, sqlite3.Connection):
        return engine
    raise TypeError("engine must be a sqlite3.Connection produced by create_calendar_engine")


def init_calendar_storage(engine: ConnectionLike) -> None:
    """Initialise the SQLite schema used for calendar persistence."""

    connection = _require_connection(engine)
    with connection:
        connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS calendar_configs (
                slot TEXT PRIMARY KEY,
                payload TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS calendar_snapshots (
                slot TEXT NOT NULL,
                current_hours INTEGER NOT NULL,
                metadata TEXT NOT NULL,
                snapshot TEXT NOT NULL,
                PRIMARY KEY (slot, current_hours)
            );
            """
        )


def _dump_json(model: Any) -> str:
    return json.dumps(model.model_dump(mode="json"), ensure_ascii=False)


def store_calendar_config(engine: ConnectionLike, slot: str, config: CalendarConfig) -> None:
    """Persist a :class:`CalendarConfig` for the specified slot."""

    connection = _require_connection(engine)
    with connection:
        connection.execute(
            """
            INSERT INTO calendar_configs(slot, payload)
            VALUES (?, ?)
            ON CONFLICT(slot) DO UPDATE SET payload = excluded.payload
            """,
            (slot, _dump_json(config)),
        )


def load_calendar_config_slot(engine: ConnectionLike, slot: str) -> CalendarConfig | None:
    """Load the :class:`CalendarConfig` for ``slot`` if it exists."""

    connection = _require_connection(engine)
    row = connection.execute(
        "SELECT payload FROM calendar_configs WHERE slot = ?",
        (slot,),
    ).fetchone()
    if row is None:
        return None
    return CalendarConfig.model_validate(json.loads(row["payload"]))


def store_snapshot(
    engine: ConnectionLike,
    slot: str,
    snapshot: CalendarSnapshot,
    *,
    summary: str | None = None,
) -> CalendarSnapshotMetadata:
    """Store ``snapshot`` keyed by its clock position and return its metadata."""

    connection = _require_connection(engine)
    metadata = snapshot.metadata(summary=summary)
    with connection:
        connection.execute(
            """
            INSERT INTO calendar_snapshots(slot, current_hours, metadata, snapshot)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(slot, current_hours) DO UPDATE SET
                metadata = excluded.metadata,
                snapshot = excluded.snapshot
            """,
            (slot, snapshot.current_hours, _dump_json(metadata), _dump_json(snapshot)),
        )
    logger.debug("Stored calendar snapshot for slot %s at hour %d", slot, snapshot.current_hours)
    return metadata


def _load_row(row: sqlite3.Row) -> tuple[CalendarSnapshotMetadata, CalendarSnapshot]:
    metadata = CalendarSnapshotMetadata.model_validate(json.loads(row["metadata"]))
    snapshot = CalendarSnapshot.model_validate(json.loads(row["snapshot"]))
    return metadata, snapshot


def load_snapshot(
    engine: ConnectionLike,
    slot: str,
    current_hours: int | None = None,
) -> tuple[CalendarSnapshotMetadata, CalendarSnapshot] | None:
    """Load the snapshot at ``current_hours``, or the latest one for ``slot``."""

    connection = _require_connection(engine)
    if current_hours is None:
        row = connection.execute(
            """
            SELECT metadata, snapshot FROM calendar_snapshots
            WHERE slot = ?
            ORDER BY current_hours DESC
            LIMIT 1
            """,
            (slot,),
        ).fetchone()
    else:
        row = connection.execute(
            """
            SELECT metadata, snapshot FROM calendar_snapshots
            WHERE slot = ? AND current_hours = ?
            """,
            (slot, current_hours),
        ).fetchone()
    if row is None:
        return None
    return _load_row(row)


def iter_snapshots(
    engine: ConnectionLike, slot: str
) -> Iterator[tuple[CalendarSnapshotMetadata, CalendarSnapshot]]:
    """Yield all stored snapshots for ``slot`` ordered by clock position."""

    connection = _require_connection(engine)
    cursor = connection.execute(
        """
        SELECT metadata, snapshot FROM calendar_snapshots
        WHERE slot = ?
        ORDER BY current_hours ASC
        """,
        (slot,),
    )
    for row in cursor:
        yield _load_row(row)


__all__ = [
    "create_calendar_engine",
    "init_calendar_storage",
    "iter_snapshots",
    "load_calendar_config_slot",
    "load_calendar_state",
    "load_snapshot",
    "quick_save_path",
    "save_calendar_state",
    "store_calendar_config",
    "store_snapshot",
]
