"""SQLite-backed storage for machine availability records."""

from __future__ import annotations

import datetime as dt
import json
import sqlite3
from collections.abc import Iterable
from contextlib import closing
from pathlib import Path
from typing import Protocol

from shiftcal.availability.conflicts import ScheduledTask
from shiftcal.availability.edits import mark_unavailable, toggle_hour
from shiftcal.availability.hours import HourMask
from shiftcal.availability.models import AvailabilityRecord

__all__ = ["AvailabilitySink", "SQLiteAvailabilityStore"]


_SCHEMA = """
CREATE TABLE IF NOT EXISTS machine_availability (
    machine_id TEXT NOT NULL,
    date TEXT NOT NULL,
    unavailable_hours TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (machine_id, date)
);
CREATE INDEX IF NOT EXISTS idx_machine_availability_date ON machine_availability(date);
"""


class AvailabilitySink(Protocol):
    """Anything that can persist a batch of availability records."""

    def bulk_upsert(self, records: Iterable[AvailabilityRecord]) -> int: ...


def _now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds")


def _row_to_record(row: tuple[str, str, str]) -> AvailabilityRecord:
    machine_id, day, hours = row
    return AvailabilityRecord(
        machine_id=machine_id,
        date=dt.date.fromisoformat(day),
        unavailable_hours=json.loads(hours),
    )


class SQLiteAvailabilityStore:
    """Persist availability records keyed by ``(machine_id, date)``.

    Only days with at least one unavailable hour are stored; saving a record
    with no unavailable hours removes the row.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        with closing(self._connect()) as conn:
            conn.executescript(_SCHEMA)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def bulk_upsert(self, records: Iterable[AvailabilityRecord]) -> int:
        """Insert or replace ``records`` in one transaction; returns rows touched.

        Records sharing a ``(machine_id, date)`` key collapse to the last one
        in the batch.
        """
        stamp = _now()
        latest: dict[tuple[str, str], tuple[int, ...]] = {}
        for record in records:
            latest[(record.machine_id, record.date.isoformat())] = record.unavailable_hours
        upserts = []
        deletes = []
        for key, hours in latest.items():
            if hours:
                upserts.append((*key, json.dumps(list(hours)), stamp))
            else:
                deletes.append(key)
        with closing(self._connect()) as conn:
            with conn:
                conn.executemany(
                    """
                    INSERT INTO machine_availability (machine_id, date, unavailable_hours, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(machine_id, date) DO UPDATE SET
                        unavailable_hours = excluded.unavailable_hours,
                        updated_at = excluded.updated_at
                    """,
                    upserts,
                )
                conn.executemany(
                    "DELETE FROM machine_availability WHERE machine_id = ? AND date = ?",
                    deletes,
                )
        return len(upserts) + len(deletes)

    def upsert(self, record: AvailabilityRecord) -> None:
        self.bulk_upsert([record])

    def get(self, machine_id: str, day: dt.date) -> AvailabilityRecord | None:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT machine_id, date, unavailable_hours FROM machine_availability "
                "WHERE machine_id = ? AND date = ?",
                (machine_id, day.isoformat()),
            ).fetchone()
        return _row_to_record(row) if row else None

    def get_range(self, machine_id: str, start: dt.date, end: dt.date) -> list[AvailabilityRecord]:
        with closing(self._connect()) as conn:
            rows = conn.execute(
                "SELECT machine_id, date, unavailable_hours FROM machine_availability "
                "WHERE machine_id = ? AND date >= ? AND date <= ? ORDER BY date",
                (machine_id, start.isoformat(), end.isoformat()),
            ).fetchall()
        return [_row_to_record(row) for row in rows]

    def get_for_date(self, day: dt.date) -> list[AvailabilityRecord]:
        with closing(self._connect()) as conn:
            rows = conn.execute(
                "SELECT machine_id, date, unavailable_hours FROM machine_availability "
                "WHERE date = ? ORDER BY machine_id",
                (day.isoformat(),),
            ).fetchall()
        return [_row_to_record(row) for row in rows]

    def unavailable_hours(self, machine_id: str, day: dt.date) -> HourMask:
        record = self.get(machine_id, day)
        return record.mask if record else HourMask.empty()

    def is_time_slot_unavailable(self, machine_id: str, day: dt.date, hour: int) -> bool:
        return hour in self.unavailable_hours(machine_id, day)

    def delete_machine(self, machine_id: str) -> int:
        """Drop every stored day for ``machine_id`` (e.g. before regenerating)."""
        with closing(self._connect()) as conn:
            with conn:
                cursor = conn.execute(
                    "DELETE FROM machine_availability WHERE machine_id = ?", (machine_id,)
                )
        return cursor.rowcount

    def mark_unavailable(
        self,
        machine_id: str,
        start: dt.date,
        end: dt.date,
        start_time: str,
        end_time: str,
        *,
        tasks: Iterable[ScheduledTask] | None = None,
    ) -> list[AvailabilityRecord]:
        """Merge an unavailable time range into the stored days and persist it."""
        records = mark_unavailable(
            self.unavailable_hours, machine_id, start, end, start_time, end_time, tasks=tasks
        )
        self.bulk_upsert(records)
        return records

    def toggle_hour(
        self,
        machine_id: str,
        day: dt.date,
        hour: int,
        *,
        tasks: Iterable[ScheduledTask] | None = None,
    ) -> AvailabilityRecord:
        record = toggle_hour(
            self.unavailable_hours(machine_id, day), machine_id, day, hour, tasks=tasks
        )
        self.upsert(record)
        return record
