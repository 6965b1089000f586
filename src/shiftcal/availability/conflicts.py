"""Guard manual availability overrides against already-scheduled work."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from pydantic import BaseModel, field_validator, model_validator

from shiftcal.core.errors import AvailabilityConflictError

SCHEDULED = "SCHEDULED"


class ScheduledTask(BaseModel):
    """A production order placed on a machine by the scheduler.

    ``start`` and ``end`` are interpreted in UTC; naive datetimes are assumed
    to already be UTC.
    """

    order_number: str
    machine_id: str
    start: dt.datetime
    end: dt.datetime
    status: str = SCHEDULED

    @field_validator("start", "end")
    @classmethod
    def _as_utc(cls, value: dt.datetime) -> dt.datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value.astimezone(dt.timezone.utc)

    @model_validator(mode="after")
    def _end_after_start(self) -> "ScheduledTask":
        if self.end <= self.start:
            raise ValueError("ScheduledTask.end must be after start")
        return self


def _hour_bounds(day: dt.date, hour: int) -> tuple[dt.datetime, dt.datetime]:
    start = dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc) + dt.timedelta(hours=hour)
    return start, start + dt.timedelta(hours=1)


def find_conflicts(
    machine_id: str, day: dt.date, hours: Iterable[int], tasks: Iterable[ScheduledTask]
) -> list[tuple[ScheduledTask, int]]:
    """Return ``(task, hour)`` pairs where a scheduled task overlaps an hour."""
    hour_list = sorted(set(hours))
    conflicts: list[tuple[ScheduledTask, int]] = []
    for task in tasks:
        if task.machine_id != machine_id or task.status != SCHEDULED:
            continue
        for hour in hour_list:
            hour_start, hour_end = _hour_bounds(day, hour)
            if hour_start < task.end and hour_end > task.start:
                conflicts.append((task, hour))
    return conflicts


def check_schedule_conflicts(
    machine_id: str, day: dt.date, hours: Iterable[int], tasks: Iterable[ScheduledTask]
) -> None:
    """Raise :class:`AvailabilityConflictError` when ``hours`` overlap scheduled work."""
    conflicts = find_conflicts(machine_id, day, hours, tasks)
    if conflicts:
        task, hour = conflicts[0]
        raise AvailabilityConflictError(
            f"Cannot set machine {machine_id} unavailable on {day.isoformat()} at {hour:02d}:00: "
            f"overlaps scheduled task {task.order_number}",
            order_number=task.order_number,
        )


__all__ = ["SCHEDULED", "ScheduledTask", "find_conflicts", "check_schedule_conflicts"]
