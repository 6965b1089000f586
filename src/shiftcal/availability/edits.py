"""Manual availability overrides layered on top of generated calendars."""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Callable, Iterable

from shiftcal.availability.conflicts import ScheduledTask, check_schedule_conflicts
from shiftcal.availability.generator import iter_dates
from shiftcal.availability.hours import HOURS_PER_DAY, HourMask
from shiftcal.availability.models import AvailabilityRecord
from shiftcal.core.errors import ShiftCalValueError

MaskLookup = Callable[[str, dt.date], HourMask]

_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::(\d{2}))?\s*$")


def parse_hour(value: str, *, allow_end_of_day: bool = False) -> int:
    """Parse ``"HH:MM"`` (or ``"HH"``) and return the hour component.

    Minutes are validated but truncated. ``"24:00"`` is only accepted when
    ``allow_end_of_day`` is set, for exclusive range ends.
    """
    match = _TIME_RE.match(value)
    if not match:
        raise ShiftCalValueError(f"Invalid time {value!r}; expected HH:MM")
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if minute >= 60:
        raise ShiftCalValueError(f"Invalid minutes in {value!r}")
    if hour == HOURS_PER_DAY and minute == 0 and allow_end_of_day:
        return hour
    if hour >= HOURS_PER_DAY:
        raise ShiftCalValueError(f"Invalid hour in {value!r}")
    return hour


def hours_between(start_time: str, end_time: str) -> range:
    """Return the hour slots covered by ``[start_time, end_time)``.

    Both ends are truncated to the hour, so ``"09:00"``-``"10:30"`` yields
    only hour 9.
    """
    start = parse_hour(start_time)
    end = parse_hour(end_time, allow_end_of_day=True)
    if end <= start:
        raise ShiftCalValueError(f"End time {end_time} must be after start time {start_time}")
    return range(start, end)


def mark_unavailable(
    existing: MaskLookup,
    machine_id: str,
    start: dt.date,
    end: dt.date,
    start_time: str,
    end_time: str,
    *,
    tasks: Iterable[ScheduledTask] | None = None,
) -> list[AvailabilityRecord]:
    """Add the ``start_time``-``end_time`` hours to every date in ``[start, end]``.

    ``existing`` returns the currently stored mask for a machine and date; the
    new hours are unioned into it. When ``tasks`` is given, each date is checked
    for overlaps with scheduled work before any record is produced.
    """
    if end < start:
        raise ShiftCalValueError("end date must not precede start date")
    hours = hours_between(start_time, end_time)
    task_list = list(tasks or ())
    records = []
    for day in iter_dates(start, end):
        if task_list:
            check_schedule_conflicts(machine_id, day, hours, task_list)
        mask = existing(machine_id, day).with_hours(hours)
        records.append(AvailabilityRecord(machine_id=machine_id, date=day, unavailable_hours=mask))
    return records


def toggle_hour(
    current: HourMask,
    machine_id: str,
    day: dt.date,
    hour: int,
    *,
    tasks: Iterable[ScheduledTask] | None = None,
) -> AvailabilityRecord:
    """Flip a single hour slot; making an hour unavailable is conflict-checked."""
    toggled = current.toggled(hour)
    if tasks is not None and hour in toggled:
        check_schedule_conflicts(machine_id, day, [hour], tasks)
    return AvailabilityRecord(machine_id=machine_id, date=day, unavailable_hours=toggled)


__all__ = ["MaskLookup", "parse_hour", "hours_between", "mark_unavailable", "toggle_hour"]
