"""Shift rule engine: derive a machine's unavailable hours for a single day."""

from __future__ import annotations

import datetime as dt

from shiftcal.availability.hours import HourMask, ShiftWindow
from shiftcal.availability.models import Department, Machine, ShiftCode, WorkCenter

SATURDAY = 5
SUNDAY = 6

T2_WINDOWS: tuple[ShiftWindow, ...] = (ShiftWindow(6, 21),)

# T1 windows keyed by (work_center, department); ``None`` matches any department.
# Zanica packaging runs 12:30-16:30, rounded to the 13:00-17:00 hour slots.
T1_WINDOWS: dict[tuple[WorkCenter, Department | None], tuple[ShiftWindow, ...]] = {
    (WorkCenter.BUSTO_GAROLFO, None): (ShiftWindow(8, 11), ShiftWindow(14, 17)),
    (WorkCenter.ZANICA, Department.PACKAGING): (ShiftWindow(8, 11), ShiftWindow(13, 16)),
    (WorkCenter.ZANICA, None): (ShiftWindow(8, 11), ShiftWindow(13, 16)),
}


def is_weekend(day: dt.date) -> bool:
    return day.weekday() in (SATURDAY, SUNDAY)


def _t1_windows(machine: Machine) -> tuple[ShiftWindow, ...]:
    for key in ((machine.work_center, machine.department), (machine.work_center, None)):
        windows = T1_WINDOWS.get(key)  # type: ignore[arg-type]
        if windows is not None:
            return windows
    return ()


def windows_for(shift: str, machine: Machine) -> tuple[ShiftWindow, ...]:
    """Return the hour windows that ``shift`` opens up for ``machine``.

    ``T3`` is handled by the caller (it clears the whole day) and unknown shift
    codes map to no windows.
    """
    if shift == ShiftCode.T2:
        return T2_WINDOWS
    if shift == ShiftCode.T1:
        return _t1_windows(machine)
    return ()


def compute_unavailable_hours(machine: Machine, day: dt.date) -> HourMask:
    """Return the hours ``machine`` cannot be scheduled on ``day``.

    Weekends are always fully unavailable. On weekdays every hour starts out
    unavailable and each active shift removes its windows; ``T3`` frees the
    whole day. The result depends only on the machine's shift configuration and
    the weekday of ``day``.
    """
    if is_weekend(day):
        return HourMask.full()

    mask = HourMask.full()
    for shift in machine.active_shifts:
        if shift == ShiftCode.T3:
            return HourMask.empty()
        for window in windows_for(shift, machine):
            mask = mask.without(window)
    return mask


__all__ = [
    "T1_WINDOWS",
    "T2_WINDOWS",
    "compute_unavailable_hours",
    "is_weekend",
    "windows_for",
]
