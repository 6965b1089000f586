"""Machine availability: shift rules, calendar generation and overrides."""

from .conflicts import ScheduledTask, check_schedule_conflicts, find_conflicts
from .edits import hours_between, mark_unavailable, parse_hour, toggle_hour
from .generator import (
    generate_calendar_for_machine,
    generate_calendar_for_range,
    generate_calendar_for_year,
    generate_calendar_parallel,
    iter_dates,
    iter_year_dates,
)
from .hours import HOURS_PER_DAY, HourMask, ShiftWindow
from .models import (
    AvailabilityRecord,
    Department,
    Machine,
    MachineStatus,
    ShiftCode,
    WorkCenter,
)
from .rules import compute_unavailable_hours, is_weekend, windows_for

__all__ = [
    "HOURS_PER_DAY",
    "HourMask",
    "ShiftWindow",
    "WorkCenter",
    "Department",
    "ShiftCode",
    "MachineStatus",
    "Machine",
    "AvailabilityRecord",
    "compute_unavailable_hours",
    "is_weekend",
    "windows_for",
    "iter_dates",
    "iter_year_dates",
    "generate_calendar_for_range",
    "generate_calendar_for_year",
    "generate_calendar_for_machine",
    "generate_calendar_parallel",
    "ScheduledTask",
    "find_conflicts",
    "check_schedule_conflicts",
    "parse_hour",
    "hours_between",
    "mark_unavailable",
    "toggle_hour",
]
