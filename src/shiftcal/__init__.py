"""shiftcal: machine shift calendars and availability for production scheduling."""

from shiftcal.availability import (
    AvailabilityRecord,
    HourMask,
    Machine,
    compute_unavailable_hours,
    generate_calendar_for_machine,
    generate_calendar_for_year,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AvailabilityRecord",
    "HourMask",
    "Machine",
    "compute_unavailable_hours",
    "generate_calendar_for_machine",
    "generate_calendar_for_year",
]
