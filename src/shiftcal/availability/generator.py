"""Calendar generation: expand shift rules into per-day availability records."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor

from shiftcal.availability.models import AvailabilityRecord, Machine
from shiftcal.availability.rules import compute_unavailable_hours
from shiftcal.core.errors import ShiftCalValueError

_ONE_DAY = dt.timedelta(days=1)


def _check_year(year: int) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise ShiftCalValueError(f"year must be an integer, got {year!r}")
    if not dt.MINYEAR <= year <= dt.MAXYEAR:
        raise ShiftCalValueError(f"year must be within {dt.MINYEAR}-{dt.MAXYEAR}, got {year}")
    return year


def iter_dates(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        if current == dt.date.max:
            return
        current += _ONE_DAY


def iter_year_dates(year: int) -> Iterator[dt.date]:
    """Yield January 1 through December 31 of ``year`` (365 or 366 dates)."""
    _check_year(year)
    return iter_dates(dt.date(year, 1, 1), dt.date(year, 12, 31))


def generate_calendar_for_range(
    machines: Sequence[Machine], start: dt.date, end: dt.date
) -> list[AvailabilityRecord]:
    """Build availability records for ``machines`` between ``start`` and ``end``.

    Records come out machine by machine in input order, then by ascending date.
    Days on which the machine is available around the clock produce no record.
    """
    if end < start:
        raise ShiftCalValueError("end date must not precede start date")
    records: list[AvailabilityRecord] = []
    for machine in machines:
        for day in iter_dates(start, end):
            mask = compute_unavailable_hours(machine, day)
            if mask:
                records.append(
                    AvailabilityRecord(machine_id=machine.id, date=day, unavailable_hours=mask)
                )
    return records


def generate_calendar_for_year(machines: Sequence[Machine], year: int) -> list[AvailabilityRecord]:
    """Generate availability records for every machine over the whole of ``year``."""
    _check_year(year)
    return generate_calendar_for_range(machines, dt.date(year, 1, 1), dt.date(year, 12, 31))


def generate_calendar_for_machine(machine: Machine, year: int) -> list[AvailabilityRecord]:
    return generate_calendar_for_year([machine], year)


def generate_calendar_parallel(
    machines: Sequence[Machine], year: int, max_workers: int | None = None
) -> list[AvailabilityRecord]:
    """Fan per-machine generation out to a thread pool and merge in input order.

    The result is identical to :func:`generate_calendar_for_year`.
    """
    _check_year(year)
    if max_workers is None or max_workers <= 1 or len(machines) <= 1:
        return generate_calendar_for_year(machines, year)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:

        def _one(machine: Machine) -> list[AvailabilityRecord]:
            return generate_calendar_for_machine(machine, year)

        per_machine = list(executor.map(_one, machines))
    return [record for chunk in per_machine for record in chunk]


__all__ = [
    "iter_dates",
    "iter_year_dates",
    "generate_calendar_for_range",
    "generate_calendar_for_year",
    "generate_calendar_for_machine",
    "generate_calendar_parallel",
]
