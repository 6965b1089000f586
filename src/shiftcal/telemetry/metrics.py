"""Summary metrics for a generated availability calendar."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from shiftcal.availability.hours import HOURS_PER_DAY
from shiftcal.availability.models import AvailabilityRecord, Machine
from shiftcal.availability.rules import is_weekend


def calendar_metrics(machines: Sequence[Machine], records: Iterable[AvailabilityRecord]) -> dict[str, Any]:
    """Summarise ``records`` per machine for the run telemetry record.

    ``weekend_only_machines`` lists machines whose only unavailable days are
    Saturdays and Sundays (typically ``T3`` machines); machines with no
    records at all are reported separately.
    """
    per_machine: Counter[str] = Counter()
    hours = 0
    full_days = 0
    weekday_machines: set[str] = set()
    for record in records:
        per_machine[record.machine_id] += 1
        hours += len(record.unavailable_hours)
        if len(record.unavailable_hours) == HOURS_PER_DAY:
            full_days += 1
        if not is_weekend(record.date):
            weekday_machines.add(record.machine_id)

    ids = [machine.id for machine in machines]
    return {
        "machines": len(ids),
        "records": sum(per_machine.values()),
        "unavailable_hours": hours,
        "fully_unavailable_days": full_days,
        "records_by_machine": {machine_id: per_machine.get(machine_id, 0) for machine_id in ids},
        "weekend_only_machines": [
            machine_id for machine_id in ids if per_machine.get(machine_id) and machine_id not in weekday_machines
        ],
        "machines_without_records": [machine_id for machine_id in ids if not per_machine.get(machine_id)],
    }


__all__ = ["calendar_metrics"]
