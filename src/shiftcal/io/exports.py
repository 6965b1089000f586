"""Export availability records as pandas frames, CSV or JSONL."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

import pandas as pd

from shiftcal.availability.models import AvailabilityRecord
from shiftcal.core.errors import ShiftCalValueError
from shiftcal.telemetry.jsonl import write_jsonl

COLUMNS = ["machine_id", "date", "unavailable_hours"]


def records_to_dataframe(records: Iterable[AvailabilityRecord]) -> pd.DataFrame:
    rows = [
        {
            "machine_id": record.machine_id,
            "date": record.date.isoformat(),
            "unavailable_hours": list(record.unavailable_hours),
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def write_records(records: Sequence[AvailabilityRecord], path: str | Path) -> Path:
    """Write ``records`` to ``path``; the format follows the suffix (.csv or .jsonl)."""
    out = Path(path)
    suffix = out.suffix.lower()
    if suffix not in {".csv", ".jsonl"}:
        raise ShiftCalValueError(f"Unsupported export format '{out.suffix}'. Use .csv or .jsonl.")
    out.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        frame = records_to_dataframe(records)
        frame["unavailable_hours"] = frame["unavailable_hours"].map(
            lambda hours: "|".join(str(hour) for hour in hours)
        )
        frame.to_csv(out, index=False)
    else:
        write_jsonl(out, (record.model_dump(mode="json") for record in records), append=False)
    return out


__all__ = ["COLUMNS", "records_to_dataframe", "write_records"]
