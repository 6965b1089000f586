"""Machine list loading utilities (YAML or CSV)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml
from pydantic import TypeAdapter

from shiftcal.availability.conflicts import ScheduledTask
from shiftcal.availability.models import Machine
from shiftcal.core.errors import ShiftCalValueError

__all__ = ["load_machines", "load_scheduled_tasks", "read_csv", "machines_from_rows"]

_MACHINE_LIST = TypeAdapter(list[Machine])
_TASK_LIST = TypeAdapter(list[ScheduledTask])
_SHIFT_SPLIT = re.compile(r"[|,;\s]+")


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults."""
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def _as_optional_string(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(cast("Any", value)):
        return None
    return str(value)


def _split_shifts(value: object) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(code) for code in value]
    text = _as_optional_string(value)
    if text is None:
        return []
    return [part for part in _SHIFT_SPLIT.split(text) if part]


def machines_from_rows(rows: list[dict[str, object]]) -> list[Machine]:
    """Validate raw row dictionaries into :class:`Machine` models."""
    cleaned: list[dict[str, object]] = []
    for row in rows:
        entry = {key: _as_optional_string(value) for key, value in row.items() if key != "active_shifts"}
        entry = {key: value for key, value in entry.items() if value is not None}
        entry["active_shifts"] = _split_shifts(row.get("active_shifts"))
        cleaned.append(entry)
    return _MACHINE_LIST.validate_python(cleaned)


def _load_yaml(path: Path) -> list[dict[str, object]]:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle)
    if payload is None:
        return []
    if isinstance(payload, dict):
        payload = payload.get("machines", [])
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ShiftCalValueError(f"{path} must contain a list of machine mappings")
    return payload


def load_machines(path: str | Path) -> list[Machine]:
    """Load machine descriptors from a YAML or CSV file.

    YAML files hold either a top-level list or a ``machines:`` key. CSV files
    carry one machine per row; ``active_shifts`` may be separated by ``|``,
    ``,`` or whitespace and may be blank.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(file_path)
    suffix = file_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        rows = _load_yaml(file_path)
    elif suffix == ".csv":
        rows = cast("list[dict[str, object]]", read_csv(file_path).to_dict(orient="records"))
    else:
        raise ShiftCalValueError(f"Unsupported machine file format: {file_path.suffix or file_path.name}")
    return machines_from_rows(rows)


def load_scheduled_tasks(path: str | Path) -> list[ScheduledTask]:
    """Load scheduled tasks (for conflict checks) from a YAML or JSON list."""
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle)
    if payload is None:
        return []
    if isinstance(payload, dict):
        payload = payload.get("tasks", [])
    if not isinstance(payload, list):
        raise ShiftCalValueError(f"{file_path} must contain a list of scheduled tasks")
    return _TASK_LIST.validate_python(payload)
