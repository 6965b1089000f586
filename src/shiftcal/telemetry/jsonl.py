"""Utilities for writing structured telemetry and calendar records as JSONL."""

from __future__ import annotations

import datetime as dt
import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any


def _encode(value: Any) -> Any:
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_jsonl(path: str | Path, records: Iterable[Mapping[str, Any]], *, append: bool = True) -> int:
    """Write ``records`` one per line and return how many were written.

    Dates and paths are stored as ISO strings. With ``append=False`` the file is
    truncated first (calendar exports); run telemetry always appends.
    """
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("a" if append else "w", encoding="utf-8") as handle:
        for record in records:
            json.dump(record, handle, ensure_ascii=False, separators=(",", ":"), default=_encode)
            handle.write("\n")
            written += 1
    return written


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append a single run record to ``path``."""
    write_jsonl(path, [record])


def read_jsonl(path: str | Path) -> Iterable[dict[str, Any]]:
    """Yield the JSON objects stored one per line in ``path``; blank lines are skipped."""
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                yield json.loads(line)


__all__ = ["append_jsonl", "read_jsonl", "write_jsonl"]
