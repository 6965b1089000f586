"""Context manager for capturing calendar-generation run telemetry."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from .jsonl import append_jsonl


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class RunTelemetryLogger(AbstractContextManager["RunTelemetryLogger"]):
    """Record high-level telemetry for a CLI run.

    Parameters
    ----------
    log_path:
        JSONL path where run records are appended.
    command:
        CLI command identifier (e.g., ``"generate"``).
    source:
        Optional path of the machine list the run consumed.
    year:
        Calendar year being generated (if applicable).
    config:
        Dictionary capturing the effective run configuration.
    """

    log_path: Path
    command: str
    source: str | None = None
    year: int | None = None
    config: Mapping[str, Any] | None = None
    schema_version: str = "1.0"
    run_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    _start_time: float = field(default=0.0, init=False)
    _start_timestamp: str | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)

    def __enter__(self) -> "RunTelemetryLogger":
        self._start_time = time.perf_counter()
        self._start_timestamp = _iso_now()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type:
            self._close(status="error", metrics=None, error=repr(exc), artifacts=None)
            return False
        self._close(status="ok", metrics=None, error=None, artifacts=None)
        return False

    def elapsed(self) -> float:
        """Return the elapsed wall-clock seconds since the run started."""
        return time.perf_counter() - self._start_time

    def finalize(
        self,
        *,
        status: str = "ok",
        metrics: Mapping[str, Any] | None = None,
        error: str | None = None,
        artifacts: list[str] | None = None,
    ) -> None:
        """Write the terminal run record."""
        self._close(status=status, metrics=metrics, error=error, artifacts=artifacts)

    def _close(
        self,
        *,
        status: str,
        metrics: Mapping[str, Any] | None,
        error: str | None,
        artifacts: list[str] | None,
    ) -> None:
        if self._closed:
            return
        duration = self.elapsed() if self._start_time else 0.0
        record = {
            "record_type": "run",
            "schema_version": self.schema_version,
            "run_id": self.run_id,
            "command": self.command,
            "source": self.source,
            "year": self.year,
            "status": status,
            "metrics": dict(metrics or {}),
            "config": dict(self.config or {}),
            "artifacts": list(artifacts or []),
            "error": error,
            "started_at": self._start_timestamp,
            "finished_at": _iso_now(),
            "duration_seconds": round(duration, 3),
        }
        append_jsonl(self.log_path, record)
        self._closed = True


__all__ = ["RunTelemetryLogger"]
