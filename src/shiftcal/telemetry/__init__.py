"""Run telemetry helpers (JSONL run history and calendar metrics)."""

from .jsonl import append_jsonl, read_jsonl, write_jsonl
from .metrics import calendar_metrics
from .run_logger import RunTelemetryLogger

__all__ = ["append_jsonl", "read_jsonl", "write_jsonl", "calendar_metrics", "RunTelemetryLogger"]
