import datetime as dt

import pytest

from shiftcal.availability import Machine, generate_calendar_for_range
from shiftcal.telemetry import RunTelemetryLogger, append_jsonl, calendar_metrics, read_jsonl, write_jsonl


def test_append_and_read_jsonl(tmp_path):
    path = tmp_path / "logs" / "runs.jsonl"
    append_jsonl(path, {"a": 1})
    append_jsonl(path, {"b": "è"})
    assert list(read_jsonl(path)) == [{"a": 1}, {"b": "è"}]


def test_run_logger_records_success(tmp_path):
    path = tmp_path / "runs.jsonl"
    with RunTelemetryLogger(log_path=path, command="generate", year=2024, config={"workers": 2}) as logger:
        logger.finalize(metrics={"records": 10}, artifacts=["out.csv"])
    (record,) = list(read_jsonl(path))
    assert record["status"] == "ok"
    assert record["command"] == "generate"
    assert record["year"] == 2024
    assert record["metrics"] == {"records": 10}
    assert record["artifacts"] == ["out.csv"]
    assert record["run_id"] == logger.run_id


def test_run_logger_records_errors_and_propagates(tmp_path):
    path = tmp_path / "runs.jsonl"
    with pytest.raises(RuntimeError):
        with RunTelemetryLogger(log_path=path, command="generate"):
            raise RuntimeError("boom")
    (record,) = list(read_jsonl(path))
    assert record["status"] == "error"
    assert "boom" in record["error"]


def test_write_jsonl_truncates_and_encodes_dates(tmp_path):
    path = tmp_path / "calendar.jsonl"
    append_jsonl(path, {"stale": True})
    written = write_jsonl(path, [{"date": dt.date(2024, 3, 4), "hours": (1, 2)}], append=False)
    assert written == 1
    assert list(read_jsonl(path)) == [{"date": "2024-03-04", "hours": [1, 2]}]


def test_calendar_metrics_summarises_per_machine():
    machines = [
        Machine(id="P1", work_center="ZANICA", department="PRINTING", active_shifts=["T1"]),
        Machine(id="N1", work_center="BUSTO_GAROLFO", active_shifts=["T3"]),
        Machine(id="IDLE", work_center="BUSTO_GAROLFO", active_shifts=["T3"]),
    ]
    week = [dt.date(2024, 3, 4) + dt.timedelta(days=offset) for offset in range(7)]
    records = generate_calendar_for_range(machines[:2], week[0], week[-1])

    metrics = calendar_metrics(machines, records)
    assert metrics["machines"] == 3
    assert metrics["records"] == 9
    assert metrics["records_by_machine"] == {"P1": 7, "N1": 2, "IDLE": 0}
    assert metrics["fully_unavailable_days"] == 4
    assert metrics["unavailable_hours"] == 5 * 16 + 4 * 24
    assert metrics["weekend_only_machines"] == ["N1"]
    assert metrics["machines_without_records"] == ["IDLE"]


def test_calendar_metrics_empty_fleet():
    metrics = calendar_metrics([], [])
    assert metrics["records"] == 0
    assert metrics["records_by_machine"] == {}
    assert metrics["weekend_only_machines"] == []
