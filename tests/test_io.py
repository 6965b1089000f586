import json
from pathlib import Path

import pandas as pd
import pytest
from pydantic import ValidationError

from shiftcal.availability.generator import generate_calendar_for_year
from shiftcal.availability.models import Department, MachineStatus, WorkCenter
from shiftcal.core.errors import ShiftCalValueError
from shiftcal.io import load_machines, load_scheduled_tasks, records_to_dataframe, write_records


def test_load_machines_from_yaml(fleet_yaml):
    machines = load_machines(fleet_yaml)
    assert [machine.id for machine in machines] == ["P1", "C1", "B1", "OLD"]
    assert machines[0].department is Department.PRINTING
    assert machines[1].department is Department.PACKAGING
    assert machines[2].work_center is WorkCenter.BUSTO_GAROLFO
    assert machines[3].status is MachineStatus.INACTIVE
    assert machines[3].active_shifts == ()


def test_load_machines_from_top_level_yaml_list(tmp_path):
    path = tmp_path / "fleet.yml"
    path.write_text("- id: 7\n  work_center: ZANICA\n", encoding="utf-8")
    machines = load_machines(path)
    assert machines[0].id == "7"
    assert machines[0].active_shifts == ()


def test_load_machines_from_csv(tmp_path):
    path = tmp_path / "machines.csv"
    path.write_text(
        "id,work_center,department,active_shifts,machine_name\n"
        "M1,ZANICA,STAMPA,T1|T2,Stampa 1\n"
        "M2,BUSTO_GAROLFO,PACKAGING,,\n",
        encoding="utf-8",
    )
    machines = load_machines(path)
    assert machines[0].active_shifts == ("T1", "T2")
    assert machines[0].machine_name == "Stampa 1"
    assert machines[1].active_shifts == ()
    assert machines[1].machine_name is None


def test_load_machines_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_machines(tmp_path / "missing.yaml")
    bad_suffix = tmp_path / "machines.txt"
    bad_suffix.write_text("", encoding="utf-8")
    with pytest.raises(ShiftCalValueError):
        load_machines(bad_suffix)
    not_a_list = tmp_path / "machines.yaml"
    not_a_list.write_text("machines: nope\n", encoding="utf-8")
    with pytest.raises(ShiftCalValueError):
        load_machines(not_a_list)
    no_id = tmp_path / "no_id.yaml"
    no_id.write_text("- work_center: ZANICA\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_machines(no_id)


def test_load_scheduled_tasks(tmp_path):
    path = tmp_path / "tasks.yaml"
    path.write_text(
        "tasks:\n"
        "  - order_number: ODP-1\n"
        "    machine_id: M1\n"
        "    start: 2024-03-05T09:00:00Z\n"
        "    end: 2024-03-05T12:00:00Z\n",
        encoding="utf-8",
    )
    tasks = load_scheduled_tasks(path)
    assert tasks[0].order_number == "ODP-1"
    assert tasks[0].start.hour == 9


def test_records_to_dataframe(fleet_yaml):
    records = generate_calendar_for_year(load_machines(fleet_yaml)[:1], 2024)
    frame = records_to_dataframe(records)
    assert list(frame.columns) == ["machine_id", "date", "unavailable_hours"]
    assert len(frame) == len(records)
    assert frame.loc[0, "date"] == "2024-01-01"
    assert records_to_dataframe([]).empty


def test_write_records_csv_and_jsonl(tmp_path, fleet_yaml):
    records = generate_calendar_for_year(load_machines(fleet_yaml)[2:3], 2024)

    csv_path = write_records(records, tmp_path / "out" / "calendar.csv")
    frame = pd.read_csv(csv_path, dtype=str)
    assert len(frame) == 104
    assert frame.loc[0, "unavailable_hours"] == "|".join(str(hour) for hour in range(24))

    jsonl_path = write_records(records, tmp_path / "calendar.jsonl")
    lines = jsonl_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 104
    first = json.loads(lines[0])
    assert first["machine_id"] == "B1"
    assert first["date"] == "2024-01-06"

    with pytest.raises(ShiftCalValueError):
        write_records(records, Path(tmp_path / "calendar.parquet"))
