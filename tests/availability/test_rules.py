import datetime as dt

import pytest

from shiftcal.availability.models import Department, Machine, WorkCenter
from shiftcal.availability.rules import compute_unavailable_hours, is_weekend, windows_for

# 2024-03-04 is a Monday.
WEEKDAYS = [dt.date(2024, 3, 4) + dt.timedelta(days=offset) for offset in range(5)]
WEEKEND = [dt.date(2024, 3, 9), dt.date(2024, 3, 10)]

ALL_HOURS = list(range(24))


def machine(**overrides) -> Machine:
    data = {"id": "M1", "work_center": "ZANICA", "department": "PRINTING", "active_shifts": []}
    data.update(overrides)
    return Machine(**data)


def test_weekend_detection():
    assert all(not is_weekend(day) for day in WEEKDAYS)
    assert all(is_weekend(day) for day in WEEKEND)


@pytest.mark.parametrize("day", WEEKEND)
@pytest.mark.parametrize("shifts", [[], ["T1"], ["T2"], ["T3"], ["T1", "T2", "T3"]])
def test_weekends_always_fully_unavailable(day, shifts):
    mask = compute_unavailable_hours(machine(active_shifts=shifts), day)
    assert mask.to_list() == ALL_HOURS


@pytest.mark.parametrize("day", WEEKDAYS)
def test_t3_frees_the_whole_weekday(day):
    mask = compute_unavailable_hours(machine(active_shifts=["T1", "T3"]), day)
    assert not mask
    assert compute_unavailable_hours(machine(active_shifts=["T3"]), day).to_list() == []


@pytest.mark.parametrize("day", WEEKDAYS)
@pytest.mark.parametrize("work_center", ["ZANICA", "BUSTO_GAROLFO", "ELSEWHERE"])
def test_t2_window(day, work_center):
    mask = compute_unavailable_hours(machine(work_center=work_center, active_shifts=["T2"]), day)
    assert mask.to_list() == [0, 1, 2, 3, 4, 5, 22, 23]


@pytest.mark.parametrize("day", WEEKDAYS)
def test_t1_busto_garolfo_window(day):
    m = machine(work_center="BUSTO_GAROLFO", active_shifts=["T1"])
    assert compute_unavailable_hours(m, day).to_list() == [0, 1, 2, 3, 4, 5, 6, 7, 12, 13, 18, 19, 20, 21, 22, 23]


@pytest.mark.parametrize("department", ["PACKAGING", "CONFEZIONAMENTO", "PRINTING", "STAMPA", None])
def test_t1_zanica_window(department):
    m = machine(work_center="ZANICA", department=department, active_shifts=["T1"])
    expected = [0, 1, 2, 3, 4, 5, 6, 7, 12, 17, 18, 19, 20, 21, 22, 23]
    assert compute_unavailable_hours(m, WEEKDAYS[0]).to_list() == expected


@pytest.mark.parametrize("work_center", ["BOTH", "MILANO"])
def test_t1_unknown_work_center_adds_nothing(work_center):
    m = machine(work_center=work_center, active_shifts=["T1"])
    assert compute_unavailable_hours(m, WEEKDAYS[0]).to_list() == ALL_HOURS
    assert windows_for("T1", m) == ()


def test_shift_windows_are_unioned():
    m = machine(work_center="BUSTO_GAROLFO", active_shifts=["T1", "T2"])
    assert compute_unavailable_hours(m, WEEKDAYS[1]).to_list() == [0, 1, 2, 3, 4, 5, 22, 23]


def test_unknown_shift_codes_are_ignored():
    m = machine(active_shifts=["T9", "night"])
    assert compute_unavailable_hours(m, WEEKDAYS[2]).to_list() == ALL_HOURS
    m = machine(active_shifts=["T9", "T2"])
    assert compute_unavailable_hours(m, WEEKDAYS[2]).to_list() == [0, 1, 2, 3, 4, 5, 22, 23]


def test_missing_shifts_leave_weekday_unavailable():
    m = Machine(id="M2", work_center=WorkCenter.ZANICA, department=Department.PACKAGING, active_shifts=None)
    assert m.active_shifts == ()
    assert compute_unavailable_hours(m, WEEKDAYS[3]).to_list() == ALL_HOURS


def test_result_depends_only_on_weekday():
    m = machine(work_center="BUSTO_GAROLFO", active_shifts=["T1"])
    monday = dt.date(2024, 3, 4)
    assert compute_unavailable_hours(m, monday) == compute_unavailable_hours(m, monday + dt.timedelta(weeks=30))
