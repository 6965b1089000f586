import pytest

from shiftcal.availability.hours import HourMask, ShiftWindow
from shiftcal.core.errors import ShiftCalValueError


def test_full_and_empty_masks():
    assert list(HourMask.full()) == list(range(24))
    assert len(HourMask.full()) == 24
    assert HourMask.full().is_full()
    assert not HourMask.empty()
    assert len(HourMask.empty()) == 0


def test_without_window_clears_inclusive_range():
    mask = HourMask.full().without(ShiftWindow(6, 21))
    assert mask.to_list() == [0, 1, 2, 3, 4, 5, 22, 23]


def test_from_hours_accepts_numeric_strings():
    mask = HourMask.from_hours(["3", 1, "22"])
    assert mask.to_list() == [1, 3, 22]
    assert 3 in mask
    assert 2 not in mask
    assert "3" not in mask


def test_toggled_flips_single_hour():
    mask = HourMask.from_hours([8, 9])
    assert mask.toggled(9).to_list() == [8]
    assert mask.toggled(10).to_list() == [8, 9, 10]


def test_with_hours_is_a_union():
    mask = HourMask.from_hours([1, 2]).with_hours(range(2, 5))
    assert mask.to_list() == [1, 2, 3, 4]


@pytest.mark.parametrize("hour", [-1, 24, 99])
def test_out_of_range_hours_rejected(hour):
    with pytest.raises(ShiftCalValueError):
        HourMask.from_hours([hour])


def test_window_must_be_ordered():
    with pytest.raises(ShiftCalValueError):
        ShiftWindow(10, 8)
    assert list(ShiftWindow(13, 16).hours()) == [13, 14, 15, 16]
