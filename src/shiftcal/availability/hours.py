"""Hour-of-day bit-set used to describe daily availability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from shiftcal.core.errors import ShiftCalValueError

HOURS_PER_DAY = 24
_FULL_BITS = (1 << HOURS_PER_DAY) - 1


def _check_hour(hour: int) -> int:
    if isinstance(hour, bool) or not isinstance(hour, int):
        raise ShiftCalValueError(f"Hour must be an integer, got {hour!r}")
    if not 0 <= hour < HOURS_PER_DAY:
        raise ShiftCalValueError(f"Hour must be within 0-23, got {hour}")
    return hour


@dataclass(frozen=True, slots=True)
class ShiftWindow:
    """Inclusive range of whole hours that a shift makes available."""

    start: int
    end: int

    def __post_init__(self) -> None:
        _check_hour(self.start)
        _check_hour(self.end)
        if self.end < self.start:
            raise ShiftCalValueError("ShiftWindow.end must be >= ShiftWindow.start")

    def hours(self) -> range:
        return range(self.start, self.end + 1)

    def bits(self) -> int:
        return ((1 << (self.end + 1)) - 1) & ~((1 << self.start) - 1)


@dataclass(frozen=True, slots=True)
class HourMask:
    """Immutable set of hours 0-23 stored as a 24-bit integer.

    Bit ``h`` set means hour ``h`` (``h:00`` to ``h+1:00``) is *unavailable*.
    Iteration yields hours in ascending order.
    """

    bits: int = 0

    def __post_init__(self) -> None:
        if self.bits & ~_FULL_BITS:
            raise ShiftCalValueError("HourMask only holds hours 0-23")

    @classmethod
    def full(cls) -> "HourMask":
        return cls(_FULL_BITS)

    @classmethod
    def empty(cls) -> "HourMask":
        return cls(0)

    @classmethod
    def from_hours(cls, hours: Iterable[int | str]) -> "HourMask":
        """Build a mask from ints or numeric strings (as stored by older clients)."""
        bits = 0
        for hour in hours:
            value = int(hour) if isinstance(hour, str) else hour
            bits |= 1 << _check_hour(value)
        return cls(bits)

    def without(self, window: ShiftWindow) -> "HourMask":
        return HourMask(self.bits & ~window.bits())

    def with_hours(self, hours: Iterable[int]) -> "HourMask":
        return HourMask(self.bits | HourMask.from_hours(hours).bits)

    def toggled(self, hour: int) -> "HourMask":
        return HourMask(self.bits ^ (1 << _check_hour(hour)))

    def is_full(self) -> bool:
        return self.bits == _FULL_BITS

    def to_list(self) -> list[int]:
        return list(self)

    def __contains__(self, hour: object) -> bool:
        if isinstance(hour, bool) or not isinstance(hour, int):
            return False
        return 0 <= hour < HOURS_PER_DAY and bool(self.bits >> hour & 1)

    def __iter__(self) -> Iterator[int]:
        return (hour for hour in range(HOURS_PER_DAY) if self.bits >> hour & 1)

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __bool__(self) -> bool:
        return self.bits != 0


__all__ = ["HOURS_PER_DAY", "HourMask", "ShiftWindow"]
