"""Pydantic models describing machines and their availability records."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from shiftcal.availability.hours import HOURS_PER_DAY, HourMask


class WorkCenter(str, Enum):
    ZANICA = "ZANICA"
    BUSTO_GAROLFO = "BUSTO_GAROLFO"
    BOTH = "BOTH"


class Department(str, Enum):
    PRINTING = "PRINTING"
    PACKAGING = "PACKAGING"


class ShiftCode(str, Enum):
    T1 = "T1"
    T2 = "T2"
    T3 = "T3"


class MachineStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


# Labels used by the production database for departments.
DEPARTMENT_ALIASES: dict[str, Department] = {
    "STAMPA": Department.PRINTING,
    "CONFEZIONAMENTO": Department.PACKAGING,
}


class Machine(BaseModel):
    """Machine descriptor consumed by the calendar generator.

    Attributes
    ----------
    id:
        Opaque machine identifier, copied verbatim into every availability record.
    work_center:
        Physical location. Values outside :class:`WorkCenter` are kept as plain
        strings; they receive no T1 window.
    department:
        Process type. ``STAMPA`` / ``CONFEZIONAMENTO`` are accepted as aliases.
    active_shifts:
        Shift codes (``T1``/``T2``/``T3``). Missing or ``None`` means no shifts;
        unknown codes are retained and ignored by the rule engine.
    machine_name / machine_type / status:
        Descriptive metadata; ``status`` lets callers skip inactive machines.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    work_center: WorkCenter | str
    department: Department | str | None = None
    active_shifts: tuple[str, ...] = ()
    machine_name: str | None = None
    machine_type: str | None = None
    status: MachineStatus = MachineStatus.ACTIVE

    @field_validator("id", mode="before")
    @classmethod
    def _id_present(cls, value: object) -> str:
        if value is None:
            raise ValueError("Machine.id is required")
        text = str(value).strip()
        if not text:
            raise ValueError("Machine.id must be a non-empty string")
        return text

    @field_validator("work_center", mode="before")
    @classmethod
    def _normalise_work_center(cls, value: object) -> object:
        if isinstance(value, str):
            key = value.strip().upper()
            return WorkCenter(key) if key in WorkCenter.__members__ else key
        return value

    @field_validator("department", mode="before")
    @classmethod
    def _normalise_department(cls, value: object) -> object:
        if isinstance(value, str):
            key = value.strip().upper()
            if not key:
                return None
            if key in Department.__members__:
                return Department(key)
            return DEPARTMENT_ALIASES.get(key, key)
        return value

    @field_validator("active_shifts", mode="before")
    @classmethod
    def _normalise_shifts(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        return tuple(str(code).strip().upper() for code in value if str(code).strip())

    @property
    def is_active(self) -> bool:
        return self.status is MachineStatus.ACTIVE


class AvailabilityRecord(BaseModel):
    """Hours during which ``machine_id`` cannot be scheduled on ``date``."""

    model_config = ConfigDict(frozen=True)

    machine_id: str
    date: dt.date
    unavailable_hours: tuple[int, ...]

    @field_validator("machine_id")
    @classmethod
    def _machine_id_present(cls, value: str) -> str:
        if not value:
            raise ValueError("AvailabilityRecord.machine_id must be non-empty")
        return value

    @field_validator("unavailable_hours", mode="before")
    @classmethod
    def _sorted_hours(cls, value: object) -> object:
        if isinstance(value, HourMask):
            return tuple(value)
        hours = sorted({int(hour) for hour in value})  # type: ignore[union-attr]
        if hours and not (0 <= hours[0] and hours[-1] < HOURS_PER_DAY):
            raise ValueError("unavailable_hours must lie within 0-23")
        return tuple(hours)

    @property
    def mask(self) -> HourMask:
        return HourMask.from_hours(self.unavailable_hours)


__all__ = [
    "WorkCenter",
    "Department",
    "ShiftCode",
    "MachineStatus",
    "DEPARTMENT_ALIASES",
    "Machine",
    "AvailabilityRecord",
]
