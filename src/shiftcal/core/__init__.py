"""Core utilities shared across shiftcal modules."""

from .errors import AvailabilityConflictError, ShiftCalError, ShiftCalValueError

__all__ = ["ShiftCalError", "ShiftCalValueError", "AvailabilityConflictError"]
