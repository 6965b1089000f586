"""Common shiftcal-specific exceptions."""


class ShiftCalError(Exception):
    """Base class for errors raised by shiftcal."""


class ShiftCalValueError(ShiftCalError, ValueError):
    """Raised when shiftcal detects invalid user-provided data."""


class AvailabilityConflictError(ShiftCalError):
    """Raised when an availability override overlaps a scheduled task."""

    def __init__(self, message: str, *, order_number: str | None = None) -> None:
        super().__init__(message)
        self.order_number = order_number


__all__ = ["ShiftCalError", "ShiftCalValueError", "AvailabilityConflictError"]
