"""Persistence collaborators for availability records."""

from .sqlite_store import AvailabilitySink, SQLiteAvailabilityStore

__all__ = ["AvailabilitySink", "SQLiteAvailabilityStore"]
