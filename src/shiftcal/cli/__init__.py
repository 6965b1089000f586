"""Command-line interface for shiftcal."""
