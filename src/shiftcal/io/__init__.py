"""Machine loaders and record exporters."""

from .exports import records_to_dataframe, write_records
from .loaders import load_machines, load_scheduled_tasks, machines_from_rows, read_csv

__all__ = [
    "load_machines",
    "load_scheduled_tasks",
    "machines_from_rows",
    "read_csv",
    "records_to_dataframe",
    "write_records",
]
