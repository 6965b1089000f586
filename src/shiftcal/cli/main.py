from __future__ import annotations

from contextlib import nullcontext
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from shiftcal.availability import compute_unavailable_hours, generate_calendar_parallel
from shiftcal.availability.conflicts import ScheduledTask
from shiftcal.cli.config import GenerateConfig, load_config_file, merge_config
from shiftcal.core.errors import ShiftCalError
from shiftcal.io import load_machines, load_scheduled_tasks, write_records
from shiftcal.storage import SQLiteAvailabilityStore
from shiftcal.telemetry import RunTelemetryLogger, calendar_metrics

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()

DATE_FORMATS = ["%Y-%m-%d"]
_HANDLED_ERRORS = (ShiftCalError, ValidationError, FileNotFoundError)


def _enable_rich_tracebacks():
    """Enable rich tracebacks with local variables and customized formatting."""
    try:
        import rich.traceback as _rt

        _rt.install(show_locals=True, width=140, extra_lines=2)
    except Exception:
        pass


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(1)


def format_hours(hours: Iterable[int]) -> str:
    """Render hours compactly, e.g. ``0-7, 12, 18-23``; ``-`` when empty."""
    ordered = sorted(hours)
    if not ordered:
        return "-"
    spans: list[str] = []
    start = prev = ordered[0]
    for hour in ordered[1:]:
        if hour == prev + 1:
            prev = hour
            continue
        spans.append(f"{start}-{prev}" if prev != start else str(start))
        start = prev = hour
    spans.append(f"{start}-{prev}" if prev != start else str(start))
    return ", ".join(spans)


def _as_date(value: datetime | date) -> date:
    return value.date() if isinstance(value, datetime) else value


def _load_tasks(path: Path | None) -> list[ScheduledTask] | None:
    return load_scheduled_tasks(path) if path is not None else None


@app.command()
def generate(
    machines: Path = typer.Argument(..., help="Machine list (YAML or CSV)."),
    year: int | None = typer.Option(None, "--year", "-y", help="Calendar year to generate."),
    out: Path | None = typer.Option(None, "--out", help="Export records to .csv or .jsonl."),
    sqlite: Path | None = typer.Option(None, "--sqlite", help="Upsert records into a SQLite store."),
    workers: int | None = typer.Option(None, "--workers", min=1, help="Parallel machine workers."),
    active_only: bool | None = typer.Option(
        None, "--active-only/--all-machines", help="Skip machines whose status is INACTIVE."
    ),
    config: Path | None = typer.Option(None, "--config", help="YAML/TOML/JSON generation config."),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", help="Append a JSONL run record to this file."
    ),
    debug: bool = typer.Option(False, "--debug", help="Verbose tracebacks."),
):
    """Generate a year of machine availability records."""
    if debug:
        _enable_rich_tracebacks()

    cfg = GenerateConfig()
    if config is not None:
        cfg = merge_config(cfg, load_config_file(config))
    cfg = merge_config(
        cfg,
        {
            "year": year,
            "output": out,
            "sqlite": sqlite,
            "workers": workers,
            "active_only": active_only,
            "telemetry_log": telemetry_log,
        },
    )
    if cfg.year is None:
        raise typer.BadParameter("A year is required (--year or config file).", param_hint="--year")

    logger = (
        RunTelemetryLogger(
            log_path=cfg.telemetry_log,
            command="generate",
            source=str(machines),
            year=cfg.year,
            config=cfg.to_dict(),
        )
        if cfg.telemetry_log
        else None
    )
    try:
        with logger if logger is not None else nullcontext():
            fleet = load_machines(machines)
            if cfg.active_only:
                fleet = [machine for machine in fleet if machine.is_active]
            records = generate_calendar_parallel(fleet, cfg.year, max_workers=cfg.workers)
            metrics = calendar_metrics(fleet, records)
            artifacts: list[str] = []
            if cfg.output is not None:
                artifacts.append(str(write_records(records, cfg.output)))
            if cfg.sqlite is not None:
                SQLiteAvailabilityStore(cfg.sqlite).bulk_upsert(records)
                artifacts.append(str(cfg.sqlite))
            if logger is not None:
                logger.finalize(metrics=metrics, artifacts=artifacts)
    except _HANDLED_ERRORS as exc:
        raise _fail(exc)

    per_machine = metrics["records_by_machine"]
    table = Table(title=f"Availability calendar {cfg.year}")
    table.add_column("Machine")
    table.add_column("Work centre")
    table.add_column("Shifts")
    table.add_column("Records", justify="right")
    for machine in fleet:
        table.add_row(
            machine.id,
            str(getattr(machine.work_center, "value", machine.work_center)),
            ",".join(machine.active_shifts) or "-",
            str(per_machine.get(machine.id, 0)),
        )
    console.print(table)
    console.print(f"Generated {len(records)} record(s) for {len(fleet)} machine(s).")
    for artifact in artifacts:
        console.print(f"Wrote {artifact}")


@app.command()
def day(
    machines: Path = typer.Argument(..., help="Machine list (YAML or CSV)."),
    on: datetime = typer.Option(..., "--date", formats=DATE_FORMATS, help="Date (YYYY-MM-DD)."),
):
    """Show each machine's unavailable hours on a single date."""
    target = _as_date(on)
    try:
        fleet = load_machines(machines)
    except _HANDLED_ERRORS as exc:
        raise _fail(exc)
    table = Table(title=f"Unavailable hours on {target.isoformat()} ({target.strftime('%A')})")
    table.add_column("Machine")
    table.add_column("Shifts")
    table.add_column("Unavailable")
    table.add_column("Hours", justify="right")
    for machine in fleet:
        mask = compute_unavailable_hours(machine, target)
        table.add_row(machine.id, ",".join(machine.active_shifts) or "-", format_hours(mask), str(len(mask)))
    console.print(table)


@app.command()
def show(
    db: Path = typer.Argument(..., help="SQLite availability store."),
    machine: str = typer.Option(..., "--machine", "-m"),
    start: datetime = typer.Option(..., "--start", formats=DATE_FORMATS),
    end: datetime = typer.Option(..., "--end", formats=DATE_FORMATS),
):
    """List stored availability rows for a machine and date range."""
    if not db.exists():
        raise _fail(FileNotFoundError(db))
    rows = SQLiteAvailabilityStore(db).get_range(machine, _as_date(start), _as_date(end))
    if not rows:
        console.print(f"No unavailable hours stored for {machine} in that range.")
        return
    table = Table(title=f"Machine {machine}")
    table.add_column("Date")
    table.add_column("Unavailable")
    for record in rows:
        table.add_row(record.date.isoformat(), format_hours(record.unavailable_hours))
    console.print(table)


@app.command()
def mark(
    db: Path = typer.Argument(..., help="SQLite availability store."),
    machine: str = typer.Option(..., "--machine", "-m"),
    start: datetime = typer.Option(..., "--start", formats=DATE_FORMATS),
    end: datetime = typer.Option(..., "--end", formats=DATE_FORMATS),
    from_time: str = typer.Option(..., "--from", help="Start time (HH:MM)."),
    to_time: str = typer.Option(..., "--to", help="End time (HH:MM, exclusive)."),
    tasks: Path | None = typer.Option(None, "--tasks", help="Scheduled tasks to check for overlaps."),
):
    """Mark a time range unavailable on every date between --start and --end."""
    try:
        records = SQLiteAvailabilityStore(db).mark_unavailable(
            machine,
            _as_date(start),
            _as_date(end),
            from_time,
            to_time,
            tasks=_load_tasks(tasks),
        )
    except _HANDLED_ERRORS as exc:
        raise _fail(exc)
    console.print(f"Updated {len(records)} day(s) for machine {machine}.")


@app.command()
def toggle(
    db: Path = typer.Argument(..., help="SQLite availability store."),
    machine: str = typer.Option(..., "--machine", "-m"),
    on: datetime = typer.Option(..., "--date", formats=DATE_FORMATS),
    hour: int = typer.Option(..., "--hour", min=0, max=23),
    tasks: Path | None = typer.Option(None, "--tasks", help="Scheduled tasks to check for overlaps."),
):
    """Flip a single hour slot between available and unavailable."""
    target = _as_date(on)
    try:
        record = SQLiteAvailabilityStore(db).toggle_hour(machine, target, hour, tasks=_load_tasks(tasks))
    except _HANDLED_ERRORS as exc:
        raise _fail(exc)
    state = "unavailable" if hour in record.unavailable_hours else "available"
    console.print(f"{machine} {target.isoformat()} {hour:02d}:00 is now {state}.")


if __name__ == "__main__":
    app()
