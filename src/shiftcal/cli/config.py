"""Generation configuration for the CLI (defaults, config files, overrides)."""

from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import typer
import yaml


@dataclass(frozen=True)
class GenerateConfig:
    """Settings applied to a ``shiftcal generate`` invocation."""

    year: int | None = None
    workers: int = 1
    active_only: bool = False
    output: Path | None = None
    sqlite: Path | None = None
    telemetry_log: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: str(value) if isinstance(value, Path) else value for key, value in asdict(self).items()}


_PATH_FIELDS = {"output", "sqlite", "telemetry_log"}
_INT_FIELDS = {"year", "workers"}
_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def load_config_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    elif suffix == ".toml":
        data = tomllib.loads(text)
    else:
        raise typer.BadParameter("Unsupported config format. Use YAML, TOML, or JSON.")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"Config file {path} must contain a mapping.")
    return data.get("generate", data)


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise typer.BadParameter(f"Invalid value for '{key}': {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid value for '{key}': {value!r}") from exc


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise typer.BadParameter(f"Invalid value for '{key}': {value!r} (expected true/false)")


def merge_config(base: GenerateConfig, overrides: Mapping[str, Any]) -> GenerateConfig:
    """Return ``base`` with ``overrides`` applied; ``None`` values are skipped."""
    known = {f.name for f in fields(GenerateConfig)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = key.replace("-", "_")
        if name not in known:
            raise typer.BadParameter(f"Unknown configuration key '{key}'.")
        if value is None:
            continue
        if name in _PATH_FIELDS:
            value = Path(value)
        elif name in _INT_FIELDS:
            value = _parse_int(key, value)
        elif name == "active_only":
            value = _parse_bool(key, value)
        changes[name] = value
    return replace(base, **changes)


__all__ = ["GenerateConfig", "load_config_file", "merge_config"]
