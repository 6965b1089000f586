from pathlib import Path

import pytest
import yaml

FLEET = [
    {"id": "P1", "work_center": "ZANICA", "department": "STAMPA", "active_shifts": ["T1", "T2"]},
    {"id": "C1", "work_center": "ZANICA", "department": "CONFEZIONAMENTO", "active_shifts": ["T1"]},
    {"id": "B1", "work_center": "BUSTO_GAROLFO", "department": "PRINTING", "active_shifts": ["T3"]},
    {
        "id": "OLD",
        "work_center": "BUSTO_GAROLFO",
        "department": "PACKAGING",
        "active_shifts": [],
        "status": "INACTIVE",
    },
]


@pytest.fixture
def fleet_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "machines.yaml"
    path.write_text(yaml.safe_dump({"machines": FLEET}), encoding="utf-8")
    return path
