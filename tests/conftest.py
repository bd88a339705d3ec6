from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from fit_cli.core.models import LogEntry, SetEntry, WeightSample


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("FIT_CONFIG_FILE", str(tmp_path / "config" / "config.toml"))
    monkeypatch.setenv("FIT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("FIT_STORE", raising=False)
    return tmp_path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "records.json"


@pytest.fixture()
def squat_tasks() -> List[LogEntry]:
    return [
        LogEntry(
            id=1,
            date=date(2024, 1, 1),
            name="Squat",
            body_part="part_thighs",
            completed=True,
            sets=(SetEntry(1, "100", "5"), SetEntry(2, "110", "3")),
        ),
        LogEntry(
            id=2,
            date=date(2024, 2, 1),
            name="Squat",
            body_part="part_thighs",
            completed=True,
            sets=(SetEntry(1, "120", "1"),),
        ),
    ]


@pytest.fixture()
def sample_weights() -> List[WeightSample]:
    return [
        WeightSample(id=1, date=date(2024, 1, 1), weight=80.0),
        WeightSample(id=2, date=date(2024, 1, 1), weight=82.0),
        WeightSample(id=3, date=date(2024, 1, 15), weight=79.0),
        WeightSample(id=4, date=date(2024, 2, 3), weight=78.0),
    ]


@pytest.fixture()
def sample_records() -> Dict[str, Any]:
    return {
        "templates": [
            {"name": "Bench Press", "category": "STRENGTH", "body_part": "part_chest"},
            {"name": "Plank", "category": "CORE", "body_part": "part_abs"},
        ],
        "tasks": [
            {
                "date": "2024-03-04",
                "name": "Bench Press",
                "sets": [{"set_number": 1, "weight_or_duration": "50", "reps": "10"}],
            },
            {
                "date": "2024-03-05",
                "name": "Plank",
                "sets": [{"set_number": 1, "weight_or_duration": "90s"}],
            },
            {
                "date": "2024-03-05",
                "name": "Running",
                "category": "CARDIO",
                "body_part": "part_cardio",
                "sets": [{"set_number": 1, "weight_or_duration": "30min"}],
            },
        ],
        "weights": [{"date": "2024-03-04", "weight": 81.5}],
    }


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
