import json
from pathlib import Path

import pytest

from fit_cli.utils.parsing import load_records_input, parse_duration, parse_set_spec, parse_value


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("20kg", 20.0),
        ("12.5", 12.5),
        ("3x10", 3.0),
        ("Done", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("-5", 5.0),
    ],
)
def test_parse_value(text, expected) -> None:
    assert parse_value(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1h", 60.0),
        ("1.5 hours", 90.0),
        ("90s", 1.5),
        ("45 sec", 0.75),
        ("45", 45.0),
        ("30min", 30.0),
        ("2h30m", 120.0),
        ("30分钟", 30.0),
        ("", 0.0),
        ("easy", 0.0),
    ],
)
def test_parse_duration(text, expected) -> None:
    assert parse_duration(text) == pytest.approx(expected)


def test_parse_set_spec_weight_and_reps() -> None:
    item = parse_set_spec("100x5", 2)
    assert item.set_number == 2
    assert item.weight_or_duration == "100"
    assert item.reps == "5"
    assert item.right_weight is None


def test_parse_set_spec_single_value_is_duration_or_reps() -> None:
    item = parse_set_spec("30min", 1)
    assert item.weight_or_duration == "30min"
    assert item.reps == ""


def test_parse_set_spec_unilateral() -> None:
    item = parse_set_spec("20x10/22 x 8", 1)
    assert (item.weight_or_duration, item.reps) == ("20", "10")
    assert (item.right_weight, item.right_reps) == ("22", "8")


def test_parse_set_spec_empty_raises() -> None:
    with pytest.raises(ValueError):
        parse_set_spec("  ", 1)


def test_load_records_input_yaml(tmp_path: Path) -> None:
    path = tmp_path / "records.yaml"
    path.write_text(
        """
tasks:
  - date: 2024-01-01
    name: Squat
    sets:
      - {set_number: 1, weight_or_duration: "100", reps: "5"}
weights:
  - {date: 2024-01-01, weight: 80}
""".strip()
        + "\n"
    )
    records = load_records_input(path, read_stdin=False)
    assert records["tasks"][0]["name"] == "Squat"
    assert records["weights"][0]["weight"] == 80
    assert records["templates"] == []


def test_load_records_input_json_list_is_tasks(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"date": "2024-01-01", "name": "Row"}, "junk"]))
    records = load_records_input(path, read_stdin=False)
    assert records["tasks"] == [{"date": "2024-01-01", "name": "Row"}]


def test_load_records_input_stdin_yaml_fallback() -> None:
    records = load_records_input(None, read_stdin=True, stdin_text="weights:\n  - {date: 2024-01-02, weight: 75}\n")
    assert records["weights"][0]["weight"] == 75


def test_load_records_input_empty_stdin() -> None:
    assert load_records_input(None, read_stdin=True, stdin_text="  ") == {
        "tasks": [],
        "weights": [],
        "templates": [],
    }


def test_load_records_input_rejects_non_list_section(tmp_path: Path) -> None:
    path = tmp_path / "records.yaml"
    path.write_text("tasks: 5\n")
    with pytest.raises(ValueError):
        load_records_input(path, read_stdin=False)
