from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from fit_cli.core.constants import BODY_PARTS
from fit_cli.core.heatmap import (
    build_heat_map,
    entry_volume,
    get_heat_map,
    hottest_part,
    resolve_body_part,
    set_volume,
)
from fit_cli.core.models import ExerciseTemplate, LogEntry, SetEntry
from fit_cli.core.store import RecordStore


def _entry(body_part: str, sets, name: str = "Lift", **kwargs) -> LogEntry:
    return LogEntry(
        date=kwargs.pop("day", date(2024, 1, 1)),
        name=name,
        body_part=body_part,
        completed=True,
        sets=tuple(sets),
        **kwargs,
    )


def test_single_chest_set() -> None:
    heat_map = build_heat_map([_entry("part_chest", [SetEntry(1, "50", "10")])])
    assert heat_map["part_chest"].volume == 500.0
    assert heat_map["part_chest"].intensity == 1.0
    for part in BODY_PARTS:
        if part != "part_chest":
            assert heat_map[part].volume == 0.0
            assert heat_map[part].intensity == 0.0


def test_empty_input_is_all_zero() -> None:
    heat_map = build_heat_map([])
    assert list(heat_map) == list(BODY_PARTS)
    assert all(entry.volume == 0.0 and entry.intensity == 0.0 for entry in heat_map.values())
    assert hottest_part(heat_map) is None


def test_intensity_is_relative_to_max() -> None:
    heat_map = build_heat_map(
        [
            _entry("part_chest", [SetEntry(1, "50", "10")]),
            _entry("part_back", [SetEntry(1, "50", "20")]),
            _entry("part_arms", [SetEntry(1, "Done", "")]),
        ]
    )
    assert heat_map["part_back"].intensity == 1.0
    assert heat_map["part_chest"].intensity == pytest.approx(0.5)
    assert all(0.0 <= entry.intensity <= 1.0 for entry in heat_map.values())
    assert hottest_part(heat_map) == "part_back"


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("part_chest", "part_chest"),
        ("part_legs", "part_thighs"),
        ("part_neck", "part_other"),
        ("", "part_other"),
        (None, "part_other"),
    ],
)
def test_resolve_body_part(key, expected) -> None:
    assert resolve_body_part(key) == expected


def test_set_volume_by_log_type() -> None:
    assert set_volume(SetEntry(1, "20kg", "10"), "WEIGHT_REPS") == 200.0
    assert set_volume(SetEntry(1, "", "15"), "REPS_ONLY") == 15.0
    assert set_volume(SetEntry(1, "1h", ""), "DURATION") == 60.0
    assert set_volume(SetEntry(1, "2h30m", ""), "DURATION") == 120.0


def test_unilateral_sets_add_right_side() -> None:
    item = SetEntry(1, "20", "10", right_weight="22", right_reps="8")
    assert set_volume(item, "WEIGHT_REPS", unilateral=True) == 200.0 + 176.0
    assert set_volume(item, "WEIGHT_REPS", unilateral=False) == 200.0
    assert set_volume(SetEntry(1, "", "10", right_reps="9"), "REPS_ONLY", unilateral=True) == 19.0


def test_legacy_entry_volume_uses_scalar_fields() -> None:
    legacy = _entry("part_back", [], target="10", actual_weight="40")
    assert entry_volume(legacy) == 400.0


def test_log_types_override_stored_mode() -> None:
    plank = _entry("part_abs", [SetEntry(1, "90s", "")], name="Plank")
    assert build_heat_map([plank])["part_abs"].volume == 0.0
    heat_map = build_heat_map([plank], log_types={"Plank": "DURATION"})
    assert heat_map["part_abs"].volume == pytest.approx(1.5)


def test_configured_body_parts_and_unknown_bucket() -> None:
    heat_map = build_heat_map(
        [_entry("part_calves", [SetEntry(1, "10", "10")])],
        body_parts=["part_chest", "part_calves"],
    )
    assert set(heat_map) == {"part_chest", "part_calves"}
    heat_map = build_heat_map(
        [_entry("part_neck", [SetEntry(1, "10", "10")])],
        body_parts=["part_chest"],
    )
    assert heat_map["part_other"].volume == 100.0
    assert set(heat_map) == {"part_chest", "part_other"}


def test_get_heat_map_uses_store_templates_and_completion(tmp_path: Path) -> None:
    store = RecordStore(tmp_path / "records.json")
    store.save_template(ExerciseTemplate(name="Plank", category="CORE", body_part="part_abs", log_type="DURATION"))
    store.add_task(_entry("part_abs", [SetEntry(1, "2min", "")], name="Plank", log_type="WEIGHT_REPS"))
    store.add_task(
        LogEntry(
            date=date(2024, 1, 2),
            name="Bench",
            body_part="part_chest",
            completed=False,
            sets=(SetEntry(1, "60", "10"),),
        )
    )

    heat_map = get_heat_map(store)
    assert heat_map["part_abs"].volume == 2.0
    assert heat_map["part_abs"].intensity == 1.0
    assert heat_map["part_chest"].volume == 0.0
