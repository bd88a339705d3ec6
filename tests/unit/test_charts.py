from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List

import pytest

from fit_cli.core.charts import (
    bmi_series,
    bmr_series,
    bucket_days,
    calculate_bmi,
    calculate_bmr,
    cardio_volume_series,
    chart_series,
    exercise_names_by_category,
    get_chart_series,
    series_summary,
    task_duration_minutes,
    weight_series,
)
from fit_cli.core.models import ChartMode, Granularity, LogEntry, SetEntry, UserProfile, WeightSample
from fit_cli.core.store import RecordStore


def _task(day: str, name: str = "Squat", sets=(), **kwargs) -> LogEntry:
    return LogEntry(
        date=date.fromisoformat(day),
        name=name,
        completed=kwargs.pop("completed", True),
        sets=tuple(sets),
        **kwargs,
    )


def _values(points) -> List[tuple]:
    return [(point.date.isoformat(), point.value) for point in points]


def test_squat_daily_weight_is_best_set(squat_tasks: List[LogEntry]) -> None:
    points = chart_series(squat_tasks, ChartMode.WEIGHT, Granularity.DAILY)
    assert _values(points) == [("2024-01-01", 110.0), ("2024-02-01", 120.0)]
    assert [point.label for point in points] == ["01/01", "02/01"]


def test_squat_monthly_keys_on_first_of_month(squat_tasks: List[LogEntry]) -> None:
    points = chart_series(squat_tasks, ChartMode.WEIGHT, Granularity.MONTHLY)
    assert _values(points) == [("2024-01-01", 110.0), ("2024-02-01", 120.0)]


def test_aggregation_is_idempotent(squat_tasks: List[LogEntry]) -> None:
    first = chart_series(squat_tasks, ChartMode.REPS, Granularity.DAILY)
    second = chart_series(squat_tasks, ChartMode.REPS, Granularity.DAILY)
    assert first == second


def test_empty_input_yields_empty_series() -> None:
    for mode in ChartMode:
        for granularity in Granularity:
            assert chart_series([], mode, granularity) == []


def test_daily_points_match_distinct_dates() -> None:
    tasks = [
        _task("2024-03-01", sets=[SetEntry(1, "40", "10")]),
        _task("2024-03-01", sets=[SetEntry(1, "45", "8")]),
        _task("2024-03-09", sets=[SetEntry(1, "50", "6")]),
    ]
    points = chart_series(tasks, ChartMode.WEIGHT, Granularity.DAILY)
    assert len(points) == 2
    assert points[0].value == 45.0


def test_monthly_sum_equals_sum_of_daily_values() -> None:
    tasks = [
        _task("2024-03-01", sets=[SetEntry(1, "40", "10"), SetEntry(2, "40", "8")]),
        _task("2024-03-09", sets=[SetEntry(1, "50", "6")]),
        _task("2024-04-02", sets=[SetEntry(1, "50", "5")]),
    ]
    daily = chart_series(tasks, ChartMode.REPS, Granularity.DAILY)
    monthly = chart_series(tasks, ChartMode.REPS, Granularity.MONTHLY)
    assert _values(monthly) == [("2024-03-01", 24.0), ("2024-04-01", 5.0)]
    assert sum(point.value for point in daily) == sum(point.value for point in monthly)


def test_days_with_unparseable_values_emit_zero_points() -> None:
    tasks = [_task("2024-03-01", sets=[SetEntry(1, "Done", "")])]
    assert _values(chart_series(tasks, ChartMode.WEIGHT)) == [("2024-03-01", 0.0)]


def test_right_side_falls_back_to_left_weight() -> None:
    tasks = [
        _task(
            "2024-03-01",
            unilateral=True,
            sets=[SetEntry(1, "20", "10", right_weight="22", right_reps="10"), SetEntry(2, "24", "8")],
        )
    ]
    assert chart_series(tasks, ChartMode.WEIGHT_RIGHT)[0].value == 24.0
    assert chart_series(tasks, ChartMode.WEIGHT)[0].value == 24.0


def test_duration_sums_sets_and_legacy_target() -> None:
    with_sets = _task("2024-03-01", name="Run", sets=[SetEntry(1, "30min"), SetEntry(2, "1h")])
    legacy = _task("2024-03-01", name="Run", target="90s")
    assert task_duration_minutes(with_sets) == 90.0
    assert task_duration_minutes(legacy) == pytest.approx(1.5)
    points = chart_series([with_sets, legacy], ChartMode.DURATION)
    assert points[0].value == pytest.approx(91.5)


def test_legacy_entry_uses_actual_weight_then_target() -> None:
    tasks = [
        _task("2024-03-01", target="12", actual_weight="60kg"),
        _task("2024-03-02", target="15"),
    ]
    assert _values(chart_series(tasks, ChartMode.WEIGHT)) == [("2024-03-01", 60.0), ("2024-03-02", 15.0)]
    assert _values(chart_series(tasks, ChartMode.REPS)) == [("2024-03-01", 12.0), ("2024-03-02", 15.0)]


def test_cardio_volume_series_ignores_other_categories() -> None:
    tasks = [
        _task("2024-03-01", name="Run", category="CARDIO", sets=[SetEntry(1, "30")]),
        _task("2024-03-01", name="Squat", sets=[SetEntry(1, "100", "5")]),
        _task("2024-03-20", name="Bike", category="CARDIO", sets=[SetEntry(1, "1h")]),
    ]
    points = cardio_volume_series(tasks, Granularity.MONTHLY)
    assert _values(points) == [("2024-03-01", 90.0)]


def test_bucket_days_average() -> None:
    values = {date(2024, 1, 1): 80.0, date(2024, 1, 20): 82.0}
    points = bucket_days(values, Granularity.MONTHLY, combine="average")
    assert _values(points) == [("2024-01-01", 81.0)]


def test_weight_series_averages_per_day_then_month(sample_weights: List[WeightSample]) -> None:
    daily = weight_series(sample_weights, Granularity.DAILY)
    assert _values(daily) == [("2024-01-01", 81.0), ("2024-01-15", 79.0), ("2024-02-03", 78.0)]
    monthly = weight_series(sample_weights, Granularity.MONTHLY)
    assert _values(monthly) == [("2024-01-01", 80.0), ("2024-02-01", 78.0)]


def test_calculate_bmi_and_bmr() -> None:
    assert calculate_bmi(80.0, 200.0) == pytest.approx(20.0)
    assert calculate_bmi(80.0, 0.0) == 0.0
    assert calculate_bmr(80.0, 180.0, 30, 0) == pytest.approx(1780.0)
    assert calculate_bmr(80.0, 180.0, 30, 1) == pytest.approx(1614.0)
    assert calculate_bmr(80.0, 180.0, 0, 0) == 0.0


def test_bmi_and_bmr_series_use_profile(sample_weights: List[WeightSample]) -> None:
    profile = UserProfile(height_cm=200.0, age=30, gender=0)
    bmi = bmi_series(sample_weights, profile, Granularity.DAILY)
    assert bmi[0].value == pytest.approx(20.25)
    bmr = bmr_series(sample_weights[-1:], profile, Granularity.DAILY)
    assert bmr[0].value == pytest.approx(10 * 78 + 6.25 * 200 - 5 * 30 + 5)


def test_get_chart_series_only_counts_completed(tmp_path: Path) -> None:
    store = RecordStore(tmp_path / "records.json")
    store.add_task(_task("2024-03-01", sets=[SetEntry(1, "100", "5")]))
    store.add_task(_task("2024-03-02", sets=[SetEntry(1, "150", "5")], completed=False))
    store.add_task(_task("2024-03-03", name="Bench", sets=[SetEntry(1, "70", "5")]))

    points = get_chart_series(store, lambda task: task.name == "Squat", ChartMode.WEIGHT)
    assert _values(points) == [("2024-03-01", 100.0)]


def test_exercise_names_and_summary(squat_tasks: List[LogEntry]) -> None:
    tasks = squat_tasks + [_task("2024-01-03", name="Run", category="CARDIO")]
    assert exercise_names_by_category(tasks, "strength") == ["Squat"]
    summary = series_summary(chart_series(squat_tasks, ChartMode.WEIGHT))
    assert summary == {"points": 2, "min": 110.0, "max": 120.0, "latest": 120.0}
    assert series_summary([])["latest"] is None


def test_three_squat_entries_daily_and_monthly() -> None:
    tasks = [
        _task("2024-01-01", sets=[SetEntry(1, "100", "5")]),
        _task("2024-01-01", sets=[SetEntry(1, "110", "5")]),
        _task("2024-02-01", sets=[SetEntry(1, "120", "5")]),
    ]
    expected = [("2024-01-01", 110.0), ("2024-02-01", 120.0)]
    assert _values(chart_series(tasks, ChartMode.WEIGHT, Granularity.DAILY)) == expected
    assert _values(chart_series(tasks, ChartMode.WEIGHT, Granularity.MONTHLY)) == expected


def test_monthly_weight_sums_best_set_of_each_day() -> None:
    tasks = [
        _task("2024-05-02", sets=[SetEntry(1, "90", "5"), SetEntry(2, "100", "3")]),
        _task("2024-05-20", sets=[SetEntry(1, "110", "1")]),
    ]
    assert _values(chart_series(tasks, ChartMode.WEIGHT, Granularity.MONTHLY)) == [("2024-05-01", 210.0)]


def test_monthly_right_weight_sums_best_right_set_of_each_day() -> None:
    tasks = [
        _task("2024-05-02", unilateral=True, sets=[SetEntry(1, "20", "10", right_weight="22", right_reps="10")]),
        _task("2024-05-09", unilateral=True, sets=[SetEntry(1, "24", "8", right_weight="26", right_reps="8")]),
    ]
    assert _values(chart_series(tasks, ChartMode.WEIGHT_RIGHT, Granularity.MONTHLY)) == [("2024-05-01", 48.0)]
