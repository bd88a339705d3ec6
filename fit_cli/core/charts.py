"""Chart series aggregation over logged tasks and weight samples."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from fit_cli.core.constants import CHART_LABEL_FORMAT
from fit_cli.core.models import (
    ChartDataPoint,
    ChartMode,
    Granularity,
    LogEntry,
    SetEntry,
    UserProfile,
    WeightSample,
)
from fit_cli.core.store import RecordStore
from fit_cli.utils.date_ranges import month_start
from fit_cli.utils.parsing import parse_duration, parse_value

TaskPredicate = Callable[[LogEntry], bool]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _right_weight(item: SetEntry) -> float:
    if item.right_weight and item.right_weight.strip():
        return parse_value(item.right_weight)
    return parse_value(item.weight_or_duration)


def task_duration_minutes(entry: LogEntry) -> float:
    """Total minutes of a task; legacy entries without sets use ``target``."""
    if entry.sets:
        return sum(parse_duration(item.weight_or_duration) for item in entry.sets)
    return parse_duration(entry.target)


def reduce_day(entries: Sequence[LogEntry], mode: ChartMode) -> float:
    """Reduce one day's tasks to a single value for ``mode``."""
    if mode == ChartMode.DURATION:
        return sum(task_duration_minutes(entry) for entry in entries)

    sets = [item for entry in entries for item in entry.effective_sets()]
    if mode == ChartMode.WEIGHT:
        return max((parse_value(item.weight_or_duration) for item in sets), default=0.0)
    if mode == ChartMode.WEIGHT_RIGHT:
        return max((_right_weight(item) for item in sets), default=0.0)
    if mode == ChartMode.REPS:
        return sum(parse_value(item.reps) for item in sets)
    return 0.0


def bucket_days(
    day_values: Dict[date, float],
    granularity: Granularity,
    combine: str = "sum",
) -> List[ChartDataPoint]:
    """Re-key day-level values into buckets and emit sorted chart points.

    ``combine`` decides how several days in one month collapse: ``sum`` or
    ``average``. Daily buckets hold exactly one day so it does not apply.
    """
    buckets: Dict[date, List[float]] = defaultdict(list)
    for day, value in day_values.items():
        key = month_start(day) if granularity == Granularity.MONTHLY else day
        buckets[key].append(value)

    points: List[ChartDataPoint] = []
    for key in sorted(buckets.keys()):
        values = buckets[key]
        total = _mean(values) if combine == "average" else sum(values)
        points.append(ChartDataPoint(date=key, value=total, label=key.strftime(CHART_LABEL_FORMAT)))
    return points


def chart_series(
    entries: Iterable[LogEntry],
    mode: ChartMode,
    granularity: Granularity = Granularity.DAILY,
) -> List[ChartDataPoint]:
    """Aggregate already-filtered tasks into a time series for ``mode``."""
    by_day: Dict[date, List[LogEntry]] = defaultdict(list)
    for entry in entries:
        by_day[entry.date].append(entry)

    day_values = {day: reduce_day(day_entries, mode) for day, day_entries in by_day.items()}
    return bucket_days(day_values, granularity, combine="sum")


def cardio_volume_series(
    entries: Iterable[LogEntry],
    granularity: Granularity = Granularity.DAILY,
) -> List[ChartDataPoint]:
    """Total cardio minutes per bucket."""
    cardio = [entry for entry in entries if entry.category == "CARDIO"]
    return chart_series(cardio, ChartMode.DURATION, granularity)


def _sample_series(
    samples: Iterable[WeightSample],
    metric: Callable[[WeightSample], float],
    granularity: Granularity,
) -> List[ChartDataPoint]:
    by_day: Dict[date, List[float]] = defaultdict(list)
    for sample in samples:
        by_day[sample.date].append(metric(sample))
    day_values = {day: _mean(values) for day, values in by_day.items()}
    return bucket_days(day_values, granularity, combine="average")


def weight_series(
    samples: Iterable[WeightSample],
    granularity: Granularity = Granularity.DAILY,
) -> List[ChartDataPoint]:
    """Average body weight per bucket."""
    return _sample_series(samples, lambda sample: sample.weight, granularity)


def calculate_bmi(weight: float, height_cm: float) -> float:
    """Body mass index, kg / m^2. Zero when height is unknown."""
    if height_cm <= 0:
        return 0.0
    height_m = height_cm / 100.0
    return weight / (height_m * height_m)


def calculate_bmr(weight: float, height_cm: float, age: int, gender: int) -> float:
    """Mifflin-St Jeor basal metabolic rate in kcal/day. gender: 0=male, 1=female."""
    if height_cm <= 0 or age <= 0:
        return 0.0
    offset = 5 if gender == 0 else -161
    return 10 * weight + 6.25 * height_cm - 5 * age + offset


def bmi_series(
    samples: Iterable[WeightSample],
    profile: UserProfile,
    granularity: Granularity = Granularity.DAILY,
) -> List[ChartDataPoint]:
    # Historic samples do not record height, the current profile is used.
    return _sample_series(
        samples,
        lambda sample: calculate_bmi(sample.weight, profile.height_cm),
        granularity,
    )


def bmr_series(
    samples: Iterable[WeightSample],
    profile: UserProfile,
    granularity: Granularity = Granularity.DAILY,
) -> List[ChartDataPoint]:
    return _sample_series(
        samples,
        lambda sample: calculate_bmr(sample.weight, profile.height_cm, profile.age, profile.gender),
        granularity,
    )


def get_chart_series(
    store: RecordStore,
    predicate: Optional[TaskPredicate],
    mode: ChartMode,
    granularity: Granularity = Granularity.DAILY,
) -> List[ChartDataPoint]:
    """Query completed tasks matching ``predicate`` and aggregate them."""
    return chart_series(store.tasks(predicate=predicate, completed=True), mode, granularity)


def exercise_names_by_category(entries: Iterable[LogEntry], category: str) -> List[str]:
    """Sorted distinct exercise names logged under ``category``."""
    return sorted({entry.name for entry in entries if entry.category == category.upper()})


def series_summary(points: Sequence[ChartDataPoint]) -> Dict[str, Any]:
    """Small summary used by console output."""
    if not points:
        return {"points": 0, "min": None, "max": None, "latest": None}
    values = [point.value for point in points]
    return {
        "points": len(points),
        "min": min(values),
        "max": max(values),
        "latest": points[-1].value,
    }
