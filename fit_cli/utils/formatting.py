"""Formatting helpers used by console output."""

from __future__ import annotations

from typing import Optional, Sequence

from fit_cli.core.constants import BODY_PART_LABELS, LOG_TYPE_LABELS
from fit_cli.core.models import LogEntry, SetEntry

# Rich styles from cold to hot, indexed by intensity.
HEAT_STYLES = (
    "white on grey23",
    "black on pale_turquoise1",
    "black on light_goldenrod1",
    "black on orange1",
    "white on red3",
)


def format_number(value: Optional[float], digits: int = 1) -> str:
    """Format a float, dropping the fraction when it is whole."""
    if value is None:
        return "-"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.{digits}f}"


def format_minutes(minutes: Optional[float]) -> str:
    """Format minutes as H:MM or M min."""
    if not minutes:
        return "0 min"
    total = int(round(float(minutes)))
    hours, mins = divmod(total, 60)
    if hours:
        return f"{hours}h{mins:02d}m"
    return f"{mins} min"


def body_part_label(key: str) -> str:
    return BODY_PART_LABELS.get(key, key)


def log_type_label(key: str) -> str:
    return LOG_TYPE_LABELS.get(key, key)


def heat_style(intensity: float) -> str:
    """Rich style for a heat-map tile."""
    if intensity <= 0:
        return HEAT_STYLES[0]
    index = 1 + min(int(intensity * (len(HEAT_STYLES) - 1)), len(HEAT_STYLES) - 2)
    return HEAT_STYLES[index]


def intensity_bar(intensity: float, width: int = 10) -> str:
    filled = int(round(max(0.0, min(intensity, 1.0)) * width))
    return "#" * filled + "." * (width - filled)


def format_set(item: SetEntry, unilateral: bool = False) -> str:
    """Render one set as ``weight x reps`` (``L | R`` for unilateral sets)."""
    left = item.weight_or_duration or "-"
    if item.reps:
        left = f"{left} x {item.reps}"
    if not unilateral:
        return left
    right = item.right_weight or "-"
    if item.right_reps:
        right = f"{right} x {item.right_reps}"
    return f"L {left} | R {right}"


def format_sets(task: LogEntry, separator: str = "  |  ") -> str:
    """Render all sets of a task; legacy tasks show ``target @ actual``."""
    if not task.sets:
        if task.actual_weight:
            return f"{task.target} @ {task.actual_weight}"
        return task.target
    rendered: Sequence[str] = [format_set(item, task.unilateral) for item in task.sets]
    return separator.join(rendered)
