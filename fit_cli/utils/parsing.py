"""Parsing helpers for free-text set values and record input files."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from fit_cli.core.models import SetEntry

_NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?")

_RECORD_KINDS = ("tasks", "weights", "templates")


def parse_value(text: Optional[str]) -> float:
    """Return the first decimal number in ``text``, or 0.0 when there is none.

    >>> parse_value("20kg")
    20.0
    """
    if not text:
        return 0.0
    match = _NUMBER_RE.search(str(text))
    return float(match.group(0)) if match else 0.0


def parse_duration(text: Optional[str]) -> float:
    """Parse a duration into minutes using the unit hint in the text.

    An ``h`` anywhere means hours and wins over every other hint, so
    ``"2h30m"`` is 120.0 rather than 150.0. An ``s`` without an ``m`` means
    seconds. Anything else is taken as minutes.
    """
    lower = str(text or "").lower()
    number = parse_value(lower)
    if "h" in lower:
        return number * 60
    if "s" in lower and "m" not in lower:
        return number / 60
    return number


def _split_side(value: str) -> List[str]:
    parts = re.split(r"[x×*]", value.strip(), maxsplit=1)
    return [part.strip() for part in parts]


def parse_set_spec(value: str, set_number: int) -> SetEntry:
    """Parse CLI shorthand like ``100x5``, ``30min`` or ``20x10/22x10``.

    The part after ``/`` is the right side of a unilateral set.
    """
    raw = value.strip()
    if not raw:
        raise ValueError("Empty set value")

    left, _, right = raw.partition("/")
    left_parts = _split_side(left)
    weight = left_parts[0]
    reps = left_parts[1] if len(left_parts) > 1 else ""

    right_weight: Optional[str] = None
    right_reps: Optional[str] = None
    if right:
        right_parts = _split_side(right)
        right_weight = right_parts[0]
        right_reps = right_parts[1] if len(right_parts) > 1 else ""

    return SetEntry(
        set_number=set_number,
        weight_or_duration=weight,
        reps=reps,
        right_weight=right_weight,
        right_reps=right_reps,
    )


def load_records_input(
    file_path: Optional[Path], read_stdin: bool, stdin_text: str = ""
) -> Dict[str, List[Dict[str, Any]]]:
    """Load task/weight/template records from a YAML or JSON document.

    A bare list is treated as a list of tasks.
    """
    raw_data: Any
    if file_path:
        text = file_path.read_text()
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            raw_data = yaml.safe_load(text)
        else:
            raw_data = json.loads(text)
    elif read_stdin:
        text = stdin_text.strip()
        if not text:
            return {kind: [] for kind in _RECORD_KINDS}
        try:
            raw_data = json.loads(text)
        except json.JSONDecodeError:
            raw_data = yaml.safe_load(text)
    else:
        return {kind: [] for kind in _RECORD_KINDS}

    if isinstance(raw_data, list):
        raw_data = {"tasks": raw_data}
    if not isinstance(raw_data, dict):
        return {kind: [] for kind in _RECORD_KINDS}

    loaded: Dict[str, List[Dict[str, Any]]] = {}
    for kind in _RECORD_KINDS:
        items = raw_data.get(kind) or []
        if not isinstance(items, list):
            raise ValueError(f"'{kind}' must be a list, got {type(items).__name__}")
        loaded[kind] = [item for item in items if isinstance(item, dict)]
    return loaded
