"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from fit_cli.core.models import ChartDataPoint, HeatMapEntry


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    return path


def series_payload(points: Sequence[ChartDataPoint]) -> List[Dict[str, Any]]:
    return [point.to_dict() for point in points]


def heat_map_payload(heat_map: Mapping[str, HeatMapEntry]) -> Dict[str, Dict[str, float]]:
    return {part: entry.to_dict() for part, entry in heat_map.items()}
