"""Per-body-part training volume heat map."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence

from fit_cli.core.constants import BODY_PART_ALIASES, BODY_PARTS, OTHER_BODY_PART
from fit_cli.core.models import HeatMapEntry, LogEntry, SetEntry
from fit_cli.core.store import RecordStore
from fit_cli.utils.parsing import parse_duration, parse_value


def resolve_body_part(key: Optional[str], body_parts: Sequence[str] = BODY_PARTS) -> str:
    """Map a stored body-part key onto the known enumeration.

    Unknown and empty keys fall into the catch-all ``part_other`` bucket.
    """
    raw = (key or "").strip()
    raw = BODY_PART_ALIASES.get(raw, raw)
    if raw in body_parts:
        return raw
    return OTHER_BODY_PART


def set_volume(item: SetEntry, log_type: str, unilateral: bool = False) -> float:
    """Volume contributed by one set under the given logging mode."""
    if log_type == "DURATION":
        return parse_duration(item.weight_or_duration)
    if log_type == "REPS_ONLY":
        volume = parse_value(item.reps)
        if unilateral and item.right_reps:
            volume += parse_value(item.right_reps)
        return volume

    volume = parse_value(item.weight_or_duration) * parse_value(item.reps)
    if unilateral and item.right_weight is not None:
        volume += parse_value(item.right_weight) * parse_value(item.right_reps)
    return volume


def entry_volume(entry: LogEntry, log_type: Optional[str] = None) -> float:
    mode = (log_type or entry.log_type).upper()
    return sum(set_volume(item, mode, entry.unilateral) for item in entry.effective_sets())


def build_heat_map(
    entries: Iterable[LogEntry],
    body_parts: Sequence[str] = BODY_PARTS,
    log_types: Optional[Mapping[str, str]] = None,
) -> Dict[str, HeatMapEntry]:
    """Fold logged sets into cumulative volume and relative intensity per body part.

    ``log_types`` maps exercise names to their template's logging mode and
    takes precedence over the mode stored on each entry. Every known part
    is present in the result, untrained parts at zero. Unknown parts always
    fold into ``part_other``, which is added even when ``body_parts`` omits it.
    """
    lookup = log_types or {}
    volumes: Dict[str, float] = {part: 0.0 for part in body_parts}

    for entry in entries:
        part = resolve_body_part(entry.body_part, body_parts)
        volume = entry_volume(entry, lookup.get(entry.name))
        volumes[part] = volumes.get(part, 0.0) + volume

    max_volume = max(volumes.values(), default=0.0)
    return {
        part: HeatMapEntry(
            volume=volume,
            intensity=(volume / max_volume) if max_volume > 0 else 0.0,
        )
        for part, volume in volumes.items()
    }


def get_heat_map(store: RecordStore, body_parts: Optional[Sequence[str]] = None) -> Dict[str, HeatMapEntry]:
    """Heat map over the full completed history held by ``store``."""
    return build_heat_map(
        store.tasks(completed=True),
        body_parts=body_parts or store.body_parts(),
        log_types=store.log_types(),
    )


def hottest_part(heat_map: Mapping[str, HeatMapEntry]) -> Optional[str]:
    """Body part with the largest volume, or None when nothing was trained."""
    trained = [(entry.volume, part) for part, entry in heat_map.items() if entry.volume > 0]
    if not trained:
        return None
    return max(trained)[1]
