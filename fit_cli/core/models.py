"""Data models shared by the store, the aggregators and the commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from fit_cli.core.constants import DEFAULT_LOG_TYPE_BY_CATEGORY
from fit_cli.utils.date_ranges import parse_date


class Granularity(str, Enum):
    """Time bucketing resolution for chart series."""

    DAILY = "daily"
    MONTHLY = "monthly"


class ChartMode(str, Enum):
    """Scalar extracted from each exercise record for a chart."""

    WEIGHT = "weight"
    WEIGHT_RIGHT = "right"
    DURATION = "duration"
    REPS = "reps"


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def default_log_type(category: str) -> str:
    return DEFAULT_LOG_TYPE_BY_CATEGORY.get(category.upper(), "WEIGHT_REPS")


@dataclass(frozen=True)
class SetEntry:
    """One performed set. Values are free text as typed by the user."""

    set_number: int
    weight_or_duration: str = ""
    reps: str = ""
    right_weight: Optional[str] = None
    right_reps: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SetEntry":
        if not isinstance(data, dict):
            raise TypeError(f"set must be an object, got {data!r}")
        return cls(
            set_number=int(data.get("set_number") or 1),
            weight_or_duration=str(data.get("weight_or_duration") or ""),
            reps=str(data.get("reps") or ""),
            right_weight=_optional_text(data.get("right_weight")),
            right_reps=_optional_text(data.get("right_reps")),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "set_number": self.set_number,
            "weight_or_duration": self.weight_or_duration,
            "reps": self.reps,
        }
        if self.right_weight is not None:
            payload["right_weight"] = self.right_weight
        if self.right_reps is not None:
            payload["right_reps"] = self.right_reps
        return payload


@dataclass(frozen=True)
class LogEntry:
    """A workout task: one exercise performed on one date."""

    date: date
    name: str
    category: str = "STRENGTH"
    id: int = 0
    template_id: int = 0
    body_part: str = "part_other"
    equipment: str = "equip_other"
    log_type: str = "WEIGHT_REPS"
    unilateral: bool = False
    completed: bool = False
    target: str = ""
    actual_weight: str = ""
    sets: Tuple[SetEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        category = str(data.get("category") or "STRENGTH").upper()
        return cls(
            id=int(data.get("id") or 0),
            date=parse_date(str(data["date"])[:10]),
            name=str(data["name"]),
            category=category,
            template_id=int(data.get("template_id") or 0),
            body_part=str(data.get("body_part") or "part_other"),
            equipment=str(data.get("equipment") or "equip_other"),
            log_type=str(data.get("log_type") or default_log_type(category)).upper(),
            unilateral=bool(data.get("unilateral", False)),
            completed=bool(data.get("completed", False)),
            target=str(data.get("target") or ""),
            actual_weight=str(data.get("actual_weight") or ""),
            sets=tuple(SetEntry.from_dict(item) for item in data.get("sets") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "name": self.name,
            "category": self.category,
            "template_id": self.template_id,
            "body_part": self.body_part,
            "equipment": self.equipment,
            "log_type": self.log_type,
            "unilateral": self.unilateral,
            "completed": self.completed,
            "target": self.target,
            "actual_weight": self.actual_weight,
            "sets": [item.to_dict() for item in self.sets],
        }

    def effective_sets(self) -> Tuple[SetEntry, ...]:
        """Sets to aggregate; legacy entries yield one set from the scalar fields."""
        if self.sets:
            return self.sets
        return (SetEntry(1, self.actual_weight or self.target, self.target),)


@dataclass(frozen=True)
class WeightSample:
    """Body weight in kilograms on a date."""

    date: date
    weight: float
    id: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeightSample":
        return cls(
            id=int(data.get("id") or 0),
            date=parse_date(str(data["date"])[:10]),
            weight=float(data["weight"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "date": self.date.isoformat(), "weight": self.weight}


@dataclass(frozen=True)
class ExerciseTemplate:
    """Library entry used to create tasks and to classify logged sets."""

    name: str
    category: str = "STRENGTH"
    id: int = 0
    default_target: str = ""
    body_part: str = "part_other"
    equipment: str = "equip_other"
    log_type: str = "WEIGHT_REPS"
    unilateral: bool = False
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExerciseTemplate":
        category = str(data.get("category") or "STRENGTH").upper()
        return cls(
            id=int(data.get("id") or 0),
            name=str(data["name"]),
            category=category,
            default_target=str(data.get("default_target") or ""),
            body_part=str(data.get("body_part") or "part_other"),
            equipment=str(data.get("equipment") or "equip_other"),
            log_type=str(data.get("log_type") or default_log_type(category)).upper(),
            unilateral=bool(data.get("unilateral", False)),
            deleted=bool(data.get("deleted", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "default_target": self.default_target,
            "body_part": self.body_part,
            "equipment": self.equipment,
            "log_type": self.log_type,
            "unilateral": self.unilateral,
            "deleted": self.deleted,
        }


@dataclass(frozen=True)
class WeeklyRoutineItem:
    """Exercise assigned to a weekday (1=Monday .. 7=Sunday)."""

    day_of_week: int
    template_id: int
    name: str
    id: int = 0
    target: str = ""
    category: str = "STRENGTH"
    body_part: str = "part_other"
    equipment: str = "equip_other"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeeklyRoutineItem":
        return cls(
            id=int(data.get("id") or 0),
            day_of_week=int(data["day_of_week"]),
            template_id=int(data.get("template_id") or 0),
            name=str(data["name"]),
            target=str(data.get("target") or ""),
            category=str(data.get("category") or "STRENGTH").upper(),
            body_part=str(data.get("body_part") or "part_other"),
            equipment=str(data.get("equipment") or "equip_other"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "day_of_week": self.day_of_week,
            "template_id": self.template_id,
            "name": self.name,
            "target": self.target,
            "category": self.category,
            "body_part": self.body_part,
            "equipment": self.equipment,
        }


@dataclass(frozen=True)
class UserProfile:
    """Body metrics used for BMI/BMR charts. gender: 0=male, 1=female."""

    height_cm: float = 0.0
    age: int = 0
    gender: int = 0

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "UserProfile":
        profile = config.get("profile", {})
        return cls(
            height_cm=float(profile.get("height_cm") or 0.0),
            age=int(profile.get("age") or 0),
            gender=int(profile.get("gender") or 0),
        )


@dataclass(frozen=True)
class ChartDataPoint:
    """One bucket of a chart series."""

    date: date
    value: float
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value, "label": self.label}


@dataclass(frozen=True)
class HeatMapEntry:
    """Cumulative training volume of one body part."""

    volume: float = 0.0
    intensity: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"volume": self.volume, "intensity": self.intensity}
