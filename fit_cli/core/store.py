"""JSON file record store for tasks, weights, templates and the weekly routine."""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from fit_cli.core.constants import BODY_PARTS, DAY_TYPE_LABELS
from fit_cli.core.models import (
    ExerciseTemplate,
    LogEntry,
    SetEntry,
    WeeklyRoutineItem,
    WeightSample,
)
from fit_cli.utils.date_ranges import iso_weekday

STORE_VERSION = 1


class StoreError(RuntimeError):
    """Raised when the record store cannot be read, written or queried."""


def _next_id(items: Iterable[Any]) -> int:
    return max((int(item.id) for item in items), default=0) + 1


class RecordStore:
    """Single-user record store persisted as one JSON document.

    Every write is flushed to disk immediately.
    """

    def __init__(self, path: Path, body_parts: Sequence[str] = BODY_PARTS) -> None:
        self.path = path
        self._body_parts = list(body_parts)
        self._tasks: List[LogEntry] = []
        self._weights: List[WeightSample] = []
        self._templates: List[ExerciseTemplate] = []
        self._routine: List[WeeklyRoutineItem] = []
        self._schedule: Dict[int, str] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            raw = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Failed to read record store {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StoreError(f"Record store {self.path} must contain a JSON object")

        try:
            self._tasks = [LogEntry.from_dict(item) for item in raw.get("tasks", [])]
            self._weights = [WeightSample.from_dict(item) for item in raw.get("weights", [])]
            self._templates = [ExerciseTemplate.from_dict(item) for item in raw.get("templates", [])]
            self._routine = [WeeklyRoutineItem.from_dict(item) for item in raw.get("routine", [])]
            self._schedule = {int(day): str(value) for day, value in raw.get("schedule", {}).items()}
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Corrupt record in {self.path}: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": STORE_VERSION,
            "tasks": [item.to_dict() for item in self._tasks],
            "weights": [item.to_dict() for item in self._weights],
            "templates": [item.to_dict() for item in self._templates],
            "routine": [item.to_dict() for item in self._routine],
            "schedule": {str(day): value for day, value in sorted(self._schedule.items())},
        }

    def save(self) -> Path:
        """Write the store atomically and return its path."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as handle:
                handle.write(json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n")
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Failed to write record store {self.path}: {exc}") from exc
        return self.path

    # Reads

    def tasks(
        self,
        predicate: Optional[Callable[[LogEntry], bool]] = None,
        completed: Optional[bool] = None,
    ) -> List[LogEntry]:
        """Tasks matching the filters, newest first."""
        rows = [
            task
            for task in self._tasks
            if (completed is None or task.completed == completed)
            and (predicate is None or predicate(task))
        ]
        rows.sort(key=lambda item: (item.date, item.id), reverse=True)
        return rows

    def tasks_for_date(self, day: date) -> List[LogEntry]:
        return sorted((task for task in self._tasks if task.date == day), key=lambda item: item.id)

    def task_by_id(self, task_id: int) -> LogEntry:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise StoreError(f"Unknown task id: {task_id}")

    def weights(self) -> List[WeightSample]:
        """All weight samples, newest first."""
        return sorted(self._weights, key=lambda item: (item.date, item.id), reverse=True)

    def latest_weight(self) -> Optional[WeightSample]:
        rows = self.weights()
        return rows[0] if rows else None

    def templates(self, include_deleted: bool = False) -> List[ExerciseTemplate]:
        rows = [item for item in self._templates if include_deleted or not item.deleted]
        return sorted(rows, key=lambda item: (item.category, item.name))

    def template_by_id(self, template_id: int) -> ExerciseTemplate:
        for template in self._templates:
            if template.id == template_id:
                return template
        raise StoreError(f"Unknown exercise id: {template_id}")

    def template_by_name(self, name: str) -> Optional[ExerciseTemplate]:
        for template in self._templates:
            if template.name == name and not template.deleted:
                return template
        return None

    def body_parts(self) -> List[str]:
        return list(self._body_parts)

    def log_types(self) -> Dict[str, str]:
        """Logging mode per exercise name; live templates override deleted ones."""
        lookup: Dict[str, str] = {}
        for template in sorted(self._templates, key=lambda item: not item.deleted):
            lookup[template.name] = template.log_type
        return lookup

    def routine(self) -> List[WeeklyRoutineItem]:
        return sorted(self._routine, key=lambda item: (item.day_of_week, item.id))

    def routine_for_day(self, day_of_week: int) -> List[WeeklyRoutineItem]:
        return [item for item in self.routine() if item.day_of_week == day_of_week]

    def schedule(self) -> Dict[int, str]:
        return dict(self._schedule)

    def day_type_for(self, day: date) -> str:
        return self._schedule.get(iso_weekday(day), "CORE")

    # Writes

    def add_task(self, task: LogEntry) -> LogEntry:
        stored = replace(task, id=_next_id(self._tasks))
        self._tasks.append(stored)
        self.save()
        return stored

    def update_task(self, task: LogEntry) -> LogEntry:
        for index, existing in enumerate(self._tasks):
            if existing.id == task.id:
                self._tasks[index] = task
                self.save()
                return task
        raise StoreError(f"Unknown task id: {task.id}")

    def delete_task(self, task_id: int) -> None:
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            raise StoreError(f"Unknown task id: {task_id}")
        self._tasks = remaining
        self.save()

    def add_weight(self, day: date, weight: float) -> WeightSample:
        sample = WeightSample(id=_next_id(self._weights), date=day, weight=float(weight))
        self._weights.append(sample)
        self.save()
        return sample

    def save_template(self, template: ExerciseTemplate) -> ExerciseTemplate:
        """Insert a template when its id is 0, otherwise update it."""
        if template.id == 0:
            stored = replace(template, id=_next_id(self._templates))
            self._templates.append(stored)
            self.save()
            return stored

        for index, existing in enumerate(self._templates):
            if existing.id == template.id:
                self._templates[index] = template
                self.save()
                return template
        raise StoreError(f"Unknown exercise id: {template.id}")

    def soft_delete_template(self, template_id: int) -> ExerciseTemplate:
        template = self.template_by_id(template_id)
        return self.save_template(replace(template, deleted=True))

    def add_routine_item(self, day_of_week: int, template: ExerciseTemplate) -> WeeklyRoutineItem:
        if day_of_week not in range(1, 8):
            raise StoreError(f"Day of week must be 1-7, got {day_of_week}")
        item = WeeklyRoutineItem(
            id=_next_id(self._routine),
            day_of_week=day_of_week,
            template_id=template.id,
            name=template.name,
            target=template.default_target,
            category=template.category,
            body_part=template.body_part,
            equipment=template.equipment,
        )
        self._routine.append(item)
        self.save()
        return item

    def remove_routine_item(self, item_id: int) -> None:
        remaining = [item for item in self._routine if item.id != item_id]
        if len(remaining) == len(self._routine):
            raise StoreError(f"Unknown routine item id: {item_id}")
        self._routine = remaining
        self.save()

    def clear_routine(self) -> None:
        self._routine = []
        self.save()

    def set_day_type(self, day_of_week: int, day_type: str) -> None:
        key = day_type.upper()
        if key not in DAY_TYPE_LABELS:
            raise StoreError(f"Unknown day type: {day_type}")
        if day_of_week not in range(1, 8):
            raise StoreError(f"Day of week must be 1-7, got {day_of_week}")
        self._schedule[day_of_week] = key
        self.save()

    def apply_routine(self, day: date) -> List[LogEntry]:
        """Create the weekday's routine as open tasks on ``day``."""
        created: List[LogEntry] = []
        for item in self.routine_for_day(iso_weekday(day)):
            template = next((t for t in self._templates if t.id == item.template_id), None)
            task = LogEntry(
                id=_next_id(self._tasks),
                date=day,
                name=item.name,
                category=item.category,
                template_id=item.template_id,
                body_part=item.body_part,
                equipment=item.equipment,
                log_type=template.log_type if template else "WEIGHT_REPS",
                unilateral=template.unilateral if template else False,
                target=item.target,
                sets=(SetEntry(1, "", ""),),
            )
            self._tasks.append(task)
            created.append(task)
        if created:
            self.save()
        return created

    def import_records(self, records: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
        """Append raw task/weight/template dicts, assigning fresh ids."""
        counts = {"tasks": 0, "weights": 0, "templates": 0}
        try:
            for raw in records.get("templates", []):
                template = ExerciseTemplate.from_dict(raw)
                self._templates.append(replace(template, id=_next_id(self._templates)))
                counts["templates"] += 1
            for raw in records.get("tasks", []):
                payload = dict(raw)
                payload.setdefault("completed", True)
                task = LogEntry.from_dict(payload)
                template = self.template_by_name(task.name)
                if template is not None and "log_type" not in raw:
                    task = replace(
                        task,
                        template_id=template.id,
                        category=str(raw.get("category") or template.category).upper(),
                        log_type=template.log_type,
                        body_part=str(raw.get("body_part") or template.body_part),
                    )
                self._tasks.append(replace(task, id=_next_id(self._tasks)))
                counts["tasks"] += 1
            for raw in records.get("weights", []):
                sample = WeightSample.from_dict(raw)
                self._weights.append(replace(sample, id=_next_id(self._weights)))
                counts["weights"] += 1
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Invalid record in import: {exc}") from exc
        self.save()
        return counts
