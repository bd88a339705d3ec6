"""Logging commands: tasks, body weight, bulk import and history."""

from __future__ import annotations

import sys
from contextlib import nullcontext
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.table import Table

from fit_cli.commands.common import fail, get_state, open_store, print_json_payload, task_filter
from fit_cli.core.constants import BODY_PARTS, CATEGORIES
from fit_cli.core.models import LogEntry, SetEntry, default_log_type
from fit_cli.core.store import StoreError
from fit_cli.utils.date_ranges import in_range, parse_date, resolve_date_range, validate_date
from fit_cli.utils.formatting import format_sets
from fit_cli.utils.parsing import load_records_input, parse_set_spec

app = typer.Typer(help="Log workouts and body weight")


def _day(value: Optional[str]) -> date:
    return parse_date(value) if value else date.today()


def _parse_sets(values: List[str]) -> List[SetEntry]:
    sets: List[SetEntry] = []
    for index, value in enumerate(values, 1):
        try:
            sets.append(parse_set_spec(value, index))
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid --set '{value}': {exc}")
    return sets


@app.command("task")
def task_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exercise name"),
    sets: List[str] = typer.Option(
        [],
        "--set",
        "-s",
        help="Set as WEIGHTxREPS, DURATION or REPS; add /RIGHTxREPS for unilateral",
    ),
    day: Optional[str] = typer.Option(None, "--date", help="Date YYYY-MM-DD (default: today)", callback=validate_date),
    category: Optional[str] = typer.Option(None, help="STRENGTH|CARDIO|CORE"),
    body_part: Optional[str] = typer.Option(None, help="Body part key, e.g. part_chest"),
    target: str = typer.Option("", help="Planned target, e.g. 3x12"),
    planned: bool = typer.Option(False, "--planned", help="Add as an open task instead of a completed one"),
) -> None:
    """Log an exercise with its sets."""
    state = get_state(ctx)
    store = open_store(state)
    parsed_sets = _parse_sets(sets)

    template = store.template_by_name(name)
    resolved_category = (category or (template.category if template else "STRENGTH")).upper()
    if resolved_category not in CATEGORIES:
        raise typer.BadParameter("category must be one of STRENGTH|CARDIO|CORE")
    if body_part is not None and body_part not in BODY_PARTS:
        raise typer.BadParameter(f"body part must be one of {', '.join(BODY_PARTS)}")

    entry = LogEntry(
        date=_day(day),
        name=name,
        category=resolved_category,
        template_id=template.id if template else 0,
        body_part=body_part or (template.body_part if template else "part_other"),
        equipment=template.equipment if template else "equip_other",
        log_type=template.log_type if template else default_log_type(resolved_category),
        unilateral=template.unilateral if template else any(s.right_weight is not None for s in parsed_sets),
        completed=not planned,
        target=target or (template.default_target if template else ""),
        sets=tuple(parsed_sets) or (SetEntry(1, "", ""),),
    )
    try:
        stored = store.add_task(entry)
    except StoreError as exc:
        fail(exc)

    if state.json_output:
        print_json_payload(state, stored.to_dict())
        return
    state.console.print(
        f"Logged #{stored.id} {stored.name} on {stored.date.isoformat()}: {format_sets(stored)}"
    )


@app.command("weight")
def weight_command(
    ctx: typer.Context,
    weight: float = typer.Argument(..., help="Body weight in kg"),
    day: Optional[str] = typer.Option(None, "--date", help="Date YYYY-MM-DD (default: today)", callback=validate_date),
) -> None:
    """Record a body weight sample."""
    state = get_state(ctx)
    if weight <= 0:
        raise typer.BadParameter("weight must be positive")
    store = open_store(state)
    try:
        sample = store.add_weight(_day(day), weight)
    except StoreError as exc:
        fail(exc)

    if state.json_output:
        print_json_payload(state, sample.to_dict())
        return
    state.console.print(f"Recorded {sample.weight:g} kg on {sample.date.isoformat()}")


@app.command("complete")
def complete_command(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task id"),
    sets: List[str] = typer.Option([], "--set", "-s", help="Replace the task's sets"),
) -> None:
    """Mark a planned task as done, optionally recording its sets."""
    state = get_state(ctx)
    store = open_store(state)
    try:
        task = store.task_by_id(task_id)
        updated = replace(task, completed=True)
        if sets:
            updated = replace(updated, sets=tuple(_parse_sets(sets)))
        store.update_task(updated)
    except StoreError as exc:
        fail(exc)
    state.console.print(f"Completed #{updated.id} {updated.name}: {format_sets(updated)}")


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task id"),
) -> None:
    """Delete a task."""
    state = get_state(ctx)
    store = open_store(state)
    try:
        store.delete_task(task_id)
    except StoreError as exc:
        fail(exc)
    state.console.print(f"Deleted task #{task_id}")


@app.command("import")
def import_command(
    ctx: typer.Context,
    file_path: Optional[Path] = typer.Argument(None, help="YAML or JSON file with tasks/weights/templates"),
    stdin: bool = typer.Option(False, "--stdin", help="Read records from stdin"),
) -> None:
    """Bulk import records from a YAML/JSON document."""
    state = get_state(ctx)
    if file_path is None and not stdin:
        raise typer.BadParameter("Provide a file or --stdin")

    stdin_text = sys.stdin.read() if stdin else ""
    try:
        records = load_records_input(file_path, read_stdin=stdin, stdin_text=stdin_text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        typer.echo(f"Failed to read records: {exc}")
        raise typer.Exit(code=1)

    store = open_store(state)
    status_ctx = (
        state.console.status("Importing records...")
        if not (state.plain_output or state.json_output)
        else nullcontext()
    )
    try:
        with status_ctx:
            counts = store.import_records(records)
    except StoreError as exc:
        fail(exc)

    if state.json_output:
        print_json_payload(state, counts)
        return
    state.console.print(
        f"Imported {counts['tasks']} tasks, {counts['weights']} weights, {counts['templates']} exercises"
    )


def history_command(
    ctx: typer.Context,
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Only the last N days"),
    name: Optional[str] = typer.Option(None, help="Only this exercise"),
    category: Optional[str] = typer.Option(None, help="Only STRENGTH|CARDIO|CORE"),
) -> None:
    """Completed tasks and weight samples, newest day first."""
    state = get_state(ctx)
    start, end = resolve_date_range(start_date=start_date, end_date=end_date, last_days=last_days)
    store = open_store(state)
    tasks = store.tasks(predicate=task_filter(name=name, category=category, start=start, end=end), completed=True)
    weights = [sample for sample in store.weights() if in_range(sample.date, start, end)]

    days = sorted({task.date for task in tasks} | {sample.date for sample in weights}, reverse=True)

    if state.json_output:
        payload = [
            {
                "date": day.isoformat(),
                "weight": next((s.weight for s in weights if s.date == day), None),
                "tasks": [task.to_dict() for task in tasks if task.date == day],
            }
            for day in days
        ]
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for task in tasks:
            typer.echo(f"{task.date.isoformat()}\t{task.id}\t{task.category}\t{task.name}\t{format_sets(task, ' | ')}")
        return

    if not days:
        state.console.print("No history yet.")
        return

    table = Table(title=f"History ({len(tasks)} tasks)")
    table.add_column("Date")
    table.add_column("#", justify="right")
    table.add_column("Exercise")
    table.add_column("Sets")
    table.add_column("Weight", justify="right")
    for day in days:
        sample = next((s for s in weights if s.date == day), None)
        weight_text = f"{sample.weight:g} kg" if sample else ""
        day_tasks = [task for task in tasks if task.date == day]
        if not day_tasks:
            table.add_row(day.isoformat(), "", "(no training)", "", weight_text)
            continue
        for index, task in enumerate(day_tasks):
            table.add_row(
                day.isoformat() if index == 0 else "",
                str(task.id),
                task.name,
                format_sets(task),
                weight_text if index == 0 else "",
            )
    state.console.print(table)
