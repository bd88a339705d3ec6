"""Weekly routine, day-type schedule and daily status commands."""

from __future__ import annotations

from datetime import date
from typing import Optional

import typer
from rich.table import Table

from fit_cli.commands.common import fail, get_state, open_store, print_json_payload
from fit_cli.core.constants import DAY_TYPE_LABELS, DEFAULT_WEIGHT_REMINDER_DAYS, WEEKDAY_NAMES
from fit_cli.core.store import RecordStore, StoreError
from fit_cli.utils.date_ranges import iso_weekday, parse_date, validate_date
from fit_cli.utils.formatting import format_sets

app = typer.Typer(help="Plan exercises per weekday")
schedule_app = typer.Typer(help="Assign a day type to each weekday")


def _check_day(day_of_week: int) -> int:
    if day_of_week not in WEEKDAY_NAMES:
        raise typer.BadParameter("day must be 1 (Mon) to 7 (Sun)")
    return day_of_week


@app.command("add")
def add_command(
    ctx: typer.Context,
    day_of_week: int = typer.Argument(..., help="Weekday 1=Mon .. 7=Sun", callback=_check_day),
    exercise: str = typer.Argument(..., help="Exercise name from the library"),
) -> None:
    """Plan an exercise on a weekday."""
    state = get_state(ctx)
    store = open_store(state)
    template = store.template_by_name(exercise)
    if template is None:
        raise typer.BadParameter(f"Unknown exercise '{exercise}'. Add it with 'fit exercise add'.")
    try:
        item = store.add_routine_item(day_of_week, template)
    except StoreError as exc:
        fail(exc)
    state.console.print(f"Planned {item.name} on {WEEKDAY_NAMES[day_of_week]} (#{item.id})")


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """Show the weekly routine."""
    state = get_state(ctx)
    store = open_store(state)
    items = store.routine()
    schedule = store.schedule()

    if state.json_output:
        print_json_payload(
            state,
            {
                "schedule": {str(day): schedule.get(day, "CORE") for day in WEEKDAY_NAMES},
                "routine": [item.to_dict() for item in items],
            },
        )
        return

    if state.plain_output:
        for item in items:
            typer.echo(f"{item.day_of_week}\t{item.id}\t{item.name}\t{item.target}")
        return

    table = Table(title="Weekly routine")
    table.add_column("Day")
    table.add_column("Type")
    table.add_column("Exercises")
    for day, label in WEEKDAY_NAMES.items():
        names = ", ".join(f"{item.name} #{item.id}" for item in items if item.day_of_week == day)
        key = schedule.get(day, "CORE")
        table.add_row(label, DAY_TYPE_LABELS.get(key, key), names or "-")
    state.console.print(table)


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Routine item id"),
) -> None:
    """Remove one planned exercise."""
    state = get_state(ctx)
    store = open_store(state)
    try:
        store.remove_routine_item(item_id)
    except StoreError as exc:
        fail(exc)
    state.console.print(f"Removed routine item #{item_id}")


@app.command("clear")
def clear_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove every planned exercise."""
    state = get_state(ctx)
    if not yes and not typer.confirm("Clear the whole weekly routine?"):
        raise typer.Exit(code=0)
    store = open_store(state)
    try:
        store.clear_routine()
    except StoreError as exc:
        fail(exc)
    state.console.print("Weekly routine cleared")


@app.command("apply")
def apply_command(
    ctx: typer.Context,
    day: Optional[str] = typer.Option(None, "--date", help="Date YYYY-MM-DD (default: today)", callback=validate_date),
) -> None:
    """Create today's planned exercises as open tasks."""
    state = get_state(ctx)
    target_day = parse_date(day) if day else date.today()
    store = open_store(state)
    try:
        created = store.apply_routine(target_day)
    except StoreError as exc:
        fail(exc)

    if state.json_output:
        print_json_payload(state, [task.to_dict() for task in created])
        return
    if not created:
        state.console.print(f"Nothing planned for {WEEKDAY_NAMES[iso_weekday(target_day)]}")
        return
    for task in created:
        state.console.print(f"Added #{task.id} {task.name} ({task.target or 'no target'})")


@schedule_app.command("set")
def schedule_set_command(
    ctx: typer.Context,
    day_of_week: int = typer.Argument(..., help="Weekday 1=Mon .. 7=Sun", callback=_check_day),
    day_type: str = typer.Argument(..., help="CORE|ACTIVE_REST|LIGHT|REST"),
) -> None:
    """Set the day type of a weekday."""
    state = get_state(ctx)
    store = open_store(state)
    try:
        store.set_day_type(day_of_week, day_type)
    except StoreError as exc:
        fail(exc)
    state.console.print(f"{WEEKDAY_NAMES[day_of_week]}: {DAY_TYPE_LABELS[day_type.upper()]}")


@schedule_app.command("show")
def schedule_show_command(ctx: typer.Context) -> None:
    """Show the day type of every weekday."""
    state = get_state(ctx)
    schedule = open_store(state).schedule()
    rows = {str(day): schedule.get(day, "CORE") for day in WEEKDAY_NAMES}

    if state.json_output:
        print_json_payload(state, rows)
        return
    for day, label in WEEKDAY_NAMES.items():
        key = schedule.get(day, "CORE")
        state.console.print(f"{label}  {DAY_TYPE_LABELS.get(key, key)}")


def weight_reminder_due(store: RecordStore, today: date, max_days: int) -> bool:
    """True when no weight was logged or the latest sample is older than ``max_days``."""
    latest = store.latest_weight()
    if latest is None:
        return True
    return (today - latest.date).days > max_days


def status_command(
    ctx: typer.Context,
    day: Optional[str] = typer.Option(None, "--date", help="Date YYYY-MM-DD (default: today)", callback=validate_date),
) -> None:
    """Day type, open and completed tasks for a day, plus the weigh-in reminder."""
    state = get_state(ctx)
    target_day = parse_date(day) if day else date.today()
    store = open_store(state)
    max_days = int(state.config.get("reminders", {}).get("weight_days", DEFAULT_WEIGHT_REMINDER_DAYS))

    day_type = store.day_type_for(target_day)
    tasks = store.tasks_for_date(target_day)
    reminder = weight_reminder_due(store, target_day, max_days)

    if state.json_output:
        print_json_payload(
            state,
            {
                "date": target_day.isoformat(),
                "day_type": day_type,
                "tasks": [task.to_dict() for task in tasks],
                "weight_reminder": reminder,
            },
        )
        return

    state.console.print(f"{target_day.isoformat()} - {DAY_TYPE_LABELS.get(day_type, day_type)}")
    if not tasks:
        state.console.print("No tasks. Run 'fit routine apply' to add the planned routine.")
    for task in tasks:
        mark = "x" if task.completed else " "
        state.console.print(f"[{mark}] #{task.id} {task.name}  {format_sets(task)}")
    if reminder:
        state.console.print(f"No weigh-in in the last {max_days} days. Log one with 'fit log weight'.")
