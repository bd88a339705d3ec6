"""Exercise library commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from fit_cli.commands.common import fail, get_state, open_store, print_json_payload
from fit_cli.core.constants import BODY_PARTS, CATEGORIES, EQUIPMENT, LOG_TYPE_LABELS
from fit_cli.core.models import ExerciseTemplate, default_log_type
from fit_cli.core.store import StoreError
from fit_cli.utils.formatting import body_part_label, log_type_label

app = typer.Typer(help="Manage the exercise library")


@app.command("add")
def add_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exercise name"),
    category: str = typer.Option("STRENGTH", help="STRENGTH|CARDIO|CORE"),
    body_part: str = typer.Option("part_other", help="Body part key, e.g. part_chest"),
    equipment: str = typer.Option("equip_other", help="Equipment key, e.g. equip_barbell"),
    log_type: Optional[str] = typer.Option(
        None,
        help="WEIGHT_REPS|REPS_ONLY|DURATION (default by category)",
    ),
    target: str = typer.Option("", help="Default target, e.g. 3x12"),
    unilateral: bool = typer.Option(False, help="Log left and right side separately"),
) -> None:
    """Add an exercise template, or update the one with the same name."""
    state = get_state(ctx)
    key = category.upper()
    if key not in CATEGORIES:
        raise typer.BadParameter("category must be one of STRENGTH|CARDIO|CORE")
    if body_part not in BODY_PARTS:
        raise typer.BadParameter(f"body part must be one of {', '.join(BODY_PARTS)}")
    if equipment not in EQUIPMENT:
        raise typer.BadParameter(f"equipment must be one of {', '.join(EQUIPMENT)}")
    resolved_log_type = (log_type or default_log_type(key)).upper()
    if resolved_log_type not in LOG_TYPE_LABELS:
        raise typer.BadParameter("log type must be one of WEIGHT_REPS|REPS_ONLY|DURATION")

    store = open_store(state)
    existing = store.template_by_name(name)
    template = ExerciseTemplate(
        id=existing.id if existing else 0,
        name=name,
        category=key,
        default_target=target,
        body_part=body_part,
        equipment=equipment,
        log_type=resolved_log_type,
        unilateral=unilateral,
    )
    try:
        stored = store.save_template(template)
    except StoreError as exc:
        fail(exc)

    if state.json_output:
        print_json_payload(state, stored.to_dict())
        return
    verb = "Updated" if existing else "Added"
    state.console.print(f"{verb} exercise #{stored.id} {stored.name}")


@app.command("list")
def list_command(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(None, help="Only STRENGTH|CARDIO|CORE"),
    include_deleted: bool = typer.Option(False, help="Include deleted exercises"),
) -> None:
    """List the exercise library."""
    state = get_state(ctx)
    templates = open_store(state).templates(include_deleted=include_deleted)
    if category:
        templates = [item for item in templates if item.category == category.upper()]

    if state.json_output:
        print_json_payload(state, [item.to_dict() for item in templates])
        return

    if state.plain_output:
        for item in templates:
            typer.echo(f"{item.id}\t{item.category}\t{item.name}\t{item.body_part}\t{item.log_type}")
        return

    table = Table(title=f"Exercises ({len(templates)})")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Body part")
    table.add_column("Logging")
    table.add_column("Target")
    for item in templates:
        name = f"{item.name} (uni)" if item.unilateral else item.name
        if item.deleted:
            name = f"[strike]{name}[/strike]"
        table.add_row(
            str(item.id),
            name,
            item.category,
            body_part_label(item.body_part),
            log_type_label(item.log_type),
            item.default_target,
        )
    state.console.print(table)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    template_id: int = typer.Argument(..., help="Exercise id"),
) -> None:
    """Remove an exercise from the library; logged history keeps it."""
    state = get_state(ctx)
    store = open_store(state)
    try:
        template = store.soft_delete_template(template_id)
    except StoreError as exc:
        fail(exc)
    state.console.print(f"Deleted exercise #{template.id} {template.name}")
