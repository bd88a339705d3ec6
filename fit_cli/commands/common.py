"""Shared command helpers."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Callable, NoReturn, Optional

import typer

from fit_cli.core.config import configured_body_parts
from fit_cli.core.models import LogEntry
from fit_cli.core.state import CLIState
from fit_cli.core.store import RecordStore, StoreError
from fit_cli.utils.date_ranges import in_range


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def open_store(state: CLIState) -> RecordStore:
    """Open the configured record store, exiting with code 1 on failure."""
    state.debug(f"Opening record store {state.store_path}")
    try:
        return RecordStore(state.store_path, body_parts=configured_body_parts(state.config))
    except StoreError as exc:
        typer.echo(f"Store error: {exc}")
        raise typer.Exit(code=1)


def fail(exc: StoreError) -> NoReturn:
    """Report a store error raised by a write and exit with code 1."""
    typer.echo(f"Store error: {exc}")
    raise typer.Exit(code=1)


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def task_filter(
    name: Optional[str] = None,
    category: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Callable[[LogEntry], bool]:
    """Build a task predicate from CLI filter options."""

    def _match(task: LogEntry) -> bool:
        if name is not None and task.name != name:
            return False
        if category is not None and task.category != category.upper():
            return False
        return in_range(task.date, start, end)

    return _match
