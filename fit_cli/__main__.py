"""Entry point for fit-cli."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from fit_cli import __version__
from fit_cli.commands import chart as chart_commands
from fit_cli.commands import exercise as exercise_commands
from fit_cli.commands import log as log_commands
from fit_cli.commands import profile as profile_commands
from fit_cli.commands import routine as routine_commands
from fit_cli.commands.heatmap import heatmap_command
from fit_cli.core.config import ConfigError, default_config_path, load_config, resolve_store_path
from fit_cli.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Workout log with progress charts and a body-part heat map",
    invoke_without_command=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    store: Optional[Path] = typer.Option(None, "--store", help="Path to the records file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        store_path=resolve_store_path(cfg, store),
    )
    ctx.obj.debug(f"Config {cfg_path}, store {ctx.obj.store_path}")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("heatmap")(heatmap_command)
app.command("history")(log_commands.history_command)
app.command("status")(routine_commands.status_command)
app.add_typer(chart_commands.app, name="chart")
app.add_typer(log_commands.app, name="log")
app.add_typer(exercise_commands.app, name="exercise")
app.add_typer(routine_commands.app, name="routine")
app.add_typer(routine_commands.schedule_app, name="schedule")
app.add_typer(profile_commands.app, name="profile")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
