"""Chart series commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from fit_cli.commands.common import get_state, open_store, print_json_payload, task_filter
from fit_cli.core.charts import (
    bmi_series,
    bmr_series,
    cardio_volume_series,
    exercise_names_by_category,
    get_chart_series,
    series_summary,
    weight_series,
)
from fit_cli.core.constants import CATEGORIES
from fit_cli.core.models import ChartDataPoint, ChartMode, Granularity, UserProfile
from fit_cli.core.state import CLIState
from fit_cli.exporters.json_export import series_payload, write_json
from fit_cli.utils.date_ranges import in_range, resolve_date_range, validate_date
from fit_cli.utils.formatting import format_minutes, format_number, intensity_bar

app = typer.Typer(help="Chart series derived from the training log")

MODE_UNITS = {
    ChartMode.WEIGHT: "kg",
    ChartMode.WEIGHT_RIGHT: "kg",
    ChartMode.DURATION: "min",
    ChartMode.REPS: "reps",
}


def _granularity(state: CLIState, value: Optional[Granularity]) -> Granularity:
    if value is not None:
        return value
    raw = str(state.config.get("charts", {}).get("granularity", "daily")).lower()
    try:
        return Granularity(raw)
    except ValueError:
        raise typer.BadParameter(f"charts.granularity must be daily or monthly, got '{raw}'")


def _render_series(
    state: CLIState,
    title: str,
    unit: str,
    granularity: Granularity,
    points: List[ChartDataPoint],
    output_file: Optional[Path],
) -> None:
    payload = {
        "title": title,
        "unit": unit,
        "granularity": granularity.value,
        "points": series_payload(points),
        "summary": series_summary(points),
    }
    if output_file:
        write_json(output_file, payload)
        state.debug(f"Wrote {len(points)} points to {output_file}")

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for point in points:
            typer.echo(f"{point.date.isoformat()}\t{point.label}\t{format_number(point.value, 2)}")
        typer.echo(f"points\t{len(points)}")
        return

    if not points:
        state.console.print(f"{title}: no data")
        return

    peak = max(point.value for point in points) or 1.0
    table = Table(title=f"{title} ({granularity.value})")
    table.add_column("Date")
    table.add_column("Label")
    table.add_column(f"Value ({unit})", justify="right")
    table.add_column("")
    for point in points:
        table.add_row(
            point.date.isoformat(),
            point.label,
            format_minutes(point.value) if unit == "min" else format_number(point.value),
            intensity_bar(point.value / peak, width=20),
        )
    state.console.print(table)

    summary = series_summary(points)
    state.console.print(
        f"{summary['points']} points | min {format_number(summary['min'])} | "
        f"max {format_number(summary['max'])} | latest {format_number(summary['latest'])} {unit}"
    )


@app.command("weight")
def weight_command(
    ctx: typer.Context,
    granularity: Optional[Granularity] = typer.Option(None, help="Bucket by day or month"),
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Only the last N days"),
    this_month: bool = typer.Option(False, help="Only this month"),
    this_year: bool = typer.Option(False, help="Only this year"),
    output_file: Optional[Path] = typer.Option(None, help="Write series JSON to file"),
) -> None:
    """Body weight (average per bucket)."""
    state = get_state(ctx)
    bucket = _granularity(state, granularity)
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        this_month=this_month,
        this_year=this_year,
    )
    samples = [s for s in open_store(state).weights() if in_range(s.date, start, end)]
    _render_series(state, "Body weight", "kg", bucket, weight_series(samples, bucket), output_file)


@app.command("bmi")
def bmi_command(
    ctx: typer.Context,
    granularity: Optional[Granularity] = typer.Option(None, help="Bucket by day or month"),
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Only the last N days"),
    this_month: bool = typer.Option(False, help="Only this month"),
    this_year: bool = typer.Option(False, help="Only this year"),
    output_file: Optional[Path] = typer.Option(None, help="Write series JSON to file"),
) -> None:
    """Body mass index from logged weight and the configured height."""
    state = get_state(ctx)
    bucket = _granularity(state, granularity)
    profile = UserProfile.from_config(state.config)
    if profile.height_cm <= 0 and not (state.json_output or state.plain_output):
        state.console.print("Set your height with 'fit profile set --height' to chart BMI.")
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        this_month=this_month,
        this_year=this_year,
    )
    samples = [s for s in open_store(state).weights() if in_range(s.date, start, end)]
    _render_series(state, "BMI", "kg/m2", bucket, bmi_series(samples, profile, bucket), output_file)


@app.command("bmr")
def bmr_command(
    ctx: typer.Context,
    granularity: Optional[Granularity] = typer.Option(None, help="Bucket by day or month"),
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Only the last N days"),
    this_month: bool = typer.Option(False, help="Only this month"),
    this_year: bool = typer.Option(False, help="Only this year"),
    output_file: Optional[Path] = typer.Option(None, help="Write series JSON to file"),
) -> None:
    """Basal metabolic rate (Mifflin-St Jeor) from logged weight and the profile."""
    state = get_state(ctx)
    bucket = _granularity(state, granularity)
    profile = UserProfile.from_config(state.config)
    if (profile.height_cm <= 0 or profile.age <= 0) and not (state.json_output or state.plain_output):
        state.console.print("Set height and age with 'fit profile set' to chart BMR.")
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        this_month=this_month,
        this_year=this_year,
    )
    samples = [s for s in open_store(state).weights() if in_range(s.date, start, end)]
    _render_series(state, "BMR", "kcal", bucket, bmr_series(samples, profile, bucket), output_file)


@app.command("cardio")
def cardio_command(
    ctx: typer.Context,
    granularity: Optional[Granularity] = typer.Option(None, help="Bucket by day or month"),
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Only the last N days"),
    this_month: bool = typer.Option(False, help="Only this month"),
    this_year: bool = typer.Option(False, help="Only this year"),
    output_file: Optional[Path] = typer.Option(None, help="Write series JSON to file"),
) -> None:
    """Total cardio minutes."""
    state = get_state(ctx)
    bucket = _granularity(state, granularity)
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        this_month=this_month,
        this_year=this_year,
    )
    tasks = open_store(state).tasks(
        predicate=task_filter(category="CARDIO", start=start, end=end),
        completed=True,
    )
    _render_series(state, "Cardio total", "min", bucket, cardio_volume_series(tasks, bucket), output_file)


@app.command("exercise")
def exercise_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exercise name as logged"),
    mode: ChartMode = typer.Option(ChartMode.WEIGHT, help="Value to chart"),
    granularity: Optional[Granularity] = typer.Option(None, help="Bucket by day or month"),
    start_date: Optional[str] = typer.Option(None, help="Start date YYYY-MM-DD", callback=validate_date),
    end_date: Optional[str] = typer.Option(None, help="End date YYYY-MM-DD", callback=validate_date),
    last_days: Optional[int] = typer.Option(None, help="Only the last N days"),
    this_month: bool = typer.Option(False, help="Only this month"),
    this_year: bool = typer.Option(False, help="Only this year"),
    output_file: Optional[Path] = typer.Option(None, help="Write series JSON to file"),
) -> None:
    """Single-exercise progress: best weight, total duration or total reps per day."""
    state = get_state(ctx)
    bucket = _granularity(state, granularity)
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        last_days=last_days,
        this_month=this_month,
        this_year=this_year,
    )
    store = open_store(state)
    points = get_chart_series(store, task_filter(name=name, start=start, end=end), mode, bucket)
    _render_series(state, f"{name} ({mode.value})", MODE_UNITS[mode], bucket, points, output_file)


@app.command("exercises")
def exercises_command(
    ctx: typer.Context,
    category: str = typer.Option("STRENGTH", help="STRENGTH|CARDIO|CORE"),
) -> None:
    """List logged exercise names available for charting."""
    state = get_state(ctx)
    key = category.upper()
    if key not in CATEGORIES:
        raise typer.BadParameter("category must be one of STRENGTH|CARDIO|CORE")
    names = exercise_names_by_category(open_store(state).tasks(completed=True), key)

    if state.json_output:
        print_json_payload(state, {"category": key, "exercises": names})
        return
    if state.plain_output:
        for item in names:
            typer.echo(item)
        return
    if not names:
        state.console.print(f"No completed {key.lower()} exercises logged yet.")
        return
    for item in names:
        state.console.print(f"- {item}")
