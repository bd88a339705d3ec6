"""Body-part heat map command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table
from rich.text import Text

from fit_cli.commands.common import get_state, open_store, print_json_payload
from fit_cli.core.heatmap import get_heat_map, hottest_part
from fit_cli.exporters.json_export import heat_map_payload, write_json
from fit_cli.utils.formatting import body_part_label, format_number, heat_style, intensity_bar

TILES_PER_ROW = 5


def heatmap_command(
    ctx: typer.Context,
    output_file: Optional[Path] = typer.Option(None, help="Write heat map JSON to file"),
    tiles: bool = typer.Option(True, "--tiles/--list", help="Render a tile grid or a ranked list"),
) -> None:
    """Cumulative training volume per body part over the full history."""
    state = get_state(ctx)
    store = open_store(state)
    heat_map = get_heat_map(store)
    payload = heat_map_payload(heat_map)
    state.debug(f"Heat map over {len(store.tasks(completed=True))} completed tasks")

    if output_file:
        write_json(output_file, payload)

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for part, entry in heat_map.items():
            typer.echo(f"{part}\t{format_number(entry.volume, 2)}\t{entry.intensity:.3f}")
        return

    hottest = hottest_part(heat_map)
    if hottest is None:
        state.console.print("No training volume logged yet.")

    if tiles:
        grid = Table.grid(padding=(0, 1))
        parts = list(heat_map.items())
        for offset in range(0, len(parts), TILES_PER_ROW):
            row = []
            for part, entry in parts[offset : offset + TILES_PER_ROW]:
                label = f" {body_part_label(part):<10}\n {format_number(entry.volume):>10} "
                row.append(Text(label, style=heat_style(entry.intensity)))
            grid.add_row(*row)
        state.console.print(grid)
    else:
        table = Table(title="Training volume by body part")
        table.add_column("Body part")
        table.add_column("Volume", justify="right")
        table.add_column("Intensity", justify="right")
        table.add_column("")
        ranked = sorted(heat_map.items(), key=lambda item: item[1].volume, reverse=True)
        for part, entry in ranked:
            table.add_row(
                body_part_label(part),
                format_number(entry.volume),
                f"{entry.intensity:.2f}",
                intensity_bar(entry.intensity),
            )
        state.console.print(table)

    if hottest is not None:
        state.console.print(f"Most trained: {body_part_label(hottest)}")
