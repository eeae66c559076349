"""
CLI: ``provcode config`` — configuration inspection.
"""

from __future__ import annotations

import typer
from rich.table import Table

from provcode.cli.utils import console, settings_from

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    ctx: typer.Context,
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Show the effective configuration."""
    from provcode.core.config import find_project_file

    settings = settings_from(ctx)

    if json_out:
        typer.echo(settings.model_dump_json(indent=2))
        return

    console.print(f"[bold]Project Root:[/bold] {settings.project_root}")
    project_file = find_project_file(settings.project_root)
    if project_file:
        console.print(f"[bold]Project File:[/bold] {project_file}")

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        if key != "project_root":
            table.add_row(key, str(value))
    console.print(table)
