"""
CLI: ``provcode create`` / ``provcode list`` — scaffold and enumerate records.
"""

from __future__ import annotations

import json

import typer

from provcode.cli.render import render_created, render_listing
from provcode.cli.utils import console, handle_errors, settings_from, store_from


def create_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Record name, e.g. 'Use PostgreSQL'."),
) -> None:
    """Create a new record from the template.

    Example:
        provcode create use-postgresql
        provcode create "JWT authentication"
    """
    from provcode.core.materializer import create_record

    with handle_errors():
        store = store_from(ctx)
        report = create_record(store, name)

    settings = settings_from(ctx)
    try:
        hint = str(report.path.relative_to(settings.project_root))
    except ValueError:
        hint = str(report.path)
    render_created(console, report, records_hint=hint)


def list_cmd(
    ctx: typer.Context,
    show_all: bool = typer.Option(False, "--all", "-a", help="Also show directories without a number prefix."),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """List existing records with their status."""
    from provcode.core.lister import list_records

    with handle_errors():
        store = store_from(ctx)
        entries = list_records(store, include_unnumbered=show_all)

    if json_out:
        typer.echo(json.dumps([e.to_dict() for e in entries], indent=2))
        return

    if not store.exists():
        console.print(f"[yellow]No records directory found: {store.records_dir}[/yellow]")
        return

    render_listing(console, entries)
