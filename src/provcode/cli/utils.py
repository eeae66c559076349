"""
CLI utility helpers — consoles, settings access and error reporting.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from provcode.core.config import ProvcodeSettings, get_settings
from provcode.core.errors import ProvcodeError
from provcode.core.schema_rules import CompiledSchema, load_schema
from provcode.core.store import RecordStore

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def settings_from(ctx: typer.Context) -> ProvcodeSettings:
    """Settings resolved by the root callback, or freshly loaded."""
    if isinstance(ctx.obj, ProvcodeSettings):
        return ctx.obj
    return get_settings()


def store_from(ctx: typer.Context) -> RecordStore:
    return RecordStore.from_settings(settings_from(ctx))


def schema_from(ctx: typer.Context) -> CompiledSchema | None:
    return load_schema(settings_from(ctx).schema_file)


def report_error(error: ProvcodeError) -> None:
    """Print an error in the standard ``Error (CATEGORY): message`` form."""
    err_console.print(
        f"[bold red]❌ Error[/bold red] ({error.category.value}): {escape(str(error))}"
    )
    if error.cause is not None:
        err_console.print(f"   [dim]caused by: {escape(str(error.cause))}[/dim]")


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn ``ProvcodeError`` into a reported message and exit code 1."""
    try:
        yield
    except ProvcodeError as e:
        report_error(e)
        raise typer.Exit(code=1) from e
