"""
CLI: ``provcode validate`` — check one record or all of them.
"""

from __future__ import annotations

import json

import typer

from provcode.cli.render import render_batch, render_validation
from provcode.cli.utils import console, handle_errors, schema_from, settings_from, store_from
from provcode.core.errors import NotFoundError, UsageError


def validate_cmd(
    ctx: typer.Context,
    record_id: str | None = typer.Argument(None, help="Record identifier, e.g. 001-use-postgresql."),
    validate_every: bool = typer.Option(False, "--all", help="Validate all records."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed output."),
    json_out: bool = typer.Option(False, "--json", help="Output as JSON."),
) -> None:
    """Validate records against the schema and review heuristics.

    Exits 0 when every validated record is valid (warnings allowed),
    1 otherwise.

    Example:
        provcode validate 001-use-postgresql
        provcode validate --all --verbose
    """
    from provcode.core.validator import validate_all, validate_record

    with handle_errors():
        if validate_every and record_id:
            raise UsageError("Give either a record identifier or --all, not both")
        if not validate_every and not record_id:
            raise UsageError("Missing record identifier (or use --all)")

        store = store_from(ctx)
        schema_path = settings_from(ctx).schema_file
        schema = schema_from(ctx)

        if validate_every:
            if not store.exists():
                raise NotFoundError(
                    f"Records directory not found: {store.records_dir}"
                ).with_context(path=store.records_dir)
            batch = validate_all(store, schema, schema_path=schema_path)
        else:
            path = store.resolve(record_id)
            report = validate_record(
                path,
                schema,
                layout=store.layout,
                schema_path=schema_path,
                known_ids=store.record_ids(),
            )

    if validate_every:
        if json_out:
            typer.echo(json.dumps(batch.to_dict(), indent=2))
        else:
            render_batch(console, batch, verbose=verbose)
        if not batch.passed:
            raise typer.Exit(code=1)
        return

    if json_out:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        render_validation(console, report, verbose=verbose)
    if not report.valid:
        raise typer.Exit(code=1)
