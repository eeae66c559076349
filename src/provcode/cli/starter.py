"""
CLI: ``provcode init`` — seed a project with the bundled template and schema.
"""

from __future__ import annotations

import typer

from provcode.cli.render import render_install
from provcode.cli.utils import console, handle_errors, settings_from, store_from


def init_cmd(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Replace an existing template and schema."),
) -> None:
    """Install the record template and schema into the project."""
    from provcode.starter import install_starter

    with handle_errors():
        store = store_from(ctx)
        settings = settings_from(ctx)
        report = install_starter(store.template_dir, settings.schema_file, force=force)

    render_install(console, report)
