"""
Root Typer application for the provcode CLI.

The root callback resolves settings once per invocation (project root,
``provcode.yaml``, environment, options) and configures logging; the
commands receive the settings through ``ctx.obj``.
"""

from __future__ import annotations

from pathlib import Path

import typer
from typer import Typer

from provcode.cli.config import app as config_app
from provcode.cli.records import create_cmd, list_cmd
from provcode.cli.starter import init_cmd
from provcode.cli.utils import handle_errors
from provcode.cli.validate import validate_cmd

app = Typer(
    name="provcode",
    help="provcode — create, list and validate decision records.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("provcode")
        except PackageNotFoundError:
            from provcode import __version__ as v
        typer.echo(f"provcode {v}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    project_root: Path | None = typer.Option(
        None,
        "--project-root",
        "-p",
        help="Project root (default: nearest directory with provcode.yaml, pyproject.toml or .git).",
        file_okay=False,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Diagnostic log level: DEBUG, INFO, WARNING, ERROR.",
    ),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """provcode CLI — decision record lifecycle management."""
    from provcode.core.config import get_settings
    from provcode.core.logging import configure_logging

    with handle_errors():
        settings = get_settings(project_root=project_root, log_level=log_level)

    configure_logging(level=settings.log_level, format=settings.log_format, force=True)
    ctx.obj = settings


# ── Command registration ─────────────────────────────────────────────────

app.command("init")(init_cmd)
app.command("create")(create_cmd)
app.command("list")(list_cmd)
app.command("validate")(validate_cmd)
app.add_typer(config_app, name="config", help="Configuration inspection.")


def run() -> None:
    """Console-script entry point."""
    app()
