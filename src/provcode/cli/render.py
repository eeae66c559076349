"""
Presentation layer — render core report objects as rich console output.

Core modules return plain report objects; this module is the only place
that decides colours, icons and layout.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from provcode.core.lister import RecordEntry
from provcode.core.materializer import MaterializeReport
from provcode.core.validator import BatchReport, Severity, ValidationReport
from provcode.starter import InstallReport

STATUS_ICONS = {
    "accepted": "✅",
    "implemented": "🚀",
    "proposed": "💭",
    "deprecated": "⚠️",
    "superseded": "🔁",
    "rejected": "❌",
}
UNKNOWN_ICON = "❓"


def status_icon(status: str | None) -> str:
    return STATUS_ICONS.get(status or "", UNKNOWN_ICON)


# ── Listing ──────────────────────────────────────────────────────────────


def render_listing(console: Console, entries: list[RecordEntry]) -> None:
    console.print("[bold blue]📋 Existing Records:[/bold blue]")
    console.print()

    if not entries:
        console.print("[dim]No records.[/dim]")
        return

    for entry in entries:
        name = f"[green]{escape(entry.dir_name)}[/green]"
        if not entry.readable:
            console.print(f"   {name}")
            continue
        title = escape(entry.title or "N/A")
        status = escape(entry.status or "unknown")
        console.print(f"{status_icon(entry.status)}  {name} - {title} ([yellow]{status}[/yellow])")


# ── Creation ─────────────────────────────────────────────────────────────


def render_created(console: Console, report: MaterializeReport, *, records_hint: str) -> None:
    console.print(f"[bold blue]📝 Creating new record:[/bold blue] [green]{escape(report.record_id)}[/green]")
    console.print()
    for step in report.steps:
        console.print(f"[green]✅ {escape(step)}[/green]")
    for warning in report.warnings:
        console.print(f"[yellow]⚠️  {escape(warning)}[/yellow]")

    console.print()
    console.print("[bold green]✨ Record created successfully![/bold green]")
    console.print()
    console.print(f"[bold blue]📁 Location:[/bold blue] {escape(str(report.path))}")
    console.print()
    console.print("[bold blue]Next steps:[/bold blue]")
    console.print("  1. Edit the record files (narrative and structured document)")
    console.print("  2. Fill in all sections (context, decision, consequences, alternatives)")
    console.print("  3. Add supporting files to the evidence/ directory if available")
    console.print(f"  4. Validate the record: provcode validate {escape(report.record_id)}")
    console.print(f"  5. Commit to git: git add {escape(records_hint)}")
    console.print()


# ── Validation ───────────────────────────────────────────────────────────


def render_validation(console: Console, report: ValidationReport, *, verbose: bool = False) -> None:
    console.print(f"\n[bold blue]📋 Validating: {escape(report.record_id)}[/bold blue]")

    errors = report.by_severity(Severity.ERROR)
    warnings = report.by_severity(Severity.WARNING)
    infos = report.by_severity(Severity.INFO)

    if errors:
        console.print("[red]  ❌ Errors:[/red]")
        for d in errors:
            console.print(f"[red]     - {escape(str(d))}[/red]")

    if warnings:
        console.print("[yellow]  ⚠️  Warnings:[/yellow]")
        for d in warnings:
            console.print(f"[yellow]     - {escape(str(d))}[/yellow]")

    if verbose and infos:
        console.print("[dim]  ℹ️  Info:[/dim]")
        for d in infos:
            console.print(f"[dim]     - {escape(str(d))}[/dim]")

    if report.valid and not warnings:
        console.print("[green]  ✅ All checks passed![/green]")
    elif report.valid:
        console.print("[green]  ✅ Valid (with warnings)[/green]")
    else:
        console.print("[red]  ❌ Validation failed[/red]")


def render_batch(console: Console, batch: BatchReport, *, verbose: bool = False) -> None:
    console.print("[bold blue]🔍 Validating all records...[/bold blue]")

    for report in batch.reports:
        render_validation(console, report, verbose=verbose)

    def _style(count: int, colour: str) -> str:
        return colour if count > 0 else "dim"

    console.print("\n[bold blue]📊 Summary:[/bold blue]")
    console.print(f"  Total records: {batch.total}")
    console.print(f"[{_style(batch.valid_count, 'green')}]  ✅ Valid: {batch.valid_count}[/]")
    console.print(f"[{_style(batch.invalid_count, 'red')}]  ❌ Invalid: {batch.invalid_count}[/]")
    console.print(f"[{_style(batch.warning_count, 'yellow')}]  ⚠️  Warnings: {batch.warning_count}[/]")
    console.print(f"  {batch.summary()}", highlight=False)

    if not batch.passed:
        console.print("\n[red]❌ Some records failed validation[/red]")
    elif batch.warning_count:
        console.print("\n[green]✅ All records are valid (with warnings)[/green]")
    else:
        console.print("\n[green]✅ All records are valid![/green]")


# ── Init ─────────────────────────────────────────────────────────────────


def render_install(console: Console, report: InstallReport) -> None:
    for path in report.written:
        console.print(f"[green]✅ Wrote {escape(str(path))}[/green]")
    for path in report.skipped:
        console.print(f"[yellow]⚠️  Kept existing {escape(str(path))}[/yellow] [dim](use --force to replace)[/dim]")
