# ABOUTME: The `recordbook export` command for writing all records to CSV.
# ABOUTME: Produces a header row and one line per record.

from pathlib import Path

import click
from rich.console import Console

from recordbook.cli.options import store_options
from recordbook.cli.session import open_record_store
from recordbook.core.exporter import ExportError, export_csv

console = Console()


@click.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), default="books.csv")
@click.option(
    "--encoding",
    default="utf-8-sig",
    show_default=True,
    help="File encoding; use utf-16 for UTF-16 with BOM.",
)
@store_options
def export(
    path: Path,
    encoding: str,
    dsn: str | None,
    user: str | None,
    password: str | None,
) -> None:
    """Export all book records to a CSV file."""
    with open_record_store(console, dsn, user, password) as store:
        records = store.fetch_all()

    if not records:
        console.print("[yellow]No records to export.[/yellow]")
        return

    try:
        count = export_csv(records, path, encoding=encoding)
    except ExportError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    console.print(f"[green]Exported {count} record(s) to {path}.[/green]")
