# ABOUTME: The `recordbook menu` command for interactive record management.
# ABOUTME: Holds one connection open for the whole session and closes it on exit.

from pathlib import Path

import click
from rich.console import Console

from recordbook.cli.menu import MenuSession
from recordbook.cli.options import store_options
from recordbook.cli.session import open_record_store

console = Console()


@click.command("menu")
@click.option(
    "--export-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default="books.csv",
    show_default=True,
    help="CSV file written by the Export menu entry.",
)
@store_options
def menu(export_path: Path, dsn: str | None, user: str | None, password: str | None) -> None:
    """Manage book records through an interactive menu."""
    with open_record_store(console, dsn, user, password) as store:
        console.print("[green]Connection established.[/green]")
        MenuSession(store, console, export_path=export_path).run()
