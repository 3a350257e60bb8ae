# ABOUTME: The `recordbook ls` command for listing every book record.
# ABOUTME: Shows rows in the order the database returns them.

import click
from rich.console import Console

from recordbook.cli.options import store_options
from recordbook.cli.render import books_table
from recordbook.cli.session import open_record_store

console = Console()


@click.command("ls")
@store_options
def ls(dsn: str | None, user: str | None, password: str | None) -> None:
    """List all book records."""
    with open_record_store(console, dsn, user, password) as store:
        records = store.fetch_all()

    if not records:
        console.print("[yellow]No records found.[/yellow]")
        return

    console.print(books_table(records))
    console.print(f"\n[dim]{len(records)} record(s)[/dim]")
