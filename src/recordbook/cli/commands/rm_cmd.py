# ABOUTME: The `recordbook rm` command for deleting a record by id.
# ABOUTME: Distinguishes a missing id (exit 1) from a driver failure.

import click
from rich.console import Console

from recordbook.cli.options import store_options
from recordbook.cli.session import open_record_store

console = Console()


@click.command("rm")
@click.argument("book_id", type=int)
@store_options
def rm(book_id: int, dsn: str | None, user: str | None, password: str | None) -> None:
    """Delete a book record by ID."""
    with open_record_store(console, dsn, user, password) as store:
        removed = store.delete_by_id(book_id)

    if removed == 0:
        console.print(f"[red]Record {book_id} not found.[/red]")
        raise SystemExit(1)

    console.print(f"[green]Record {book_id} deleted.[/green]")
