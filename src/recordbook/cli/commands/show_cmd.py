# ABOUTME: The `recordbook show` command for looking up one record by id.
# ABOUTME: Exits non-zero when no record has the given id.

import click
from rich.console import Console
from rich.markup import escape

from recordbook.cli.options import store_options
from recordbook.cli.render import book_line
from recordbook.cli.session import open_record_store

console = Console()


@click.command("show")
@click.argument("book_id", type=int)
@store_options
def show(book_id: int, dsn: str | None, user: str | None, password: str | None) -> None:
    """Search for a book record by ID."""
    with open_record_store(console, dsn, user, password) as store:
        book = store.fetch_by_id(book_id)

    if book is None:
        console.print(f"[red]Record {book_id} not found.[/red]")
        raise SystemExit(1)

    console.print(escape(book_line(book)))
