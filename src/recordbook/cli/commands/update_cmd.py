# ABOUTME: The `recordbook update` command for rewriting a record by id.
# ABOUTME: Title, author, and year are replaced; the id never changes.

import click
from rich.console import Console

from recordbook.cli.options import store_options
from recordbook.cli.session import open_record_store

console = Console()


@click.command("update")
@click.argument("book_id", type=int)
@click.option("--title", required=True, help="New title.")
@click.option("--author", required=True, help="New author.")
@click.option("--year", type=int, required=True, help="New publication year.")
@store_options
def update(
    book_id: int,
    title: str,
    author: str,
    year: int,
    dsn: str | None,
    user: str | None,
    password: str | None,
) -> None:
    """Update a book record by ID."""
    with open_record_store(console, dsn, user, password) as store:
        found = store.update(book_id, title, author, year)

    if not found:
        console.print(f"[red]Record {book_id} not found.[/red]")
        raise SystemExit(1)

    console.print(f"[green]Record {book_id} updated.[/green]")
