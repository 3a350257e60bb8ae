# ABOUTME: The `recordbook add` command for inserting a book record.
# ABOUTME: Rejects duplicate ids and over-long fields without touching existing rows.

import click
from rich.console import Console

from recordbook.cli.options import store_options
from recordbook.cli.session import open_record_store, print_store_error
from recordbook.db.errors import ConstraintViolationError
from recordbook.db.mapping import Book

console = Console()


@click.command("add")
@click.argument("book_id", type=int)
@click.argument("title")
@click.argument("author")
@click.argument("year", type=int)
@store_options
def add(
    book_id: int,
    title: str,
    author: str,
    year: int,
    dsn: str | None,
    user: str | None,
    password: str | None,
) -> None:
    """Add a new book record."""
    with open_record_store(console, dsn, user, password) as store:
        try:
            store.insert(Book(id=book_id, title=title, author=author, year=year))
        except ConstraintViolationError as exc:
            console.print("[red]Failed to add record.[/red]")
            print_store_error(console, exc)
            raise SystemExit(1) from exc

    console.print(f"[green]Record {book_id} added.[/green]")
