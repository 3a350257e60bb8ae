# ABOUTME: The `recordbook sort` command for listing records in a chosen order.
# ABOUTME: Fetches every record and sorts client-side by title or year.

import click
from rich.console import Console

from recordbook.cli.options import store_options
from recordbook.cli.render import books_table
from recordbook.cli.session import open_record_store
from recordbook.core.sorting import SortKey, sort_books

console = Console()


@click.command("sort")
@click.option(
    "--by",
    "sort_by",
    type=click.Choice([key.value for key in SortKey], case_sensitive=False),
    default=SortKey.TITLE.value,
    show_default=True,
    help="Field to sort by.",
)
@store_options
def sort(sort_by: str, dsn: str | None, user: str | None, password: str | None) -> None:
    """List book records sorted by title (A-Z) or year (ascending)."""
    with open_record_store(console, dsn, user, password) as store:
        records = store.fetch_all()

    if not records:
        console.print("[yellow]No records to sort.[/yellow]")
        return

    key = SortKey.parse(sort_by)
    console.print(books_table(sort_books(records, key), title=f"Sorted by {key.value}"))
