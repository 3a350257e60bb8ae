# ABOUTME: Rich rendering helpers for book records.
# ABOUTME: Builds the ID/Title/Author/Year table shared by list, sort, and menu views.

from collections.abc import Sequence

from rich.table import Table

from recordbook.db.mapping import Book


def books_table(records: Sequence[Book], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", width=5)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", justify="right")

    for book in records:
        table.add_row(str(book.id), book.title, book.author, str(book.year))

    return table


def book_line(book: Book) -> str:
    """One-line summary of a single record."""
    return f"ID: {book.id} | Title: {book.title} | Author: {book.author} | Year: {book.year}"
