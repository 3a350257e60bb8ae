# ABOUTME: Interactive numbered menu over an open record store.
# ABOUTME: Each action is one request; a failed action is reported and the loop continues.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from recordbook.cli.render import book_line, books_table
from recordbook.cli.session import print_store_error
from recordbook.core.exporter import ExportError, export_csv
from recordbook.core.sorting import SortKey, sort_books
from recordbook.db.errors import StoreError
from recordbook.db.gateway import RecordStore
from recordbook.db.mapping import Book

MENU = """
===== Record Management System =====
1. Add Record
2. Display All Records
3. Search Record by ID
4. Delete Record by ID
5. Update Record by ID
6. Sort Records
7. Export to CSV
8. Exit"""

EXIT_CHOICE = 8


class MenuSession:
    """Drives the add/list/search/delete/update/sort/export menu.

    Prompts go through click so input can be scripted in tests; output goes
    to the injected rich Console.
    """

    def __init__(
        self,
        store: RecordStore,
        console: Console,
        export_path: Path = Path("books.csv"),
    ) -> None:
        self._store = store
        self._console = console
        self._export_path = export_path
        self._actions = {
            1: self.add_record,
            2: self.display_all,
            3: self.search_by_id,
            4: self.delete_record,
            5: self.update_record,
            6: self.sort_records,
            7: self.export_records,
        }

    def run(self) -> None:
        """Loop until the operator picks Exit."""
        while True:
            self._console.print(MENU, markup=False)
            choice = click.prompt("Enter choice", type=int)

            if choice == EXIT_CHOICE:
                self._console.print("Exiting...")
                return

            action = self._actions.get(choice)
            if action is None:
                self._console.print("[red]Invalid choice.[/red]")
                continue

            try:
                action()
            except StoreError as exc:
                print_store_error(self._console, exc)

    def add_record(self) -> None:
        self._console.print("\n[bold]--- Add New Book Record ---[/bold]")
        book_id = click.prompt("Enter ID", type=int)
        title = click.prompt("Enter Title")
        author = click.prompt("Enter Author")
        year = click.prompt("Enter Year", type=int)

        self._store.insert(Book(id=book_id, title=title, author=author, year=year))
        self._console.print("[green]Record added successfully![/green]")

    def display_all(self) -> None:
        records = self._store.fetch_all()
        if not records:
            self._console.print("[yellow]No records found.[/yellow]")
            return
        self._console.print(books_table(records, title="All Book Records"))

    def search_by_id(self) -> None:
        self._console.print("\n[bold]--- Search for Book Record ---[/bold]")
        book_id = click.prompt("Enter ID to search", type=int)

        book = self._store.fetch_by_id(book_id)
        if book is None:
            self._console.print("[red]Record not found.[/red]")
            return
        self._console.print("[green]Record found![/green]")
        self._console.print(escape(book_line(book)))

    def delete_record(self) -> None:
        self._console.print("\n[bold]--- Delete Book Record ---[/bold]")
        book_id = click.prompt("Enter ID of the record to delete", type=int)

        if self._store.delete_by_id(book_id) > 0:
            self._console.print(f"[green]Record with ID {book_id} deleted successfully.[/green]")
        else:
            self._console.print(f"[red]Record with ID {book_id} not found.[/red]")

    def update_record(self) -> None:
        """Ask for an id, and only prompt for new values if it exists."""
        self._console.print("\n[bold]--- Update Book Record ---[/bold]")
        book_id = click.prompt("Enter ID of the record to update", type=int)

        if not self._store.exists(book_id):
            self._console.print(f"[red]Record with ID {book_id} not found.[/red]")
            return

        title = click.prompt("Enter new Title")
        author = click.prompt("Enter new Author")
        year = click.prompt("Enter new Year", type=int)

        if self._store.update(book_id, title, author, year):
            self._console.print(f"[green]Record with ID {book_id} updated successfully.[/green]")
        else:
            self._console.print(f"[red]Record with ID {book_id} not found.[/red]")

    def sort_records(self) -> None:
        records = self._store.fetch_all()
        if not records:
            self._console.print("[yellow]No records to sort.[/yellow]")
            return

        self._console.print("\n[bold]--- Sort Records ---[/bold]")
        self._console.print("1. Sort by Title (A-Z)\n2. Sort by Year (Ascending)")
        choice = click.prompt("Enter choice", type=int)

        if choice == 1:
            records = sort_books(records, SortKey.TITLE)
        elif choice == 2:
            records = sort_books(records, SortKey.YEAR)
        else:
            self._console.print("[yellow]Invalid sort choice. Displaying unsorted.[/yellow]")

        self._console.print(books_table(records, title="Sorted Book Records"))

    def export_records(self) -> None:
        records = self._store.fetch_all()
        if not records:
            self._console.print("[yellow]No records to export.[/yellow]")
            return

        try:
            export_csv(records, self._export_path)
        except ExportError as exc:
            self._console.print(f"[red]Error:[/red] {escape(str(exc))}")
            return
        self._console.print(
            f"[green]All records successfully exported to {self._export_path}.[/green]"
        )
