# ABOUTME: Opens the record store for a CLI command and reports store failures.
# ABOUTME: Guarantees the connection is closed however the command ends.

from collections.abc import Iterator
from contextlib import contextmanager

import click
from rich.console import Console
from rich.markup import escape

from recordbook.db.connection import Credentials, store_session
from recordbook.db.errors import StoreError
from recordbook.db.gateway import RecordStore


def credentials_from(user: str | None, password: str | None) -> Credentials | None:
    """Build credentials from CLI options, or None when no user was given.

    Raises:
        click.UsageError: If a password is given without a user.
    """
    if user is None:
        if password is not None:
            raise click.UsageError("--password requires --user (or RECORDBOOK_USER)")
        return None
    return Credentials(username=user, password=password or "")


def print_store_error(console: Console, exc: StoreError) -> None:
    """Print a failure and each of its driver diagnostics."""
    console.print(f"[red]{escape(exc.message)}.[/red]")
    for diagnostic in exc.diagnostics:
        console.print(f"[red]Database error {escape(str(diagnostic))}[/red]")


@contextmanager
def open_record_store(
    console: Console,
    dsn: str | None,
    user: str | None = None,
    password: str | None = None,
) -> Iterator[RecordStore]:
    """Yield a RecordStore for the duration of one command.

    A failed connection, or any store failure escaping the command body,
    is printed with its diagnostics and ends the command with exit status 1.
    """
    try:
        with store_session(dsn, credentials_from(user, password)) as conn:
            yield RecordStore(conn)
    except StoreError as exc:
        print_store_error(console, exc)
        raise SystemExit(1) from exc
