# ABOUTME: CRUD operations for the recordbook books table.
# ABOUTME: Each call is one round trip on its own cursor; nothing is cached between calls.

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import closing, contextmanager
from typing import Any

from recordbook.db.errors import (
    ConstraintViolationError,
    DuplicateKeyError,
    StatementExecuteFailedError,
    StatementPrepareFailedError,
    StoreError,
    diagnostics_from,
    is_prepare_failure,
)
from recordbook.db.mapping import (
    Book,
    book_to_params,
    in_integer_range,
    row_to_book,
    validate_fields,
)

logger = logging.getLogger(__name__)

SELECT_ALL = "SELECT id, title, author, year FROM books"
SELECT_BY_ID = "SELECT id, title, author, year FROM books WHERE id = ?"
INSERT = "INSERT INTO books (id, title, author, year) VALUES (?, ?, ?, ?)"
EXISTS = "SELECT id FROM books WHERE id = ?"
UPDATE = "UPDATE books SET title = ?, author = ?, year = ? WHERE id = ?"
DELETE = "DELETE FROM books WHERE id = ?"


def _is_integrity_error(exc: Exception) -> bool:
    return any(klass.__name__ == "IntegrityError" for klass in type(exc).__mro__)


def _translate(exc: Exception, sql: str) -> StoreError:
    """Wrap a driver exception in the matching StoreError subclass."""
    diagnostics = diagnostics_from(exc)
    for diagnostic in diagnostics:
        logger.info("Statement failed %s: %s", diagnostic, sql)
    if _is_integrity_error(exc):
        return ConstraintViolationError("Constraint violated", diagnostics)
    if is_prepare_failure(exc):
        return StatementPrepareFailedError("Failed to prepare statement", diagnostics)
    return StatementExecuteFailedError("Failed to execute statement", diagnostics)


class RecordStore:
    """Wraps one DB-API connection and provides typed CRUD for the books table.

    The connection is owned by the caller (see ``store_session``). Driver
    failures are re-raised as ``StoreError`` subclasses with diagnostics
    attached; the store stays usable for the next call.
    """

    def __init__(self, conn: Any) -> None:
        self._conn = conn
        # DB-API drivers expose their Error base on the connection
        self._driver_error: type[Exception] = getattr(conn, "Error", sqlite3.Error)

    @contextmanager
    def _statement(self, sql: str, params: Sequence[Any] = ()) -> Iterator[Any]:
        """Run one statement on a fresh cursor and close it afterwards."""
        logger.debug("Executing %s with %r", sql, params)
        with closing(self._conn.cursor()) as cursor:
            try:
                cursor.execute(sql, params)
            except self._driver_error as exc:
                raise _translate(exc, sql) from exc
            try:
                yield cursor
            except self._driver_error as exc:
                # fetchone/fetchall failures surface here
                raise _translate(exc, sql) from exc

    def fetch_all(self) -> list[Book]:
        """Return every book, in whatever order the engine produces them."""
        with self._statement(SELECT_ALL) as cursor:
            return [row_to_book(row) for row in cursor.fetchall()]

    def fetch_by_id(self, book_id: int) -> Book | None:
        """Retrieve a book by its id, or None if there is no such row."""
        if not in_integer_range(book_id):
            return None
        with self._statement(SELECT_BY_ID, (book_id,)) as cursor:
            row = cursor.fetchone()
        return row_to_book(row) if row else None

    def exists(self, book_id: int) -> bool:
        """Whether a row with this id is present."""
        if not in_integer_range(book_id):
            return False
        with self._statement(EXISTS, (book_id,)) as cursor:
            return cursor.fetchone() is not None

    def insert(self, book: Book) -> None:
        """Add a book to the store.

        Raises:
            DuplicateKeyError: If a book with this id already exists.
            ConstraintViolationError: If a field has the wrong type, is too
                long, or the engine rejects it.
            StoreError: On any other driver failure.
        """
        params = book_to_params(book)
        try:
            with self._statement(INSERT, params):
                pass
        except ConstraintViolationError as exc:
            text = " ".join(d.message for d in exc.diagnostics).lower()
            if "unique" in text or "primary key" in text or "duplicate" in text:
                raise DuplicateKeyError(
                    f"Book with id {book.id} already exists", exc.diagnostics
                ) from exc
            raise
        self._conn.commit()

    def update(self, book_id: int, title: str, author: str, year: int) -> bool:
        """Replace title, author, and year of an existing book.

        Looks the id up first and only issues the UPDATE if it was found. The
        id itself is never changed.

        Returns:
            True if a row existed and was written, False if there was no such
            id. A row deleted between the lookup and the write also yields
            False.
        """
        validate_fields(title, author, year)
        if not self.exists(book_id):
            return False

        with self._statement(UPDATE, (title, author, year, book_id)) as cursor:
            matched = cursor.rowcount
        self._conn.commit()

        if matched == 0:
            logger.warning("Book %s vanished between lookup and update", book_id)
            return False
        return True

    def delete_by_id(self, book_id: int) -> int:
        """Delete a book and return the number of rows removed (0 if absent)."""
        if not in_integer_range(book_id):
            return 0
        with self._statement(DELETE, (book_id,)) as cursor:
            removed = cursor.rowcount
        self._conn.commit()
        return removed

