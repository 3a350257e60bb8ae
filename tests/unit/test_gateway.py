# ABOUTME: Unit tests for RecordStore CRUD operations.
# ABOUTME: Validates round trips, duplicate keys, update and delete outcomes, and driver failures.

import sqlite3
from pathlib import Path
from typing import Any

import pytest

from recordbook.db.errors import (
    ConstraintViolationError,
    DuplicateKeyError,
    StatementExecuteFailedError,
    StatementPrepareFailedError,
)
from recordbook.db.gateway import RecordStore
from recordbook.db.mapping import Book


class TestInsert:
    """Tests for RecordStore.insert."""

    def test_roundtrip_fetch_by_id(self, store: RecordStore, sample_book: Book) -> None:
        """An inserted book is fetched back with identical fields."""
        store.insert(sample_book)
        assert store.fetch_by_id(sample_book.id) == sample_book

    def test_duplicate_id_raises(self, store: RecordStore, sample_book: Book) -> None:
        """A second insert with the same id fails and leaves the original alone."""
        store.insert(sample_book)
        with pytest.raises(DuplicateKeyError) as info:
            store.insert(Book(id=sample_book.id, title="Other", author="Someone", year=2001))

        assert info.value.diagnostics[0].state == "23000"
        assert store.fetch_by_id(sample_book.id) == sample_book

    def test_too_long_title_not_stored(self, store: RecordStore) -> None:
        with pytest.raises(ConstraintViolationError):
            store.insert(Book(id=5, title="x" * 256, author="A", year=2000))
        assert store.fetch_by_id(5) is None

    def test_unicode_text(self, store: RecordStore) -> None:
        book = Book(id=9, title="Il nome della rosa", author="Umberto Eco ✓", year=1980)
        store.insert(book)
        assert store.fetch_by_id(9) == book


class TestFetch:
    """Tests for fetch_all, fetch_by_id, and exists."""

    def test_fetch_all_empty(self, store: RecordStore) -> None:
        """An empty table yields an empty list, not an error."""
        assert store.fetch_all() == []

    def test_fetch_all_returns_every_book(self, store: RecordStore, shelf: list[Book]) -> None:
        for book in shelf:
            store.insert(book)
        assert sorted(store.fetch_all(), key=lambda b: b.id) == sorted(shelf, key=lambda b: b.id)

    def test_fetch_by_id_missing(self, store: RecordStore) -> None:
        """Absence is reported as None."""
        assert store.fetch_by_id(999) is None

    def test_exists(self, store: RecordStore, sample_book: Book) -> None:
        assert not store.exists(sample_book.id)
        store.insert(sample_book)
        assert store.exists(sample_book.id)


class TestUpdate:
    """Tests for RecordStore.update."""

    def test_update_existing(self, store: RecordStore, sample_book: Book) -> None:
        """Returns True and the new values are visible with the id unchanged."""
        store.insert(sample_book)

        assert store.update(sample_book.id, "T2", "A2", 2020) is True
        assert store.fetch_by_id(sample_book.id) == Book(id=1, title="T2", author="A2", year=2020)

    def test_update_same_values_reports_found(
        self, store: RecordStore, sample_book: Book
    ) -> None:
        """found reflects existence, not whether anything changed."""
        store.insert(sample_book)
        assert store.update(
            sample_book.id, sample_book.title, sample_book.author, sample_book.year
        )

    def test_update_missing(self, store: RecordStore, sample_book: Book) -> None:
        """Returns False and mutates nothing."""
        store.insert(sample_book)

        assert store.update(42, "T2", "A2", 2020) is False
        assert store.fetch_all() == [sample_book]

    def test_update_rejects_long_author(self, store: RecordStore, sample_book: Book) -> None:
        store.insert(sample_book)
        with pytest.raises(ConstraintViolationError):
            store.update(sample_book.id, "T", "a" * 300, 2000)
        assert store.fetch_by_id(sample_book.id) == sample_book

    def test_row_deleted_after_check(self, db_path: Path, sample_book: Book) -> None:
        """If the row disappears between lookup and write, update reports False."""

        class StaleCheckStore(RecordStore):
            def exists(self, book_id: int) -> bool:
                return True

        conn = sqlite3.connect(db_path)
        conn.execute(
            "CREATE TABLE books (id INTEGER PRIMARY KEY, title TEXT, author TEXT, year INTEGER)"
        )
        stale = StaleCheckStore(conn)

        assert stale.update(sample_book.id, "T", "A", 2000) is False
        conn.close()


class TestDelete:
    """Tests for RecordStore.delete_by_id."""

    def test_delete_existing(self, store: RecordStore, sample_book: Book) -> None:
        """Deleting an existing id removes exactly one row."""
        store.insert(sample_book)

        assert store.delete_by_id(sample_book.id) == 1
        assert store.fetch_by_id(sample_book.id) is None

    def test_delete_missing(self, store: RecordStore) -> None:
        assert store.delete_by_id(999) == 0


class _FailingCursor:
    def __init__(self, error: Exception) -> None:
        self._error = error
        self.closed = False

    def execute(self, sql: str, params: Any = ()) -> None:
        raise self._error

    def close(self) -> None:
        self.closed = True


class _FailingConnection:
    def __init__(self, error: Exception) -> None:
        self.cursors: list[_FailingCursor] = []
        self._error = error

    def cursor(self) -> _FailingCursor:
        cursor = _FailingCursor(self._error)
        self.cursors.append(cursor)
        return cursor

    def commit(self) -> None:
        pass


class TestDriverFailures:
    """Tests for translation of driver errors."""

    def test_missing_table_is_prepare_failure(self, tmp_path: Path) -> None:
        conn = sqlite3.connect(tmp_path / "bare.db")
        with pytest.raises(StatementPrepareFailedError) as info:
            RecordStore(conn).fetch_all()
        conn.close()
        assert "no such table" in info.value.diagnostics[0].message

    def test_runtime_failure_is_execute_failure(self) -> None:
        conn = _FailingConnection(sqlite3.OperationalError("database is locked"))
        with pytest.raises(StatementExecuteFailedError, match="database is locked"):
            RecordStore(conn).delete_by_id(1)

    def test_cursor_closed_after_failure(self) -> None:
        """The statement's cursor is released even when execution fails."""
        conn = _FailingConnection(sqlite3.OperationalError("disk I/O error"))
        with pytest.raises(StatementExecuteFailedError):
            RecordStore(conn).fetch_by_id(1)
        assert all(cursor.closed for cursor in conn.cursors)

    def test_store_usable_after_failure(self, store: RecordStore, sample_book: Book) -> None:
        """A failed request does not affect later ones."""
        store.insert(sample_book)
        with pytest.raises(DuplicateKeyError):
            store.insert(sample_book)
        assert store.delete_by_id(sample_book.id) == 1


class TestIntegerRange:
    """Tests for ids outside the 64-bit INTEGER range."""

    def test_insert_out_of_range_id_is_constraint_violation(self, store: RecordStore) -> None:
        with pytest.raises(ConstraintViolationError, match="INTEGER range"):
            store.insert(Book(id=2**63, title="T", author="A", year=2000))
        assert store.fetch_all() == []

    def test_lookups_report_not_found(self, store: RecordStore, sample_book: Book) -> None:
        """An id no row can hold is simply absent."""
        store.insert(sample_book)
        assert store.fetch_by_id(2**63) is None
        assert store.exists(-(2**63) - 1) is False
        assert store.delete_by_id(2**63) == 0
        assert store.update(2**63, "T", "A", 2000) is False
        assert store.fetch_all() == [sample_book]

    def test_range_limit_is_storable(self, store: RecordStore) -> None:
        book = Book(id=2**63 - 1, title="T", author="A", year=2000)
        store.insert(book)
        assert store.fetch_by_id(book.id) == book


class TestReadingExistingRows:
    """Tests for rows written by something other than the store."""

    def test_null_year_reads_as_zero(self, nullable_db: Path, nullable_store: RecordStore) -> None:
        conn = sqlite3.connect(nullable_db)
        conn.execute("INSERT INTO books (id, title, author) VALUES (1, 'Dune', 'Frank Herbert')")
        conn.commit()
        conn.close()

        expected = Book(id=1, title="Dune", author="Frank Herbert", year=0)
        assert nullable_store.fetch_all() == [expected]
        assert nullable_store.fetch_by_id(1) == expected

    def test_null_text_reads_as_empty(
        self, nullable_db: Path, nullable_store: RecordStore
    ) -> None:
        conn = sqlite3.connect(nullable_db)
        conn.execute("INSERT INTO books (id, year) VALUES (2, 1999)")
        conn.commit()
        conn.close()

        assert nullable_store.fetch_by_id(2) == Book(id=2, title="", author="", year=1999)

    def test_long_title_read_back_unchanged(
        self, nullable_db: Path, nullable_store: RecordStore
    ) -> None:
        """The width limit is not applied to rows already in the table."""
        title = "x" * 300
        conn = sqlite3.connect(nullable_db)
        conn.execute("INSERT INTO books VALUES (3, ?, 'A', 2000)", (title,))
        conn.commit()
        conn.close()

        book = nullable_store.fetch_by_id(3)
        assert book is not None
        assert book.title == title

    def test_text_year_raises_store_error(
        self, nullable_db: Path, nullable_store: RecordStore
    ) -> None:
        conn = sqlite3.connect(nullable_db)
        conn.execute("INSERT INTO books VALUES (4, 'T', 'A', 'unknown')")
        conn.commit()
        conn.close()

        with pytest.raises(StatementExecuteFailedError) as info:
            nullable_store.fetch_all()
        assert info.value.diagnostics[0].state == "22000"
        assert "year" in info.value.diagnostics[0].message

    def test_store_usable_after_unreadable_row(
        self, nullable_db: Path, nullable_store: RecordStore
    ) -> None:
        conn = sqlite3.connect(nullable_db)
        conn.execute("INSERT INTO books VALUES (4, 'T', 'A', 'unknown')")
        conn.commit()
        conn.close()

        with pytest.raises(StatementExecuteFailedError):
            nullable_store.fetch_by_id(4)
        assert nullable_store.delete_by_id(4) == 1
        assert nullable_store.fetch_all() == []


class _FetchFailingCursor:
    def __init__(self, error: Exception) -> None:
        self._error = error
        self.closed = False

    def execute(self, sql: str, params: Any = ()) -> None:
        pass

    def fetchall(self) -> list[Any]:
        raise self._error

    def fetchone(self) -> Any:
        raise self._error

    def close(self) -> None:
        self.closed = True


class _FetchFailingConnection:
    def __init__(self, error: Exception) -> None:
        self.cursors: list[_FetchFailingCursor] = []
        self._error = error

    def cursor(self) -> _FetchFailingCursor:
        cursor = _FetchFailingCursor(self._error)
        self.cursors.append(cursor)
        return cursor


class TestFetchFailures:
    """Tests for driver errors raised while reading results."""

    def test_fetchall_failure_is_translated(self) -> None:
        conn = _FetchFailingConnection(sqlite3.OperationalError("disk I/O error"))
        with pytest.raises(StatementExecuteFailedError, match="disk I/O error"):
            RecordStore(conn).fetch_all()
        assert all(cursor.closed for cursor in conn.cursors)

    def test_fetchone_failure_is_translated(self) -> None:
        conn = _FetchFailingConnection(sqlite3.DatabaseError("database disk image is malformed"))
        with pytest.raises(StatementExecuteFailedError, match="malformed"):
            RecordStore(conn).exists(1)
