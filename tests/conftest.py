# ABOUTME: Shared pytest fixtures for recordbook tests.
# ABOUTME: Provides temporary databases, an open RecordStore, and sample books.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from recordbook.db.connection import open_store
from recordbook.db.gateway import RecordStore
from recordbook.db.mapping import Book


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path to a database file that does not exist yet."""
    return tmp_path / "records.db"


@pytest.fixture
def store(db_path: Path) -> Iterator[RecordStore]:
    """A RecordStore over a fresh temporary database, closed after the test."""
    conn = open_store(db_path)
    yield RecordStore(conn)
    conn.close()


@pytest.fixture
def sample_book() -> Book:
    """A valid book record."""
    return Book(id=1, title="The Name of the Rose", author="Umberto Eco", year=1980)


@pytest.fixture
def shelf() -> list[Book]:
    """Three books whose ids, titles, and years are all in different orders."""
    return [
        Book(id=3, title="Dune", author="Frank Herbert", year=1965),
        Book(id=1, title="Neuromancer", author="William Gibson", year=1984),
        Book(id=2, title="Foundation", author="Isaac Asimov", year=1951),
    ]


@pytest.fixture
def seeded_db(db_path: Path, shelf: list[Book]) -> Path:
    """A database file holding the shelf books."""
    conn = open_store(db_path)
    store = RecordStore(conn)
    for book in shelf:
        store.insert(book)
    conn.close()
    return db_path


@pytest.fixture
def nullable_db(db_path: Path) -> Path:
    """A database whose books table uses the bare column types, without NOT NULL."""
    conn = sqlite3.connect(db_path)
    conn.execute(
        "CREATE TABLE books (id INTEGER PRIMARY KEY, title VARCHAR(255), "
        "author VARCHAR(255), year INTEGER)"
    )
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def nullable_store(nullable_db: Path) -> Iterator[RecordStore]:
    """A RecordStore over the nullable table, which open_store leaves as it is."""
    conn = open_store(nullable_db)
    yield RecordStore(conn)
    conn.close()
