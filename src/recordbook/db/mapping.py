# ABOUTME: Converts between the Book dataclass and driver result rows.
# ABOUTME: Enforces the column width and type policy on writes and a NULL policy on reads.

from dataclasses import dataclass
from typing import Any

from recordbook.db.errors import (
    ConstraintViolationError,
    Diagnostic,
    StatementExecuteFailedError,
)
from recordbook.db.schema import MAX_INTEGER, MAX_TEXT_LENGTH, MIN_INTEGER


@dataclass(frozen=True)
class Book:
    """A single row of the books table."""

    id: int
    title: str
    author: str
    year: int


def in_integer_range(value: int) -> bool:
    """Whether an int fits the INTEGER column type."""
    return MIN_INTEGER <= value <= MAX_INTEGER


def _check_int(name: str, value: Any) -> None:
    # bool is an int subclass but never a valid id or year
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConstraintViolationError(f"{name} must be an integer, got {value!r}")
    if not in_integer_range(value):
        raise ConstraintViolationError(
            f"{name} {value} is outside the INTEGER range {MIN_INTEGER}..{MAX_INTEGER}"
        )


def _check_text(name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise ConstraintViolationError(f"{name} must be text, got {value!r}")
    if len(value) > MAX_TEXT_LENGTH:
        raise ConstraintViolationError(
            f"{name} is {len(value)} characters, maximum is {MAX_TEXT_LENGTH}"
        )


def validate_fields(title: Any, author: Any, year: Any) -> None:
    """Check the mutable fields against the column types and widths.

    Raises:
        ConstraintViolationError: On a non-integer or out-of-range year,
            non-text title or author, or text longer than the column allows.
            Values are rejected, never truncated.
    """
    _check_text("title", title)
    _check_text("author", author)
    _check_int("year", year)


def book_to_params(book: Book) -> tuple[int, str, str, int]:
    """Validate a Book and return INSERT parameters in column order."""
    _check_int("id", book.id)
    validate_fields(book.title, book.author, book.year)
    return (book.id, book.title, book.author, book.year)


def _unreadable(name: str, value: Any) -> StatementExecuteFailedError:
    message = f"Column {name} holds {value!r}, which is not a valid {name}"
    return StatementExecuteFailedError(
        "Failed to read row", [Diagnostic(state="22000", native_code=0, message=message)]
    )


def _read_int(name: str, value: Any, default: int | None) -> int:
    if value is None:
        if default is None:
            raise _unreadable(name, value)
        return default
    if isinstance(value, bool):
        raise _unreadable(name, value)
    try:
        converted = int(value)
    except (TypeError, ValueError):
        raise _unreadable(name, value) from None
    # rejects fractional numbers and numeric-looking text
    if converted != value:
        raise _unreadable(name, value)
    return converted


def _read_text(name: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _unreadable(name, value)
    return value


def row_to_book(row: Any) -> Book:
    """Convert a positional (id, title, author, year) row to a Book.

    Works with plain tuples as returned by any DB-API driver as well as
    sqlite3.Row. The books table may hold rows this package never wrote, so
    reads follow their own policy:

    - NULL title or author reads as "", NULL year reads as 0.
    - Text longer than the declared width is returned unchanged; the width
      limit is enforced on writes only.
    - A NULL id, or a value that is not a whole number where one is
      expected, raises StatementExecuteFailedError with a 22000 diagnostic.
    """
    return Book(
        id=_read_int("id", row[0], default=None),
        title=_read_text("title", row[1]),
        author=_read_text("author", row[2]),
        year=_read_int("year", row[3], default=0),
    )
