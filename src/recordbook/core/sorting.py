# ABOUTME: Client-side ordering of books already fetched from the store.
# ABOUTME: Supports sorting by title (lexicographic) or year (ascending).

from collections.abc import Iterable
from enum import Enum

from recordbook.db.mapping import Book


class SortKey(Enum):
    """Fields a record listing can be ordered by."""

    TITLE = "title"
    YEAR = "year"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        """Look up a key by name, ignoring case.

        Raises:
            ValueError: If the name is not a known sort key.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown sort key {value!r} (expected one of: {choices})") from None


def sort_books(records: Iterable[Book], key: SortKey) -> list[Book]:
    """Return a new list of books ordered by the given key.

    The sort is stable: books with equal keys keep their input order.
    """
    if key is SortKey.TITLE:
        return sorted(records, key=lambda book: book.title)
    return sorted(records, key=lambda book: book.year)
