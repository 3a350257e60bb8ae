# ABOUTME: Writes book records to a CSV file for spreadsheets.
# ABOUTME: Header row ID,Title,Author,Year; text fields always quoted.

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from recordbook.db.mapping import Book

logger = logging.getLogger(__name__)

HEADER = "ID,Title,Author,Year"


class ExportError(Exception):
    """Raised when the export file cannot be written."""


def export_csv(records: Sequence[Book], path: Path, *, encoding: str = "utf-8-sig") -> int:
    """Write records to a CSV file.

    Title and author are always double-quoted (embedded quotes doubled);
    id and year are written bare. The default encoding prefixes a BOM so
    spreadsheet applications pick up non-ASCII text. Nothing is written
    when there are no records.

    Args:
        records: Books to export, written in the given order.
        path: Destination file; overwritten if it exists.
        encoding: Text encoding, e.g. "utf-16" for a UTF-16 file with BOM.

    Returns:
        Number of records written.

    Raises:
        ExportError: If the file cannot be created or written.
    """
    if not records:
        return 0

    try:
        with path.open("w", encoding=encoding, newline="") as handle:
            handle.write(HEADER + "\n")
            writer = csv.writer(handle, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
            for book in records:
                writer.writerow([book.id, book.title, book.author, book.year])
    except (OSError, LookupError) as exc:
        raise ExportError(f"Could not write {path}: {exc}") from exc

    logger.debug("Exported %d record(s) to %s", len(records), path)
    return len(records)
