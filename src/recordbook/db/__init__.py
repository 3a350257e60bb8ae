# ABOUTME: Public API for the recordbook database layer.
# ABOUTME: Exports connection management, the record store gateway, errors, and the Book type.

from recordbook.db.connection import (
    DEFAULT_DSN,
    Credentials,
    open_store,
    store_session,
)
from recordbook.db.errors import (
    ConnectionFailedError,
    ConstraintViolationError,
    Diagnostic,
    DuplicateKeyError,
    StatementExecuteFailedError,
    StatementPrepareFailedError,
    StoreError,
)
from recordbook.db.gateway import RecordStore
from recordbook.db.mapping import Book

__all__ = [
    "DEFAULT_DSN",
    "Book",
    "ConnectionFailedError",
    "ConstraintViolationError",
    "Credentials",
    "Diagnostic",
    "DuplicateKeyError",
    "RecordStore",
    "StatementExecuteFailedError",
    "StatementPrepareFailedError",
    "StoreError",
    "open_store",
    "store_session",
]
