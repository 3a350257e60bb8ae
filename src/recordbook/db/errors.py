# ABOUTME: Error taxonomy for the record store gateway.
# ABOUTME: Translates DB-API driver exceptions into structured diagnostics.

import sqlite3
from dataclasses import dataclass

# DB-API exception class name -> SQLSTATE-like class code
_STATE_BY_ERROR = {
    "IntegrityError": "23000",
    "DataError": "22000",
    "ProgrammingError": "42000",
    "NotSupportedError": "0A000",
    "OperationalError": "HY000",
}

_PREPARE_MARKERS = ("syntax error", "no such table", "no such column", "incomplete input")


@dataclass(frozen=True)
class Diagnostic:
    """One structured error entry reported by the driver for a failed call."""

    state: str
    native_code: int
    message: str

    def __str__(self) -> str:
        return f"[{self.state}] ({self.native_code}) {self.message}"


class StoreError(Exception):
    """Base class for failures surfaced by the record store.

    Carries the driver diagnostics (possibly several) for the failed call.
    """

    def __init__(self, message: str, diagnostics: list[Diagnostic] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.diagnostics = diagnostics or []

    def __str__(self) -> str:
        if not self.diagnostics:
            return self.message
        details = "; ".join(str(d) for d in self.diagnostics)
        return f"{self.message}: {details}"


class ConnectionFailedError(StoreError):
    """Raised when the driver cannot open a connection."""


class StatementPrepareFailedError(StoreError):
    """Raised when the driver rejects a statement before running it."""


class StatementExecuteFailedError(StoreError):
    """Raised when a prepared statement fails while executing."""


class ConstraintViolationError(StoreError):
    """Raised when a field violates a type, width, or integrity constraint."""


class DuplicateKeyError(ConstraintViolationError):
    """Raised when inserting a book whose id already exists."""


def diagnostics_from(exc: BaseException) -> list[Diagnostic]:
    """Build diagnostic records from a driver exception.

    The state is derived from the DB-API exception class. The native code is
    the driver's own error code when it exposes one (sqlite3 sets
    ``sqlite_errorcode``), otherwise 0. Drivers that attach several messages
    via ``args`` yield one diagnostic per message.
    """
    state = "HY000"
    for klass in type(exc).__mro__:
        if klass.__name__ in _STATE_BY_ERROR:
            state = _STATE_BY_ERROR[klass.__name__]
            break

    native_code = getattr(exc, "sqlite_errorcode", None)
    if native_code is None and isinstance(exc, OSError):
        native_code = exc.errno
    if not isinstance(native_code, int):
        native_code = 0

    if isinstance(exc, OSError):
        messages = [str(exc)]
    else:
        messages = [str(arg) for arg in exc.args if str(arg)] or [type(exc).__name__]
    return [Diagnostic(state=state, native_code=native_code, message=m) for m in messages]


def is_prepare_failure(exc: BaseException) -> bool:
    """Whether a driver error was raised while compiling the statement."""
    if isinstance(exc, sqlite3.ProgrammingError) and "supplied" in str(exc):
        # wrong number of bindings is detected before execution
        return True
    text = str(exc).lower()
    return any(marker in text for marker in _PREPARE_MARKERS)
