# ABOUTME: Connection management for the recordbook database.
# ABOUTME: Opens one DB-API connection, applies the schema, and guarantees release.

import logging
import sqlite3
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from recordbook.db.errors import ConnectionFailedError, diagnostics_from
from recordbook.db.schema import SCHEMA

logger = logging.getLogger(__name__)

DEFAULT_DSN = str(Path.home() / ".recordbook" / "records.db")

MEMORY_DSN = ":memory:"


@dataclass(frozen=True)
class Credentials:
    """Username and password handed to drivers that authenticate."""

    username: str
    password: str = ""

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


def _driver_error(connect: Callable[..., Any] | None) -> type[Exception]:
    """Return the DB-API Error base of the driver behind a connect factory.

    DB-API modules expose ``Error``; factories whose module has none fall
    back to sqlite3's.
    """
    if connect is None:
        return sqlite3.Error
    module = sys.modules.get(getattr(connect, "__module__", None) or "")
    error = getattr(module, "Error", None)
    if isinstance(error, type) and issubclass(error, Exception):
        return error
    return sqlite3.Error


def _apply_schema(conn: Any) -> None:
    """Create the books table if it doesn't exist."""
    cursor = conn.cursor()
    try:
        cursor.execute(SCHEMA)
    finally:
        cursor.close()
    conn.commit()


def open_store(
    dsn: str | Path | None = None,
    credentials: Credentials | None = None,
    *,
    connect: Callable[..., Any] | None = None,
) -> Any:
    """Open a connection to the record store.

    With the default sqlite3 driver the DSN is a database file path (parent
    directories are created) or ":memory:". sqlite3 has no authentication, so
    credentials are only forwarded, as ``user``/``password`` keyword
    arguments, to an injected ``connect`` factory.

    Args:
        dsn: Data source name. Defaults to ~/.recordbook/records.db.
        credentials: Optional username and password.
        connect: DB-API ``connect`` callable for a qmark-paramstyle driver.

    Returns:
        An open DB-API connection with the books table present.

    Raises:
        ConnectionFailedError: If the driver refuses the connection or the
            schema cannot be applied.
    """
    target = str(dsn or DEFAULT_DSN)
    driver_error = _driver_error(connect)

    try:
        if connect is None:
            if target != MEMORY_DSN:
                Path(target).parent.mkdir(parents=True, exist_ok=True)
            # autocommit: every statement commits on its own
            conn = sqlite3.connect(target, isolation_level=None)
        elif credentials is not None:
            conn = connect(target, user=credentials.username, password=credentials.password)
        else:
            conn = connect(target)
    except (driver_error, OSError) as exc:
        # mkdir raises OSError
        logger.error("Connection to %s failed: %s", target, exc)
        raise ConnectionFailedError(f"Connection to {target} failed", diagnostics_from(exc)) from exc

    try:
        _apply_schema(conn)
    except driver_error as exc:
        conn.close()
        raise ConnectionFailedError(
            f"Could not prepare schema on {target}", diagnostics_from(exc)
        ) from exc

    logger.debug("Connected to %s", target)
    return conn


@contextmanager
def store_session(
    dsn: str | Path | None = None,
    credentials: Credentials | None = None,
    *,
    connect: Callable[..., Any] | None = None,
) -> Iterator[Any]:
    """Scoped connection: opened on entry, always closed on exit."""
    conn = open_store(dsn, credentials, connect=connect)
    try:
        yield conn
    finally:
        conn.close()
        logger.debug("Disconnected from %s", dsn or DEFAULT_DSN)
