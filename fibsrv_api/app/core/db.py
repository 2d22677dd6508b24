"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager that commits on success
(``get_cursor``), applying migrations (``init_db``) and opening the
database with a bounded number of retries at startup
(``wait_for_database``).

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import StorageFault

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: memo table.  ``n`` is the Fibonacci index and the
    # primary key; ``value`` holds Fib(n).
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS memos (
            n INTEGER PRIMARY KEY,
            value INTEGER NOT NULL
        );
        """,
    ),
    # Migration 2: index used by the count and nearest-value lookups.
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_memos_value ON memos(value);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used directly.  Otherwise the path is resolved
    relative to the package root.
    """
    if database_url.startswith("sqlite:///"):
        database_url = database_url.replace("sqlite:///", "", 1)
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # fibsrv_api/
    return str((base_dir / database_url).resolve())


def get_connection(db_path: str, timeout: float = 30.0) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    ``timeout`` is how long a statement waits on a lock held by another
    connection before raising ``sqlite3.OperationalError``.
    """
    conn = sqlite3.connect(db_path, timeout=timeout)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str, timeout: float = 30.0) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and
    rolled back (by closing without commit) when it raises.
    """
    conn = get_connection(db_path, timeout)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: str, timeout: float = 30.0) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  Returns the resulting schema version.
    """
    with get_cursor(db_path, timeout) as cursor:
        # WAL lets readers proceed while another request is writing.
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied memo schema migration %s", version)
                current_version = version
    return current_version


def wait_for_database(
    db_path: str,
    attempts: int = 10,
    interval: float = 1.0,
    timeout: float = 30.0,
) -> int:
    """Open the database and apply migrations, retrying on failure.

    Makes up to ``attempts`` tries spaced ``interval`` seconds apart.
    Raises ``StorageFault`` chained to the last error once the attempts
    are exhausted; the service cannot start without its store.
    """
    attempts = max(1, attempts)
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            version = init_db(db_path, timeout)
        except sqlite3.Error as exc:
            last_error = exc
            logger.warning(
                "DB connection attempt %s/%s to %s failed: %s",
                attempt, attempts, db_path, exc,
            )
            if attempt < attempts:
                time.sleep(interval)
            continue
        logger.info("DB connection established: %s (schema version %s)", db_path, version)
        return version
    logger.error("Reached max DB connection attempts for %s", db_path)
    raise StorageFault(
        f"could not open memo database {db_path} after {attempts} attempts: {last_error}"
    ) from last_error
