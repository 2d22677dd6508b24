"""
SQLite implementation of the memo store.

Memos live in the ``memos`` table created by the migrations in
``core.db``.  Each operation opens a short-lived connection, runs one
parameterized statement and commits; SQLite's own locking arbitrates
concurrent writers, and ``INSERT OR IGNORE`` gives the first-write-wins
semantics required for memo writes.

SQLite integers are signed 64-bit, so values above ``2**63 - 1``
(Fib(93) and beyond) cannot be stored and surface as ``StorageFault``.
"""

import logging
import sqlite3
from typing import Optional

from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.db import get_cursor, get_database_path, wait_for_database
from fibsrv_api.app.core.errors import StorageFault
from fibsrv_api.app.core.metrics import MemoStats
from fibsrv_api.app.stores.base import Memo, MemoStore

logger = logging.getLogger(__name__)

SQLITE_MAX_INTEGER = 2**63 - 1

FIND_MEMO = "SELECT value FROM memos WHERE n = ?"
STORE_MEMO = "INSERT OR IGNORE INTO memos (n, value) VALUES (?, ?)"
COUNT_AT_MOST = "SELECT COUNT(*) AS count FROM memos WHERE value <= ?"
FIND_HIGHEST_AT_MOST = (
    "SELECT n, value FROM memos WHERE value <= ? ORDER BY value DESC, n DESC LIMIT 1"
)
CLEAR_MEMOS = "DELETE FROM memos"


class SQLiteMemoStore(MemoStore):
    """Durable memo store backed by an SQLite database file."""

    backend = "sqlite"

    def __init__(
        self,
        db_path: str,
        timeout: float = 30.0,
        stats: Optional[MemoStats] = None,
    ) -> None:
        super().__init__(stats)
        self.db_path = db_path
        self.timeout = timeout
        self._closed = False

    @classmethod
    def connect(
        cls,
        database_url: str,
        *,
        attempts: int = 10,
        interval: float = 1.0,
        timeout: float = 30.0,
        stats: Optional[MemoStats] = None,
    ) -> "SQLiteMemoStore":
        """Open (and migrate) the database, retrying as configured."""
        db_path = get_database_path(database_url)
        wait_for_database(db_path, attempts=attempts, interval=interval, timeout=timeout)
        return cls(db_path, timeout=timeout, stats=stats)

    def _busy_timeout(self, ctx: OperationContext) -> float:
        remaining = ctx.remaining()
        if remaining is None:
            return self.timeout
        return min(self.timeout, remaining)

    def _begin(self, ctx: OperationContext) -> float:
        if self._closed:
            raise StorageFault("memo store is closed")
        ctx.check()
        return self._busy_timeout(ctx)

    def _fault(self, ctx: OperationContext, message: str) -> StorageFault:
        # A lock wait cut short by the deadline is a timeout, not a fault.
        ctx.check()
        return StorageFault(message)

    def get(self, ctx: OperationContext, n: int) -> Optional[int]:
        timeout = self._begin(ctx)
        try:
            with get_cursor(self.db_path, timeout) as cursor:
                row = cursor.execute(FIND_MEMO, (n,)).fetchone()
        except (sqlite3.Error, OverflowError) as exc:
            raise self._fault(ctx, f"failed to read memo {n}: {exc}") from exc
        self._record_lookup(row is not None)
        if row is None:
            return None
        return row["value"]

    def put(self, ctx: OperationContext, n: int, value: int) -> None:
        timeout = self._begin(ctx)
        try:
            with get_cursor(self.db_path, timeout) as cursor:
                cursor.execute(STORE_MEMO, (n, value))
        except (sqlite3.Error, OverflowError) as exc:
            raise self._fault(ctx, f"failed to store memo {n}={value}: {exc}") from exc

    def count_less_or_equal(self, ctx: OperationContext, target: int) -> int:
        timeout = self._begin(ctx)
        # Every stored value fits in a signed 64-bit integer.
        bound = min(target, SQLITE_MAX_INTEGER)
        try:
            with get_cursor(self.db_path, timeout) as cursor:
                row = cursor.execute(COUNT_AT_MOST, (bound,)).fetchone()
        except sqlite3.Error as exc:
            raise self._fault(ctx, f"failed to count memos <= {target}: {exc}") from exc
        return row["count"] if row else 0

    def find_highest_at_most(self, ctx: OperationContext, target: int) -> Optional[Memo]:
        timeout = self._begin(ctx)
        bound = min(target, SQLITE_MAX_INTEGER)
        try:
            with get_cursor(self.db_path, timeout) as cursor:
                row = cursor.execute(FIND_HIGHEST_AT_MOST, (bound,)).fetchone()
        except sqlite3.Error as exc:
            raise self._fault(ctx, f"failed to find memo <= {target}: {exc}") from exc
        if row is None:
            return None
        return Memo(n=row["n"], value=row["value"])

    def clear(self, ctx: OperationContext) -> None:
        timeout = self._begin(ctx)
        try:
            with get_cursor(self.db_path, timeout) as cursor:
                cursor.execute(CLEAR_MEMOS)
        except sqlite3.Error as exc:
            raise self._fault(ctx, f"failed to clear memos: {exc}") from exc
        logger.info("Cleared memo table in %s", self.db_path)

    def close(self) -> None:
        self._closed = True
