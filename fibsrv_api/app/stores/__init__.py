"""
Memo store implementations.

``create_store`` picks the backend named by ``settings.store_backend``
once at startup.
"""

import logging
from typing import Optional

from fibsrv_api.app.core.config import Settings
from fibsrv_api.app.core.metrics import MemoStats
from fibsrv_api.app.stores.base import Memo, MemoStore
from fibsrv_api.app.stores.memory import InMemoryMemoStore
from fibsrv_api.app.stores.sqlite import SQLiteMemoStore

__all__ = ["Memo", "MemoStore", "InMemoryMemoStore", "SQLiteMemoStore", "create_store"]


def create_store(settings: Settings, stats: Optional[MemoStats] = None) -> MemoStore:
    """Build the memo store selected in ``settings``.

    Raises ``ValueError`` for an unknown backend name and
    ``StorageFault`` if the SQLite database cannot be opened after the
    configured number of attempts.
    """
    logger = logging.getLogger(__name__)
    backend = settings.store_backend.strip().lower()
    if backend == "memory":
        logger.info("Using in-memory memo store")
        return InMemoryMemoStore(stats=stats)
    if backend == "sqlite":
        logger.info("Using SQLite memo store at %s", settings.database_url)
        return SQLiteMemoStore.connect(
            settings.database_url,
            attempts=settings.connect_attempts,
            interval=settings.connect_interval,
            timeout=settings.db_timeout,
            stats=stats,
        )
    raise ValueError(f"Unknown store backend: {settings.store_backend!r}")
