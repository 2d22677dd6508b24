"""
Hit/miss accounting for memo lookups.

Stores receive a ``MemoStats`` instance at construction time and
report every ``get`` through ``record_lookup``.  The counters belong to
the instance, so separate stores (or separate tests) never share them.
"""

import threading
from typing import Dict


class MemoStats:
    """Thread-safe counters of memo cache hits and misses."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def record_lookup(self, hit: bool) -> None:
        with self._lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {"hits": self._hits, "misses": self._misses}
