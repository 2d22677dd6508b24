"""Dictionary-backed memo store guarded by a single lock."""

import threading
from typing import Dict, Optional

from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.metrics import MemoStats
from fibsrv_api.app.stores.base import Memo, MemoStore


class InMemoryMemoStore(MemoStore):
    """Process-local memo store.

    Used by the unit tests and for deployments that do not need the
    cache to outlive the process.  All access is serialised through one
    lock around the whole map.
    """

    backend = "memory"

    def __init__(self, stats: Optional[MemoStats] = None) -> None:
        super().__init__(stats)
        self._memos: Dict[int, int] = {}
        self._lock = threading.Lock()

    def get(self, ctx: OperationContext, n: int) -> Optional[int]:
        ctx.check()
        with self._lock:
            value = self._memos.get(n)
        self._record_lookup(value is not None)
        return value

    def put(self, ctx: OperationContext, n: int, value: int) -> None:
        ctx.check()
        with self._lock:
            self._memos.setdefault(n, value)

    def count_less_or_equal(self, ctx: OperationContext, target: int) -> int:
        ctx.check()
        with self._lock:
            return sum(1 for value in self._memos.values() if value <= target)

    def find_highest_at_most(self, ctx: OperationContext, target: int) -> Optional[Memo]:
        ctx.check()
        best: Optional[Memo] = None
        with self._lock:
            for n, value in self._memos.items():
                if value > target:
                    continue
                if best is None or (value, n) > (best.value, best.n):
                    best = Memo(n=n, value=value)
        return best

    def clear(self, ctx: OperationContext) -> None:
        ctx.check()
        with self._lock:
            self._memos = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._memos)
