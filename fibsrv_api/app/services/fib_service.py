"""
Service layer for memoized Fibonacci computation.

``FibService`` holds a reference to a ``MemoStore`` and nothing else;
every result is a function of the store contents and the input, and
every computed value is written back to the store.

Two guarantees hold for callers:

* After ``fib(ctx, n)`` returns, the store holds a memo for every index
  ``0..n``.  Predecessors are always stored before the value that
  depends on them.
* Store errors propagate unchanged.  A failed or cancelled call leaves
  only complete, correct memos behind, so any later call can resume
  from whatever was already written.

Concurrent callers may compute the same index twice; memo writes are
insert-if-absent, so the duplicate work is harmless.
"""

import logging
from typing import Dict, List, Optional

from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.errors import InvalidArgument
from fibsrv_api.app.stores.base import MemoStore

# Values are unsigned 64-bit; additions past Fib(93) wrap silently.
UINT64_MASK = 2**64 - 1

# Fib(93), the largest Fibonacci value below 2**64.  No index reaches a
# larger target before the values wrap.
LARGEST_FIB_VALUE = 12200160415121876738


class _Frame:
    """One pending ``fib(n)`` evaluation on the explicit call stack."""

    __slots__ = ("n", "stage", "first")

    def __init__(self, n: int) -> None:
        self.n = n
        # 0: look up n, 1: fib(n - 1) finished, 2: fib(n - 2) finished
        self.stage = 0
        self.first = 0


def _require_index(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgument(f"index must be an integer, got {n!r}")
    if n < 0:
        raise InvalidArgument(f"index must be non-negative, got {n}")


def _require_target(target: int) -> None:
    if isinstance(target, bool) or not isinstance(target, int):
        raise InvalidArgument(f"target must be an integer, got {target!r}")
    if target < 0 or target > UINT64_MASK:
        raise InvalidArgument(f"target must be between 0 and {UINT64_MASK}, got {target}")


class FibService:
    """Fibonacci computation over a shared memo store."""

    def __init__(self, store: MemoStore) -> None:
        self.store = store

    def fib(self, ctx: OperationContext, n: int) -> int:
        """Return Fib(n), computing and memoizing any missing predecessors.

        Evaluates the classic recursion

            fib(n) = stored value, if memoized
                   = 0, 1 for n == 0, 1 (storing the base cases)
                   = fib(n - 1) + fib(n - 2), then store the sum

        with an explicit stack instead of Python recursion, so the
        sequence of store reads and writes matches the recursive form
        exactly while large ``n`` cannot overflow the interpreter stack.

        Raises ``InvalidArgument`` for a negative index before touching
        the store.
        """
        _require_index(n)
        logger = logging.getLogger(__name__)
        store = self.store
        result = 0
        stack: List[_Frame] = [_Frame(n)]
        while stack:
            frame = stack[-1]
            if frame.stage == 0:
                cached = store.get(ctx, frame.n)
                if cached is not None:
                    result = cached
                    stack.pop()
                elif frame.n == 0:
                    store.put(ctx, 0, 0)
                    result = 0
                    stack.pop()
                elif frame.n == 1:
                    store.put(ctx, 0, 0)
                    store.put(ctx, 1, 1)
                    result = 1
                    stack.pop()
                else:
                    frame.stage = 1
                    stack.append(_Frame(frame.n - 1))
            elif frame.stage == 1:
                frame.first = result
                frame.stage = 2
                stack.append(_Frame(frame.n - 2))
            else:
                result = (frame.first + result) & UINT64_MASK
                store.put(ctx, frame.n, result)
                logger.debug("Memoized fib(%s) = %s", frame.n, result)
                stack.pop()
        return result

    def count_below(self, ctx: OperationContext, target: int) -> int:
        """Return the number of Fibonacci values strictly less than ``target``.

        The cache is first filled up to the first index whose value is
        ``>= target``, starting from the highest memo whose value is
        ``<= target`` (or from index 0 on an empty store).  The answer
        is then the store's own count of memos with ``value < target``.
        The loop position is not used as the answer because the store
        may have been populated out of order by earlier runs.

        Note the boundaries: the starting lookup is inclusive while the
        final count is exclusive, so when ``target`` is itself a
        Fibonacci value the memo equal to it is not counted.

        Targets above Fib(93) raise ``InvalidArgument``: no unsigned
        64-bit Fibonacci value reaches them, so the fill would never end.
        """
        _require_target(target)
        if target == 0:
            return 0
        if target > LARGEST_FIB_VALUE:
            raise InvalidArgument(
                f"target must be at most {LARGEST_FIB_VALUE} (Fib(93)), got {target}"
            )
        logger = logging.getLogger(__name__)
        start = self.store.find_highest_at_most(ctx, target)
        n = start.n if start is not None else 0
        first = n
        while True:
            value = self.fib(ctx, n + 1)
            if value >= target:
                break
            n += 1
        logger.debug("Filled memos %s..%s for target %s", first, n + 1, target)
        return self.store.count_less_or_equal(ctx, target - 1)

    # /v1/fibless calls the engine under this name.
    fib_less = count_below

    def memo_count(self, ctx: OperationContext, target: int) -> int:
        """Return the number of memos whose value is ``<= target``."""
        _require_target(target)
        return self.store.count_less_or_equal(ctx, target)

    def clear(self, ctx: OperationContext) -> None:
        """Remove every memo from the store."""
        self.store.clear(ctx)
        logging.getLogger(__name__).info("Memo store cleared")

    def stats(self) -> Optional[Dict[str, int]]:
        """Return lookup hit/miss counters, or ``None`` if the store has no sink."""
        if self.store.stats is None:
            return None
        return self.store.stats.snapshot()
