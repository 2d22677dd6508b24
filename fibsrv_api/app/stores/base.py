"""
Storage contract for memoized Fibonacci values.

A memo is an ``(n, value)`` pair recording ``Fib(n) == value``.  The
``MemoStore`` interface is everything the Fibonacci service knows about
persistence; the in-memory and SQLite implementations must behave
identically under it:

* ``get`` signals absence with ``None``, never with an exception.
* ``put`` is insert-if-absent.  Re-putting an existing ``n`` is a
  no-op and the first stored value is kept.
* ``count_less_or_equal`` and ``find_highest_at_most`` reflect the
  committed contents of the store only.
* ``clear`` empties the whole collection atomically.

Every operation takes an ``OperationContext`` and raises
``StorageFault`` when the backend fails.  Stores do not retry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.metrics import MemoStats


@dataclass(frozen=True)
class Memo:
    """A Fibonacci index and its value."""

    n: int
    value: int


class MemoStore(ABC):
    """Abstract memo store."""

    #: Short backend name reported by the info endpoint.
    backend: str = "abstract"

    def __init__(self, stats: Optional[MemoStats] = None) -> None:
        self.stats = stats

    def _record_lookup(self, hit: bool) -> None:
        if self.stats is not None:
            self.stats.record_lookup(hit)

    @abstractmethod
    def get(self, ctx: OperationContext, n: int) -> Optional[int]:
        """Return the memoized value for ``n`` or ``None`` if absent."""

    @abstractmethod
    def put(self, ctx: OperationContext, n: int, value: int) -> None:
        """Store ``value`` for ``n`` unless a memo for ``n`` already exists."""

    @abstractmethod
    def count_less_or_equal(self, ctx: OperationContext, target: int) -> int:
        """Return the number of memos whose value is ``<= target``."""

    @abstractmethod
    def find_highest_at_most(self, ctx: OperationContext, target: int) -> Optional[Memo]:
        """Return the memo with the greatest value ``<= target``.

        When several memos share that value the one with the highest
        index wins.  Returns ``None`` if no memo qualifies.
        """

    @abstractmethod
    def clear(self, ctx: OperationContext) -> None:
        """Remove every memo."""

    def close(self) -> None:
        """Release backend resources.  The default does nothing."""
