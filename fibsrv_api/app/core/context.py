"""
Operation context passed to every service and store call.

An ``OperationContext`` carries a cancellation flag and an optional
deadline.  Long running work (the Fibonacci frame walk, the FibLess
fill loop) calls ``check()`` before each store round trip so that a
cancelled or expired request stops issuing database operations.
Writes committed before that point stay valid because memo writes
are idempotent.
"""

import threading
import time
from typing import Optional

from .errors import DeadlineExceeded, OperationCancelled


class OperationContext:
    """Cancellable, deadline-bearing handle for a single operation."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._cancelled = threading.Event()
        self._reason = "operation cancelled"
        self.deadline: Optional[float] = None
        if timeout is not None:
            self.deadline = time.monotonic() + timeout

    @classmethod
    def background(cls) -> "OperationContext":
        """Return a context that is never cancelled and has no deadline."""
        return cls()

    def cancel(self, reason: str = "operation cancelled") -> None:
        self._reason = reason
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or ``None`` without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        """Raise if the context was cancelled or its deadline has passed."""
        if self._cancelled.is_set():
            raise OperationCancelled(self._reason)
        if self.expired():
            raise DeadlineExceeded("operation deadline exceeded")
