"""
Exception hierarchy shared by the memo stores, the Fibonacci service
and the HTTP layer.

The API endpoints translate these into HTTP responses:

* ``InvalidArgument`` -> 400
* ``StorageFault`` -> 500
* ``OperationCancelled`` -> 503
* ``DeadlineExceeded`` -> 504
"""


class FibServiceError(Exception):
    """Base class for all errors raised by the service."""


class InvalidArgument(FibServiceError, ValueError):
    """The caller supplied an index or target outside the accepted range."""


class StorageFault(FibServiceError):
    """A memo store operation failed (connectivity, constraint, encoding)."""


class OperationCancelled(FibServiceError):
    """The operation context was cancelled before the call completed."""


class DeadlineExceeded(OperationCancelled):
    """The operation context's deadline passed before the call completed."""
