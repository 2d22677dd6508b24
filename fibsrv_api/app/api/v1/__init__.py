"""
Version 1 of the API.

Paths are kept flat (``/v1/fib``, ``/v1/fibless``,
``/v1/clear``).  Breaking changes belong in a new version subpackage.
"""
