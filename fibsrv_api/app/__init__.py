"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules:

* ``core`` - configuration, logging, errors, operation context and
  SQLite helpers.
* ``stores`` - the memo store contract and its in-memory and SQLite
  implementations.
* ``services`` - the memoized Fibonacci computation.
* ``api`` - versioned HTTP routes.
* ``schemas`` - response models.
"""

from .main import app  # noqa: F401
