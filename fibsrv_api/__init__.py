"""
Top-level package for the Fibonacci memo service.

This file makes ``fibsrv_api`` a Python package so that modules within
``app`` can be imported using fully qualified names like
``fibsrv_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
