"""
Top-level router for version 1 of the API.

This router aggregates the endpoint modules under a unified prefix.
The paths themselves (``/fib``, ``/fibless``, ``/clear`` ...) are
declared inside each module so the public URLs stay flat, e.g.
``/v1/fib?n=10``.
"""

from fastapi import APIRouter

from .endpoints import admin, fib, info

router = APIRouter()

router.include_router(fib.router, tags=["fibonacci"])
router.include_router(admin.router, tags=["admin"])
router.include_router(info.router, tags=["info"])
