"""
Pydantic models for request and response payloads.

Schemas live in their own modules by domain; endpoints import them
from there (e.g. ``fibsrv_api.app.schemas.fib``).
"""
