"""
Shared dependencies for the API routes.

The ``FibService`` and the settings are attached to ``app.state`` at
startup; routes receive them through ``Depends``.  Each request also
gets a fresh ``OperationContext`` carrying the configured deadline.
"""

import logging

from fastapi import HTTPException, Request, status

from fibsrv_api.app.core.config import Settings
from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.errors import (
    DeadlineExceeded,
    FibServiceError,
    InvalidArgument,
    OperationCancelled,
)
from fibsrv_api.app.services.fib_service import FibService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_service(request: Request) -> FibService:
    """Return the service created at startup, or 503 if it is not ready."""
    service = getattr(request.app.state, "fib_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Memo store is not available",
        )
    return service


def get_context(request: Request) -> OperationContext:
    return OperationContext(timeout=request.app.state.settings.request_timeout)


def to_http_error(exc: FibServiceError) -> HTTPException:
    """Translate a service error into the matching HTTP error.

    Invalid input is a client error; everything else is reported as a
    server-side failure carrying the cause as ``detail``.
    """
    logger = logging.getLogger(__name__)
    if isinstance(exc, InvalidArgument):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, DeadlineExceeded):
        code = status.HTTP_504_GATEWAY_TIMEOUT
    elif isinstance(exc, OperationCancelled):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    if code >= 500:
        logger.error("Request failed (%s): %s", code, exc)
    else:
        logger.info("Rejected request (%s): %s", code, exc)
    return HTTPException(status_code=code, detail=str(exc))
