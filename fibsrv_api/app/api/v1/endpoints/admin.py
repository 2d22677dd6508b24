"""
Administrative endpoints for API v1.

``/v1/clear`` truncates the memo cache (used by tests and benchmarks);
it answers both GET, for existing clients, and POST.
``/v1/stats`` reports memo lookup hits and misses.
"""

from fastapi import APIRouter, Depends

from fibsrv_api.app.api.deps import get_context, get_service, to_http_error
from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.errors import FibServiceError
from fibsrv_api.app.schemas.fib import StatsResponse, StatusResponse
from fibsrv_api.app.services.fib_service import FibService

router = APIRouter()


@router.api_route("/clear", methods=["GET", "POST"], response_model=StatusResponse)
def clear_memos(
    service: FibService = Depends(get_service),
    ctx: OperationContext = Depends(get_context),
) -> StatusResponse:
    """Remove every memo from the store."""
    try:
        service.clear(ctx)
    except FibServiceError as e:
        raise to_http_error(e) from e
    return StatusResponse(status="cleared")


@router.get("/stats", response_model=StatsResponse)
def get_stats(service: FibService = Depends(get_service)) -> StatsResponse:
    stats = service.stats() or {}
    return StatsResponse(**stats)
