"""
Fibonacci endpoints for API v1.

``GET /v1/fib?n=`` returns Fib(n), ``GET /v1/fibless?target=`` returns
how many Fibonacci values are below ``target`` and ``GET
/v1/memocount?target=`` reports how many memos are at or below
``target``.  The handlers are plain functions so FastAPI runs each
request on its own worker thread; the service calls block on the memo
store.

Parameters are accepted as any integer and range-checked by the
service, so a negative value yields 400 rather than a validation 422.
"""

from fastapi import APIRouter, Depends, Query

from fibsrv_api.app.api.deps import get_context, get_service, to_http_error
from fibsrv_api.app.core.context import OperationContext
from fibsrv_api.app.core.errors import FibServiceError
from fibsrv_api.app.schemas.fib import ResultResponse
from fibsrv_api.app.services.fib_service import FibService

router = APIRouter()


@router.get("/fib", response_model=ResultResponse)
def get_fib(
    n: int = Query(..., description="Fibonacci index (n >= 0)"),
    service: FibService = Depends(get_service),
    ctx: OperationContext = Depends(get_context),
) -> ResultResponse:
    """Return Fib(n), memoizing every missing index up to ``n``."""
    try:
        return ResultResponse(result=service.fib(ctx, n))
    except FibServiceError as e:
        raise to_http_error(e) from e


@router.get("/fibless", response_model=ResultResponse)
def get_fib_less(
    target: int = Query(..., description="Upper bound (exclusive)"),
    service: FibService = Depends(get_service),
    ctx: OperationContext = Depends(get_context),
) -> ResultResponse:
    """Count the Fibonacci values strictly less than ``target``.

    Fills the memo cache as far as needed first.  When ``target`` is a
    Fibonacci number itself the memo equal to it is not counted.
    """
    try:
        return ResultResponse(result=service.fib_less(ctx, target))
    except FibServiceError as e:
        raise to_http_error(e) from e


@router.get("/memocount", response_model=ResultResponse)
def get_memo_count(
    target: int = Query(..., description="Upper bound (inclusive)"),
    service: FibService = Depends(get_service),
    ctx: OperationContext = Depends(get_context),
) -> ResultResponse:
    """Count the memos currently stored with a value ``<= target``.

    Reads the cache as is; nothing is computed.
    """
    try:
        return ResultResponse(result=service.memo_count(ctx, target))
    except FibServiceError as e:
        raise to_http_error(e) from e
