"""
Information endpoint for API v1.

Returns the project name, API version and the memo store backend the
process was started with.  Also serves as a readiness probe: it answers
503 until the store has been opened.
"""

from fastapi import APIRouter, Depends

from fibsrv_api.app.api.deps import get_service, get_settings
from fibsrv_api.app.core.config import Settings
from fibsrv_api.app.schemas.fib import InfoResponse
from fibsrv_api.app.services.fib_service import FibService

router = APIRouter()


@router.get("/info", response_model=InfoResponse)
def get_info(
    settings: Settings = Depends(get_settings),
    service: FibService = Depends(get_service),
) -> InfoResponse:
    return InfoResponse(
        project=settings.project_name,
        version=settings.api_version,
        store=service.store.backend,
    )
