import logging

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from testgen.core.config import get_settings
from testgen.core.exceptions import AnalysisError, InvalidInputError

from . import health, testcases

logger = logging.getLogger(__name__)


def get_api_router() -> APIRouter:
    """
    Aggregate the health and test case routers.
    """
    root_router = APIRouter()
    root_router.include_router(health.router, prefix="", tags=["health"])
    root_router.include_router(testcases.router, prefix="/testcases", tags=["testcases"])
    return root_router


async def _invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "error": "invalid_input"},
    )


async def _analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    logger.warning("Analysis failed for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "error": "analysis_failed"},
    )


def register_routes(app: FastAPI) -> None:
    """
    Attach the API routes and the handlers translating pipeline errors
    into HTTP responses.
    """
    settings = get_settings()
    app.include_router(get_api_router(), prefix=settings.api_prefix)
    app.add_exception_handler(InvalidInputError, _invalid_input_handler)
    app.add_exception_handler(AnalysisError, _analysis_error_handler)
