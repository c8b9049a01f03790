from logging import getLogger

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .base import AppError
from .movie_exceptions import UpstreamUnavailableError

logger = getLogger(__name__)


def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(UpstreamUnavailableError)
    async def upstream_error_handler(request: Request, exc: UpstreamUnavailableError):
        # Never retried, so the client sees every upstream failure
        logger.error(f"{request.method} {request.url.path}: {exc.detail}")
        return _error_response(exc)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.warning(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}"
        )
        return _error_response(exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred."},
        )
