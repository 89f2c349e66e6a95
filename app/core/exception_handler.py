import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppException

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(
            f"{exc.__class__.__name__} on {request.method} {request.url.path}: "
            f"{exc.detail}"
        )
    return _error_response(exc.status_code, exc.detail)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(
        f"Request validation failed on {request.method} {request.url.path}: "
        f"{exc.errors()}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods share one answer.
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return _error_response(status.HTTP_404_NOT_FOUND, "Route not found")
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}", exc_info=exc
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all exception handlers for the FastAPI application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
