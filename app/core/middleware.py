# In app/core/middleware.py
import time
import uuid
import logging

from typing import Dict, Optional, Set
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from app.core.config import settings

# Get a logger instance
logger = logging.getLogger(__name__)

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-XSS-Protection": "0",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Adds a unique request ID to every request and logs structured
    information about each request/response pair.
    """

    def __init__(self, app, exclude_paths: Optional[Set[str]] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/favicon.ico"}

    async def dispatch(self, request: Request, call_next):
        # 1. Set up request ID and timing
        request_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        should_log = request.url.path not in self.exclude_paths

        if should_log:
            logger.info(
                f"Request started: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "client_ip": self._get_client_ip(request),
                    "method": request.method,
                    "path": request.url.path,
                },
            )

        # 2. Exceptions raised here are rendered by the registered handlers.
        response = await call_next(request)

        process_time = (time.time() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id

        if should_log:
            logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"-> {response.status_code} in {process_time:.2f}ms",
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time, 2),
                },
            )

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP considering proxy headers"""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

        return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds a fixed set of security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        headers = dict(SECURITY_HEADERS)
        if request.url.scheme == "https":
            headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        for header, value in headers.items():
            response.headers[header] = value

        return response


def register_middlewares(app: FastAPI):
    """
    Registers all middlewares for the FastAPI application.
    The order of middleware is important - they are executed in reverse order of registration.
    """
    cors_origins = _get_cors_origins()

    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Registered last so it wraps everything else
    app.add_middleware(
        RequestLoggingMiddleware, exclude_paths=settings.LOGGING_EXCLUDE_PATHS
    )

    logger.debug("All middlewares registered successfully")


def _get_cors_origins() -> list[str]:
    """Validate and return CORS origins configuration"""
    origins = [
        origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()
    ]

    if not origins:
        logger.warning("CORS_ORIGINS is empty after parsing, allowing all origins")
        return ["*"]

    return origins
