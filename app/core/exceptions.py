# app/core/exceptions.py
"""
Application exception hierarchy.

Every caller-visible error carries the HTTP status it maps to, so the
exception handlers only have to render it.
"""

from typing import Optional


class AppException(Exception):
    """Base class for all application errors surfaced over HTTP."""

    status_code: int = 500
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppException):
    status_code = 400
    default_detail = "Validation failed"


class ResourceAlreadyExists(AppException):
    status_code = 400
    default_detail = "Resource already exists"


class ResourceNotFound(AppException):
    status_code = 404
    default_detail = "Resource not found"

    def __init__(
        self, detail: Optional[str] = None, resource_type: Optional[str] = None
    ):
        self.resource_type = resource_type
        if detail is None and resource_type:
            detail = f"{resource_type} not found"
        super().__init__(detail)


class InternalServerError(AppException):
    status_code = 500
    default_detail = "Internal Server Error"
