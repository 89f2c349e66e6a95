import functools
import logging
from typing import Any, Callable, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import AppException

logger = logging.getLogger(__name__)


def raise_for_status(
    *,
    condition: bool,
    exception: Type[AppException],
    detail: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Raise ``exception`` with ``detail`` when ``condition`` is true."""
    if condition:
        raise exception(detail=detail, **kwargs)


def handle_exceptions(
    *,
    default_exception: Type[AppException],
    message: str,
    integrity_exception: Optional[Type[AppException]] = None,
    integrity_message: Optional[str] = None,
) -> Callable:
    """
    Decorator for repository methods.

    Application exceptions pass through untouched. Database errors are
    logged and re-raised as ``default_exception`` so callers never see a
    raw SQLAlchemy error. When ``integrity_exception`` is given, unique
    constraint violations are reported with it instead.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except AppException:
                raise
            except IntegrityError as e:
                logger.warning(f"Integrity error in {func.__qualname__}: {e.orig}")
                if integrity_exception is not None:
                    raise integrity_exception(detail=integrity_message) from e
                raise default_exception(detail=message) from e
            except SQLAlchemyError as e:
                logger.error(
                    f"Database error in {func.__qualname__}", exc_info=True
                )
                raise default_exception(detail=message) from e

        return wrapper

    return decorator
