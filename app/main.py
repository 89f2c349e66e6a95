import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.core.config import settings
from app.core.exception_handler import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import register_middlewares
from app.crud.book_crud import book_repository
from app.crud.review_crud import review_repository
from app.db.redis_conn import RedisConnection, redis_connection
from app.db.session import Database, db
from app.services.book_service import BookService
from app.services.cache_service import CacheService
from app.services.review_service import ReviewService

# Routers
from app.api.v1.endpoints import book, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    # Startup: the store is required, the cache is best-effort
    await app.state.database.connect()
    await app.state.redis.connect()

    yield

    # Shutdown
    await app.state.redis.close()
    await app.state.database.disconnect()


def create_application(
    database: Optional[Database] = None,
    redis: Optional[RedisConnection] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=lifespan,
    )

    # Wire the backends and services explicitly
    app.state.database = database or db
    app.state.redis = redis or redis_connection

    cache_service = CacheService(
        app.state.redis,
        enabled=settings.CACHE_ENABLED,
        operation_timeout=settings.CACHE_OPERATION_TIMEOUT,
    )
    app.state.book_service = BookService(
        book_repository, cache_service, cache_ttl=settings.CACHE_TTL
    )
    app.state.review_service = ReviewService(
        book_repository, review_repository, app.state.book_service
    )

    # Register all middleware
    register_middlewares(app)

    # Register all exception handlers
    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(book.router)

    return app


app = create_application()
