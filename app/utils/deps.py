from datetime import datetime, timezone

from fastapi import Request

from app.services.book_service import BookService
from app.services.review_service import ReviewService


# ================== SERVICE DEPENDENCIES ==================


def get_book_service(request: Request) -> BookService:
    """The BookService wired up for this application instance."""
    return request.app.state.book_service


def get_review_service(request: Request) -> ReviewService:
    """The ReviewService wired up for this application instance."""
    return request.app.state.review_service


# ================== HEALTH CHECK DEPENDENCIES ==================


async def get_health_status(request: Request) -> dict:
    """
    Report connectivity of the store and the cache.

    The endpoint always answers 200; the flags describe the backends.
    """
    database = request.app.state.database
    redis = request.app.state.redis

    database_ok = database.is_connected and await database.ping()
    redis_ok = await redis.available()

    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "Connected" if database_ok else "Disconnected",
        "redis": "Connected" if redis_ok else "Disconnected",
    }
