"""
Load sample books and reviews into the database.

Usage: python -m app.scripts.seed

Existing books and reviews are deleted first.
"""

import asyncio
import logging

from app.core.config import settings
from app.core.logging import setup_logging
from app.crud.book_crud import book_repository
from app.crud.review_crud import review_repository
from app.db.redis_conn import RedisConnection
from app.db.session import Database
from app.models.book_model import Book
from app.models.review_model import Review
from app.services.book_service import BOOK_LIST_CACHE_KEY
from app.services.cache_service import CacheService

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald"},
    {"title": "To Kill a Mockingbird", "author": "Harper Lee"},
    {"title": "1984", "author": "George Orwell"},
    {"title": "Pride and Prejudice", "author": "Jane Austen"},
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger"},
]

# (index into SAMPLE_BOOKS, comment, rating)
SAMPLE_REVIEWS = [
    (0, "A masterpiece of American literature!", 5),
    (0, "Beautiful prose and compelling characters.", 4),
    (1, "Powerful and thought-provoking.", 5),
    (1, "A must-read classic.", 5),
    (1, "Excellent storytelling.", 4),
    (2, "Chilling and prophetic.", 5),
    (2, "Orwell was ahead of his time.", 5),
    (3, "Witty and romantic.", 4),
    (3, "Jane Austen at her finest.", 5),
    (4, "Captures teenage angst perfectly.", 4),
]


async def seed_data(database: Database) -> tuple[int, int]:
    """Replace all books and reviews with the sample data set."""
    async with database.session() as session:
        await review_repository.delete_all(session)
        await book_repository.delete_all(session)
        logger.info("Cleared existing data")

        saved_books = []
        for book_data in SAMPLE_BOOKS:
            book = await book_repository.create(session, obj_in=Book(**book_data))
            saved_books.append(book)
            logger.info(f"Created book: {book.title}")

        for book_index, comment, rating in SAMPLE_REVIEWS:
            book = saved_books[book_index]
            await review_repository.create(
                session,
                obj_in=Review(comment=comment, rating=rating, book_id=book.id),
            )
            logger.info(f"Created review for: {book.title}")

    return len(saved_books), len(SAMPLE_REVIEWS)


async def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    await database.connect()
    try:
        books, reviews = await seed_data(database)
        logger.info(f"Seed data created: {books} books and {reviews} reviews")
    finally:
        await database.disconnect()

    # The cached book list no longer matches the store
    redis = RedisConnection(
        settings.REDIS_URL,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
    )
    await redis.connect()
    try:
        await CacheService(redis).delete(BOOK_LIST_CACHE_KEY)
    finally:
        await redis.close()


if __name__ == "__main__":
    asyncio.run(main())
