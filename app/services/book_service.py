import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exception_utils import raise_for_status
from app.core.exceptions import ResourceAlreadyExists, ValidationError
from app.crud.book_crud import DUPLICATE_BOOK_MESSAGE, BookRepository
from app.models.book_model import Book
from app.schemas.book_schema import (
    BookCreate,
    BookListAdapter,
    BookWithReviewsResponse,
)
from app.services.cache_service import CacheService

logger = logging.getLogger(__name__)

BOOK_LIST_CACHE_KEY = "books:all"


class BookService:
    """
    Book operations plus the cache-aside protocol for the full book list.

    The list of every book with its reviews is cached as one snapshot
    under ``BOOK_LIST_CACHE_KEY``. Reads fill it on a miss and every write
    that can change it deletes it after the write commits. The cache can
    only make reads faster: any cache failure falls back to the store.

    A read that misses, races a concurrent write and repopulates after
    that write's invalidation leaves a stale snapshot behind until the
    TTL expires. No locking is done to prevent this.
    """

    def __init__(
        self,
        book_repository: BookRepository,
        cache: CacheService,
        *,
        cache_ttl: int = 300,
    ):
        self.book_repository = book_repository
        self.cache = cache
        self.cache_ttl = cache_ttl
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # ======= READ OPERATIONS =======
    async def get_all_books(self, db: AsyncSession) -> List[BookWithReviewsResponse]:
        """Return every book with its reviews, served from cache when possible."""
        cached = await self.cache.get(BOOK_LIST_CACHE_KEY)
        if cached.ok and cached.value:
            try:
                books = BookListAdapter.validate_json(cached.value)
            except PydanticValidationError:
                self._logger.warning(
                    f"Discarding corrupt cache entry for key: {BOOK_LIST_CACHE_KEY}"
                )
            else:
                self._logger.debug("Serving books from cache")
                return books

        db_books = await self.book_repository.get_all_with_reviews(db)
        books = [BookWithReviewsResponse.model_validate(book) for book in db_books]

        stored = await self.cache.set(
            BOOK_LIST_CACHE_KEY,
            BookListAdapter.dump_json(books).decode("utf-8"),
            ttl=self.cache_ttl,
        )
        if stored.ok:
            self._logger.debug(f"Cached {len(books)} books")

        return books

    # ======= CACHE MAINTENANCE =======
    async def invalidate(self) -> None:
        """Drop the cached book list. Failures are logged, never raised."""
        result = await self.cache.delete(BOOK_LIST_CACHE_KEY)
        if result.ok:
            self._logger.debug("Books cache invalidated")
        elif not result.skipped:
            self._logger.warning(
                "Books cache could not be invalidated; "
                f"stale data may be served for up to {self.cache_ttl}s"
            )

    # ======= WRITE OPERATIONS =======
    async def create_book(self, db: AsyncSession, *, book_in: BookCreate) -> Book:
        """Validate and create a book, then invalidate the cached list."""
        raise_for_status(
            condition=not book_in.title or not book_in.author,
            exception=ValidationError,
            detail="Title and author are required",
        )

        title = book_in.title.strip()
        author = book_in.author.strip()
        raise_for_status(
            condition=not title or not author,
            exception=ValidationError,
            detail="Title and author cannot be empty",
        )

        existing = await self.book_repository.get_by_title_and_author(
            db, title=title, author=author
        )
        raise_for_status(
            condition=existing is not None,
            exception=ResourceAlreadyExists,
            detail=DUPLICATE_BOOK_MESSAGE,
        )

        book = await self.book_repository.create(
            db, obj_in=Book(title=title, author=author)
        )

        await self.invalidate()

        self._logger.info(f"Book created: '{book.title}' by {book.author} ({book.id})")
        return book
