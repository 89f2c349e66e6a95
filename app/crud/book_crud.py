import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.orm import selectinload
from sqlmodel import and_, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exception_utils import handle_exceptions
from app.core.exceptions import InternalServerError, ResourceAlreadyExists
from app.crud.base_crud import BaseRepository
from app.models.book_model import Book

logger = logging.getLogger(__name__)

DUPLICATE_BOOK_MESSAGE = "Book with this title and author already exists"


class BookRepository(BaseRepository[Book]):
    """Repository for all database operations related to the Book model."""

    def __init__(self):
        super().__init__(Book)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get(self, db: AsyncSession, *, obj_id: int) -> Optional[Book]:
        """Retrieves a book by its ID."""
        statement = select(self.model).where(self.model.id == obj_id)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_by_title_and_author(
        self, db: AsyncSession, *, title: str, author: str
    ) -> Optional[Book]:
        """Retrieves a book by its (title, author) pair, ignoring case."""
        statement = select(self.model).where(
            and_(
                func.lower(self.model.title) == title.lower(),
                func.lower(self.model.author) == author.lower(),
            )
        )
        result = await db.execute(statement)
        return result.scalars().first()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_all_with_reviews(self, db: AsyncSession) -> List[Book]:
        """Retrieves every book with its reviews eagerly loaded."""
        statement = (
            select(self.model)
            .order_by(self.model.id)
            .options(selectinload(self.model.reviews))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        books = result.scalars().all()

        self._logger.debug(f"Loaded {len(books)} books with reviews")
        return list(books)

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
        integrity_exception=ResourceAlreadyExists,
        integrity_message=DUPLICATE_BOOK_MESSAGE,
    )
    async def create(self, db: AsyncSession, *, obj_in: Book) -> Book:
        """Create a new book. Expects a pre-constructed Book model object."""
        db.add(obj_in)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await db.refresh(obj_in)
        self._logger.info(f"Book created: {obj_in.id}")
        return obj_in

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def delete_all(self, db: AsyncSession) -> None:
        """Permanently delete every book; reviews follow through the cascade."""
        await db.execute(delete(self.model))
        await db.commit()
        self._logger.info("All books deleted")


book_repository = BookRepository()
