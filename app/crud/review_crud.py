import logging
from typing import List

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exception_utils import handle_exceptions
from app.core.exceptions import InternalServerError
from app.crud.base_crud import BaseRepository
from app.models.review_model import Review

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    """Repository for all database operations related to the Review model."""

    def __init__(self):
        super().__init__(Review)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get(self, db: AsyncSession, *, obj_id: int):
        """Get a review by its id"""
        statement = select(self.model).where(self.model.id == obj_id)
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_book_reviews(
        self, db: AsyncSession, *, book_id: int
    ) -> List[Review]:
        """Get reviews for a book"""
        statement = (
            select(self.model)
            .where(self.model.book_id == book_id)
            .order_by(self.model.id)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def create(self, db: AsyncSession, *, obj_in: Review) -> Review:
        """Create a review"""
        db.add(obj_in)
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await db.refresh(obj_in)
        self._logger.info(f"Review created: {obj_in.id} for book {obj_in.book_id}")
        return obj_in

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def delete_all(self, db: AsyncSession) -> None:
        """Permanently delete every review."""
        await db.execute(delete(self.model))
        await db.commit()
        self._logger.info("All reviews deleted")


review_repository = ReviewRepository()
