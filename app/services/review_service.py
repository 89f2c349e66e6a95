import logging
from typing import Any, List

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exception_utils import raise_for_status
from app.core.exceptions import ResourceNotFound, ValidationError
from app.crud.book_crud import BookRepository
from app.crud.review_crud import ReviewRepository
from app.models.review_model import Review
from app.schemas.review_schema import ReviewCreate
from app.services.book_service import BookService

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
RATING_MESSAGE = "Rating must be a number between 1 and 5"

# Ids are stored as signed 64-bit integers
MAX_BOOK_ID = 2**63 - 1
MIN_BOOK_ID = -(2**63)


def parse_book_id(raw_book_id: Any) -> int:
    """Parse a path segment into a book id or raise ``ValidationError``."""
    try:
        book_id = int(str(raw_book_id).strip())
    except (TypeError, ValueError):
        raise ValidationError("Invalid book ID")
    if book_id < MIN_BOOK_ID or book_id > MAX_BOOK_ID:
        raise ValidationError("Invalid book ID")
    return book_id


def parse_rating(raw_rating: Any) -> int:
    """Accept a whole number, or a string holding one, within the rating range."""
    if isinstance(raw_rating, bool):
        raise ValidationError(RATING_MESSAGE)
    if isinstance(raw_rating, float):
        if not raw_rating.is_integer():
            raise ValidationError(RATING_MESSAGE)
        raw_rating = int(raw_rating)
    try:
        rating = int(str(raw_rating).strip())
    except (TypeError, ValueError):
        raise ValidationError(RATING_MESSAGE)
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError(RATING_MESSAGE)
    return rating


class ReviewService:
    """
    Review reads and writes.

    Creating a review changes the cached book list, so every successful
    write is followed by ``BookService.invalidate``.
    """

    def __init__(
        self,
        book_repository: BookRepository,
        review_repository: ReviewRepository,
        book_service: BookService,
    ):
        self.book_repository = book_repository
        self.review_repository = review_repository
        self.book_service = book_service
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # ======= READ OPERATIONS =======
    async def get_book_reviews(self, db: AsyncSession, *, book_id: Any) -> List[Review]:
        """Get all reviews for a book"""
        book_pk = parse_book_id(book_id)

        book = await self.book_repository.get(db, obj_id=book_pk)
        raise_for_status(
            condition=book is None,
            exception=ResourceNotFound,
            resource_type="Book",
            detail="Book not found",
        )

        reviews = await self.review_repository.get_book_reviews(db, book_id=book_pk)
        self._logger.info(f"Review list retrieved: {len(reviews)} reviews for book {book_pk}")
        return reviews

    # ======= WRITE OPERATIONS =======
    async def create_review(
        self, db: AsyncSession, *, book_id: Any, review_in: ReviewCreate
    ) -> Review:
        """Validate and create a review, then invalidate the cached book list."""
        book_pk = parse_book_id(book_id)

        raise_for_status(
            condition=not review_in.comment or review_in.rating is None,
            exception=ValidationError,
            detail="Comment and rating are required",
        )

        comment = review_in.comment.strip()
        raise_for_status(
            condition=not comment,
            exception=ValidationError,
            detail="Comment cannot be empty",
        )

        rating = parse_rating(review_in.rating)

        book = await self.book_repository.get(db, obj_id=book_pk)
        raise_for_status(
            condition=book is None,
            exception=ResourceNotFound,
            resource_type="Book",
            detail="Book not found",
        )

        review = await self.review_repository.create(
            db, obj_in=Review(comment=comment, rating=rating, book_id=book_pk)
        )

        self._logger.info(f"Review created: {review.id} for book {book_pk} (rating {rating})")

        await self.book_service.invalidate()

        return review
