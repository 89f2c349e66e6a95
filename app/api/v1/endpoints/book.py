import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.session import get_session
from app.schemas.book_schema import BookCreate, BookResponse, BookWithReviewsResponse
from app.schemas.review_schema import ReviewCreate, ReviewResponse
from app.services.book_service import BookService
from app.services.review_service import ReviewService
from app.utils.deps import get_book_service, get_review_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Books"],
    prefix="/books",
)


@router.get(
    "",
    response_model=List[BookWithReviewsResponse],
    status_code=status.HTTP_200_OK,
    summary="Get all books",
    description="Retrieve every book with its reviews",
)
async def get_all_books(
    *,
    db: AsyncSession = Depends(get_session),
    book_service: BookService = Depends(get_book_service),
):
    """
    Get all books with their reviews.

    Served from the cache when a snapshot is available.
    """
    return await book_service.get_all_books(db)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a new book entry",
)
async def create_book(
    *,
    db: AsyncSession = Depends(get_session),
    book_service: BookService = Depends(get_book_service),
    book_data: Optional[BookCreate] = None,
):
    """
    Create a new book.
    - **title**: The title of the book (required)
    - **author**: The author of the book (required)
    """
    return await book_service.create_book(db, book_in=book_data or BookCreate())


@router.get(
    "/{book_id}/reviews",
    response_model=List[ReviewResponse],
    status_code=status.HTTP_200_OK,
    summary="Get reviews for a book",
    tags=["Reviews"],
)
async def get_book_reviews(
    *,
    book_id: str,
    db: AsyncSession = Depends(get_session),
    review_service: ReviewService = Depends(get_review_service),
):
    """Get all reviews for a specific book."""
    return await review_service.get_book_reviews(db, book_id=book_id)


@router.post(
    "/{book_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a review to a book",
    tags=["Reviews"],
)
async def create_review(
    *,
    book_id: str,
    db: AsyncSession = Depends(get_session),
    review_service: ReviewService = Depends(get_review_service),
    review_data: Optional[ReviewCreate] = None,
):
    """
    Add a new review for a book.
    - **comment**: Review text (required)
    - **rating**: Integer from 1 to 5 (required)
    """
    return await review_service.create_review(
        db, book_id=book_id, review_in=review_data or ReviewCreate()
    )
