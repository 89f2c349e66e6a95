# app/schemas/book_schema.py
"""
Book schemas for request/response models.

``BookWithReviewsResponse`` is also the shape of the cached book list,
so the cache stores exactly what ``GET /books`` returns.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from app.schemas.review_schema import ReviewResponse


class BookCreate(BaseModel):
    """Schema for creating a new book."""

    title: Optional[str] = Field(
        default=None,
        max_length=255,
        description="The title of the book",
        examples=["The Great Gatsby"],
    )
    author: Optional[str] = Field(
        default=None,
        max_length=255,
        description="The author of the book",
        examples=["F. Scott Fitzgerald"],
    )


class BookResponse(BaseModel):
    """Basic book response."""

    id: int
    title: str
    author: str

    model_config = ConfigDict(from_attributes=True)


class BookWithReviewsResponse(BookResponse):
    """Book response with its reviews nested."""

    reviews: List[ReviewResponse] = Field(default_factory=list)


BookListAdapter = TypeAdapter(List[BookWithReviewsResponse])
