from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, Text
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.book_model import Book


class ReviewBase(SQLModel):
    comment: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Free-form review text",
        schema_extra={"example": "Great book! Highly recommended."},
    )
    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        schema_extra={"example": 5},
    )


class Review(ReviewBase, table=True):

    __tablename__ = "reviews"
    __table_args__ = (
        Index("idx_review_book_id", "book_id"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating"),
    )

    id: Optional[int] = Field(
        primary_key=True, default=None, description="Unique identifier for Review"
    )

    book_id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            Integer, ForeignKey("books.id", ondelete="CASCADE"), nullable=False
        ),
        description="ID of the reviewed book",
    )

    # Relationships
    book: Optional["Book"] = Relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, book_id={self.book_id}, rating={self.rating})>"
