# app/models/book_model.py
"""
Book model definition.

A Book owns its Reviews: removing a book removes every review attached
to it, both through the ORM cascade and the foreign key.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.review_model import Review


class BookBase(SQLModel):

    title: str = Field(
        min_length=1,
        max_length=255,
        description="The title of the book",
        schema_extra={"example": "The Great Gatsby"},
    )
    author: str = Field(
        min_length=1,
        max_length=255,
        description="The author of the book",
        schema_extra={"example": "F. Scott Fitzgerald"},
    )


class Book(BookBase, table=True):
    __tablename__ = "books"
    __table_args__ = (
        UniqueConstraint("title", "author", name="uq_book_title_author"),
    )

    id: Optional[int] = Field(
        default=None, primary_key=True, description="A unique identifier for Book"
    )

    # Relationships
    reviews: List["Review"] = Relationship(
        back_populates="book",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "Review.id",
        },
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', author='{self.author}')>"
