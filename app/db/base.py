# Import all models here so SQLModel.metadata knows about every table.
from sqlmodel import SQLModel  # noqa: F401

from app.models.book_model import Book  # noqa: F401
from app.models.review_model import Review  # noqa: F401
