# tests/mocks/mock_book_repository.py
from typing import List, Optional

from app.models.book_model import Book
from app.models.review_model import Review


class FakeBookRepository:
    """
    A fake book repository that uses an in-memory list for testing.
    It mimics the interface of the real BookRepository.
    """

    def __init__(self, initial_books: List[Book] = None):
        self.books = initial_books or []
        self._next_id = len(self.books) + 1
        self.list_calls = 0
        self.fail_on_create: Optional[Exception] = None

    async def get(self, db, *, obj_id: int) -> Optional[Book]:
        for book in self.books:
            if book.id == obj_id:
                return book
        return None

    async def get_by_title_and_author(
        self, db, *, title: str, author: str
    ) -> Optional[Book]:
        for book in self.books:
            if (
                book.title.lower() == title.lower()
                and book.author.lower() == author.lower()
            ):
                return book
        return None

    async def get_all_with_reviews(self, db) -> List[Book]:
        self.list_calls += 1
        return sorted(self.books, key=lambda b: b.id)

    async def create(self, db, *, obj_in: Book) -> Book:
        if self.fail_on_create is not None:
            raise self.fail_on_create
        if not obj_in.id:
            obj_in.id = self._next_id
            self._next_id += 1
        self.books.append(obj_in)
        return obj_in


class FakeReviewRepository:
    """In-memory review repository that attaches reviews to fake books."""

    def __init__(self, book_repository: FakeBookRepository):
        self.book_repository = book_repository
        self.reviews: List[Review] = []
        self._next_id = 1

    async def get(self, db, *, obj_id: int) -> Optional[Review]:
        for review in self.reviews:
            if review.id == obj_id:
                return review
        return None

    async def get_book_reviews(self, db, *, book_id: int) -> List[Review]:
        return [r for r in self.reviews if r.book_id == book_id]

    async def create(self, db, *, obj_in: Review) -> Review:
        obj_in.id = self._next_id
        self._next_id += 1
        self.reviews.append(obj_in)
        book = await self.book_repository.get(db, obj_id=obj_in.book_id)
        book.reviews.append(obj_in)
        return obj_in
