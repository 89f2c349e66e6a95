import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import ResourceAlreadyExists
from app.crud.book_crud import book_repository
from app.crud.review_crud import review_repository
from app.db.session import Database
from app.models.book_model import Book
from app.models.review_model import Review
from app.scripts.seed import SAMPLE_BOOKS, SAMPLE_REVIEWS, seed_data

# Mark all tests in this file as async
pytestmark = pytest.mark.asyncio


# ==================== CREATE TESTS ====================


async def test_create_book(db_session: AsyncSession):
    book = await book_repository.create(
        db_session, obj_in=Book(title="Dune", author="Herbert")
    )

    assert book.id is not None
    assert await book_repository.get(db_session, obj_id=book.id) is not None


async def test_create_duplicate_book_violates_constraint(db_session: AsyncSession):
    await book_repository.create(db_session, obj_in=Book(title="Dune", author="Herbert"))

    with pytest.raises(ResourceAlreadyExists, match="already exists"):
        await book_repository.create(
            db_session, obj_in=Book(title="Dune", author="Herbert")
        )


async def test_create_review(db_session: AsyncSession):
    book = await book_repository.create(
        db_session, obj_in=Book(title="Dune", author="Herbert")
    )

    review = await review_repository.create(
        db_session, obj_in=Review(comment="Epic", rating=5, book_id=book.id)
    )

    assert review.id is not None
    assert review.book_id == book.id


# ==================== READ TESTS ====================


async def test_get_missing_book(db_session: AsyncSession):
    assert await book_repository.get(db_session, obj_id=999) is None


async def test_get_by_title_and_author_ignores_case(db_session: AsyncSession):
    await book_repository.create(db_session, obj_in=Book(title="Dune", author="Herbert"))

    found = await book_repository.get_by_title_and_author(
        db_session, title="DUNE", author="herbert"
    )
    missing = await book_repository.get_by_title_and_author(
        db_session, title="Dune", author="Someone Else"
    )

    assert found is not None
    assert missing is None


async def test_get_all_with_reviews(db_session: AsyncSession):
    dune = await book_repository.create(
        db_session, obj_in=Book(title="Dune", author="Herbert")
    )
    emma = await book_repository.create(
        db_session, obj_in=Book(title="Emma", author="Austen")
    )
    for comment in ("First", "Second"):
        await review_repository.create(
            db_session, obj_in=Review(comment=comment, rating=4, book_id=dune.id)
        )

    books = await book_repository.get_all_with_reviews(db_session)

    assert [b.id for b in books] == [dune.id, emma.id]
    assert [r.comment for r in books[0].reviews] == ["First", "Second"]
    assert books[1].reviews == []


async def test_get_book_reviews(db_session: AsyncSession):
    book = await book_repository.create(
        db_session, obj_in=Book(title="Dune", author="Herbert")
    )
    other = await book_repository.create(
        db_session, obj_in=Book(title="Emma", author="Austen")
    )
    await review_repository.create(
        db_session, obj_in=Review(comment="Mine", rating=3, book_id=book.id)
    )
    await review_repository.create(
        db_session, obj_in=Review(comment="Other", rating=3, book_id=other.id)
    )

    reviews = await review_repository.get_book_reviews(db_session, book_id=book.id)

    assert [r.comment for r in reviews] == ["Mine"]


# ==================== DELETE / SEED TESTS ====================


async def test_deleting_book_removes_its_reviews(db_session: AsyncSession):
    book = await book_repository.create(
        db_session, obj_in=Book(title="Dune", author="Herbert")
    )
    await review_repository.create(
        db_session, obj_in=Review(comment="Epic", rating=5, book_id=book.id)
    )

    await book_repository.delete_all(db_session)

    assert await review_repository.get_book_reviews(db_session, book_id=book.id) == []


async def test_seed_data(database: Database):
    books, reviews = await seed_data(database)
    # Seeding twice replaces rather than duplicates
    await seed_data(database)

    async with database.session() as session:
        stored = await book_repository.get_all_with_reviews(session)

    assert books == len(SAMPLE_BOOKS)
    assert reviews == len(SAMPLE_REVIEWS)
    assert len(stored) == len(SAMPLE_BOOKS)
    assert sum(len(b.reviews) for b in stored) == len(SAMPLE_REVIEWS)
