import pytest
from httpx import AsyncClient

from app.services.book_service import BOOK_LIST_CACHE_KEY
from tests.mocks.mock_redis import FakeRedis, UnreachableRedis

pytestmark = pytest.mark.asyncio


async def run_scenario(client: AsyncClient) -> list:
    """Drive the same request sequence and collect (status, body) pairs."""
    outcomes = []

    async def record(response):
        body = response.json()
        outcomes.append((response.status_code, body))
        return body

    await record(await client.get("/books"))
    book = await record(
        await client.post("/books", json={"title": "1984", "author": "Orwell"})
    )
    await record(await client.post("/books", json={"title": "1984", "author": "Orwell"}))
    await record(await client.get("/books"))
    await record(
        await client.post(
            f"/books/{book['id']}/reviews", json={"comment": "Chilling", "rating": 5}
        )
    )
    await record(
        await client.post(
            f"/books/{book['id']}/reviews", json={"comment": "Meh", "rating": 6}
        )
    )
    await record(await client.get(f"/books/{book['id']}/reviews"))
    await record(await client.get("/books/999/reviews"))
    await record(await client.get("/books/abc/reviews"))
    await record(await client.get("/books"))
    await record(await client.get("/books"))
    return outcomes


async def test_cache_down_matches_cache_up(
    test_client: AsyncClient, cacheless_client: AsyncClient
):
    with_cache = await run_scenario(test_client)
    without_cache = await run_scenario(cacheless_client)

    assert without_cache == with_cache


async def test_cache_down_serves_from_store(
    cacheless_client: AsyncClient, unreachable_redis: UnreachableRedis
):
    await cacheless_client.post("/books", json={"title": "Dune", "author": "Herbert"})

    response = await cacheless_client.get("/books")

    assert response.status_code == 200
    assert [b["title"] for b in response.json()] == ["Dune"]
    assert unreachable_redis.store == {}


async def test_cache_down_health_reports_disconnected(cacheless_client: AsyncClient):
    response = await cacheless_client.get("/health")

    assert response.status_code == 200
    assert response.json()["redis"] == "Disconnected"
    assert response.json()["database"] == "Connected"


async def test_corrupt_cache_entry_falls_back_to_store(
    test_client: AsyncClient, fake_redis: FakeRedis
):
    await test_client.post("/books", json={"title": "Dune", "author": "Herbert"})
    await fake_redis.set(BOOK_LIST_CACHE_KEY, "{not json", ex=300)

    response = await test_client.get("/books")

    assert response.status_code == 200
    assert [b["title"] for b in response.json()] == ["Dune"]
    # The corrupt entry was replaced with a fresh snapshot
    cached = await fake_redis.get(BOOK_LIST_CACHE_KEY)
    assert "Dune" in cached


async def test_stale_snapshot_is_served_until_invalidated(
    test_client: AsyncClient, fake_redis: FakeRedis
):
    await test_client.post("/books", json={"title": "Dune", "author": "Herbert"})
    await test_client.get("/books")

    # A snapshot written by someone else is served as-is: the store is not read
    await fake_redis.set(BOOK_LIST_CACHE_KEY, "[]", ex=300)

    response = await test_client.get("/books")

    assert response.json() == []
