from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.redis_conn import RedisConnection
from app.db.session import Database
from app.main import create_application
from tests.mocks.mock_redis import FakeRedis, UnreachableRedis

# --- Test Database Setup ---
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# --- Pytest Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """A fresh in-memory database per test, tables created on connect."""
    database = Database(TEST_DATABASE_URL, create_tables=True)
    await database.connect()
    yield database
    await database.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provides a session bound to the per-test database."""
    async with database.session() as session:
        yield session


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def unreachable_redis() -> UnreachableRedis:
    return UnreachableRedis()


async def _make_client(
    database: Database, redis_client
) -> AsyncGenerator[AsyncClient, None]:
    redis = RedisConnection("redis://fake", client=redis_client)
    await redis.connect()

    app = create_application(database=database, redis=redis)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    await redis.close()


@pytest_asyncio.fixture(scope="function")
async def test_client(
    database: Database, fake_redis: FakeRedis
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app whose cache is up."""
    async for client in _make_client(database, fake_redis):
        yield client


@pytest_asyncio.fixture(scope="function")
async def cacheless_client(
    unreachable_redis: UnreachableRedis,
) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for an app whose cache server cannot be reached.
    It gets its own database so it can run next to ``test_client``.
    """
    database = Database(TEST_DATABASE_URL, create_tables=True)
    await database.connect()
    async for client in _make_client(database, unreachable_redis):
        yield client
    await database.disconnect()
