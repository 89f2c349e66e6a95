import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.db import base  # noqa: F401

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and the session factory for the durable store.

    ``connect`` and ``disconnect`` are called from the application
    lifespan; request handlers only ever see sessions.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        create_tables: bool = True,
    ):
        self.url = url
        self.echo = echo
        self.create_tables = create_tables
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        if self.engine is not None:
            return

        engine_kwargs = {"echo": self.echo}
        if self.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url:
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_async_engine(self.url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )

        self._session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

        if self.create_tables:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        self._logger.info("Database connected successfully")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        self._logger.info("Database disconnected")

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            self._logger.warning("Database ping failed", exc_info=True)
            return False

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session() as session:
            yield session


db = Database(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    create_tables=settings.DB_CREATE_TABLES,
)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    database: Database = request.app.state.database
    async for session in database.get_session():
        yield session
