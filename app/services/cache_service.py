import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Optional, TypeVar

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from app.db.redis_conn import RedisConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """
    Outcome of a single cache call.

    ``ok`` is False when the backend failed; ``skipped`` is True when no
    call was made because the cache is disabled or unreachable. Callers
    branch on these flags instead of catching exceptions.
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[BaseException] = None
    skipped: bool = False

    @classmethod
    def success(cls, value: Optional[T] = None) -> "CacheResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "CacheResult[T]":
        return cls(ok=False, error=error)

    @classmethod
    def unavailable(cls) -> "CacheResult[T]":
        return cls(ok=False, skipped=True)


class CacheService:
    """
    A thin Result-returning wrapper around the Redis client.

    Every call is bounded by ``operation_timeout`` and never raises.
    """

    def __init__(
        self,
        connection: RedisConnection,
        *,
        enabled: bool = True,
        operation_timeout: float = 1.0,
    ):
        self.connection = connection
        self.enabled = enabled
        self.operation_timeout = operation_timeout
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def get(self, key: str) -> CacheResult[str]:
        if not await self._usable():
            return CacheResult.unavailable()
        return await self._run("get", key, self.connection.client.get(key))

    async def set(self, key: str, value: str, *, ttl: int) -> CacheResult[None]:
        if not await self._usable():
            return CacheResult.unavailable()
        return await self._run(
            "set", key, self.connection.client.set(key, value, ex=ttl)
        )

    async def delete(self, key: str) -> CacheResult[int]:
        if not await self._usable():
            return CacheResult.unavailable()
        return await self._run("delete", key, self.connection.client.delete(key))

    async def _usable(self) -> bool:
        return self.enabled and await self.connection.available()

    async def _run(self, op: str, key: str, call: Awaitable[Any]) -> CacheResult:
        try:
            value = await asyncio.wait_for(call, timeout=self.operation_timeout)
        except (asyncio.TimeoutError, RedisTimeoutError, RedisConnectionError) as e:
            self.connection.mark_unavailable(e)
            self._logger.warning(
                f"Cache {op} failed for key: {key} ({e.__class__.__name__})"
            )
            return CacheResult.failure(e)
        except RedisError as e:
            self._logger.warning(f"Cache {op} failed for key: {key}", exc_info=True)
            return CacheResult.failure(e)
        return CacheResult.success(value)
