import asyncio
import logging
import time
from typing import Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)


class RedisConnection:
    """
    Holds the process-wide Redis client and tracks whether it is usable.

    The cache is optional: a failed connect leaves the connection marked
    as not ready and the application keeps running. ``available`` probes
    a not-ready connection again, at most once per ``reconnect_interval``.
    """

    def __init__(
        self,
        url: str,
        *,
        socket_timeout: float = 1.0,
        connect_timeout: float = 1.0,
        reconnect_interval: float = 5.0,
        client: Optional[aioredis.Redis] = None,
    ):
        self.url = url
        self.socket_timeout = socket_timeout
        self.connect_timeout = connect_timeout
        self.reconnect_interval = reconnect_interval
        self.client: Optional[aioredis.Redis] = client
        self._ready = False
        self._last_probe = 0.0
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def is_ready(self) -> bool:
        return self.client is not None and self._ready

    async def connect(self) -> None:
        if self.client is None:
            self.client = aioredis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.connect_timeout,
            )
        if await self._probe():
            self._logger.info("Redis connected successfully")
        else:
            self._logger.warning(
                "Redis unavailable at startup, continuing without cache"
            )

    async def close(self) -> None:
        if self.client is None:
            return
        try:
            await self.client.aclose()
        except RedisError:
            self._logger.warning("Error while closing Redis client", exc_info=True)
        finally:
            self.client = None
            self._ready = False
            self._logger.info("Redis disconnected")

    async def available(self) -> bool:
        """Return True when the cache may be used for the current request."""
        if self.client is None:
            return False
        if self._ready:
            return True
        if time.monotonic() - self._last_probe < self.reconnect_interval:
            return False
        return await self._probe()

    def mark_unavailable(self, reason: Optional[BaseException] = None) -> None:
        if self._ready:
            self._logger.warning(f"Redis marked unavailable: {reason!r}")
        self._ready = False
        self._last_probe = time.monotonic()

    async def _probe(self) -> bool:
        self._last_probe = time.monotonic()
        try:
            await asyncio.wait_for(
                self.client.ping(), timeout=self.connect_timeout + self.socket_timeout
            )
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            self._logger.warning(f"Redis ping failed: {e!r}")
            self._ready = False
            return False
        if not self._ready:
            self._logger.info("Redis is ready")
        self._ready = True
        return True


redis_connection = RedisConnection(
    settings.REDIS_URL,
    socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
    connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
    reconnect_interval=settings.REDIS_RECONNECT_INTERVAL,
)
