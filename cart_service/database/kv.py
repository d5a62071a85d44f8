"""
Key-value backends for cart records.

The cart store only needs get / set-with-TTL / delete, so backends are
hidden behind that narrow interface. Backend faults surface as
StoreUnavailableError; a missing key is None, never an error.
"""

import logging
import time
from datetime import timedelta
from typing import Callable, Optional, Protocol, Union

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from shared.errors import StoreUnavailableError


class KeyValueClient(Protocol):
    """Minimal async key-value interface used by the cart store"""

    async def get(self, key: str) -> Optional[Union[str, bytes]]:
        ...

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def close(self) -> None:
        ...


class RedisKeyValueClient:
    """Redis-backed key-value client"""

    def __init__(self, redis: aioredis.Redis, logger: Optional[logging.Logger] = None):
        self._redis = redis
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_url(
        cls,
        url: str,
        logger: Optional[logging.Logger] = None,
        connect_timeout: float = 5.0,
        socket_timeout: float = 3.0,
    ) -> "RedisKeyValueClient":
        """Create client from a redis:// URL. Connections are opened lazily."""
        redis = aioredis.from_url(
            url,
            socket_connect_timeout=connect_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(redis, logger=logger)

    async def get(self, key: str) -> Optional[bytes]:
        """Raw record bytes; decoding is left to the caller"""
        try:
            return await self._redis.get(key)
        except RedisError as e:
            self.logger.error(f"Redis GET {key} failed: {e}")
            raise StoreUnavailableError(f"Failed to read {key}: {e}") from e

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        try:
            await self._redis.set(key, value, ex=ttl)
        except RedisError as e:
            self.logger.error(f"Redis SET {key} failed: {e}")
            raise StoreUnavailableError(f"Failed to write {key}: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as e:
            self.logger.error(f"Redis DEL {key} failed: {e}")
            raise StoreUnavailableError(f"Failed to delete {key}: {e}") from e

    async def close(self) -> None:
        self.logger.info("Closing Redis connection")
        await self._redis.aclose()


class InMemoryKeyValueClient:
    """
    Process-local key-value store with per-key expiry.

    Used for local development and tests. Expired keys are dropped on read,
    and writes sweep out every expired key at most once per sweep_interval.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ):
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}
        self.sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)
        self._data[key] = (value, now + ttl.total_seconds())

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def close(self) -> None:
        self._data.clear()

    def _sweep(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._data.items() if now >= expires_at]
        for key in expired:
            del self._data[key]
        self._next_sweep = now + self.sweep_interval

    def ttl(self, key: str) -> Optional[float]:
        """Seconds until key expires, or None if absent"""
        entry = self._data.get(key)
        if entry is None:
            return None
        remaining = entry[1] - self._clock()
        return remaining if remaining > 0 else None
