# app/infrastructure/cache/redis_client.py

from typing import Optional

import redis.asyncio as redis

from app.config.settings import settings


class RedisClient:
    """Thin async Redis wrapper. Implements the RedisLockBackend protocol."""

    def __init__(self, url: Optional[str] = None):
        self.client = redis.from_url(
            url or settings.redis_url,
            decode_responses=True,
        )

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool:
        """Set key to value only if not exists, with TTL. Returns True if key was set."""
        return bool(await self.client.set(key, value, nx=True, ex=ttl))

    async def get(self, key: str) -> str | None:
        """Get value for key. Returns None if key does not exist."""
        return await self.client.get(key)

    async def delete_if_value(self, key: str, value: str) -> bool:
        """Delete key only if its value equals value (atomic). Returns True if deleted."""
        script = "if redis.call('get', KEYS[1]) == ARGV[1] then return redis.call('del', KEYS[1]) else return 0 end"
        result = await self.client.eval(script, 1, key, value)
        return bool(result)

    async def close(self) -> None:
        await self.client.aclose()
