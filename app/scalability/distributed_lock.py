"""Redis-based distributed locking. SETNX pattern, TTL, safe release. Serializes partition provisioning across nodes."""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol


class RedisLockBackend(Protocol):
    """Minimal Redis operations for distributed lock. Injected; no global state."""

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool: ...
    async def get(self, key: str) -> str | None: ...
    async def delete_if_value(self, key: str, value: str) -> bool: ...


LOCK_PREFIX = "lock:"


class LockNotAcquiredError(Exception):
    """Raised by DistributedLock.held() when another holder owns the key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Lock already held: {key}")


class DistributedLock:
    """
    Distributed lock using Redis SET NX EX. Safe in concurrent async environment.
    A unique token per acquire means only the holder can release. Non-blocking:
    a held lock is reported, never waited on.
    """

    def __init__(self, backend: RedisLockBackend, key_prefix: str = LOCK_PREFIX) -> None:
        self._backend = backend
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def acquire(self, key: str, ttl: int) -> str | None:
        """Try to acquire the lock. Returns the holder token, or None if already held."""
        token = str(uuid.uuid4())
        acquired = await self._backend.set_nx_ex(self._key(key), token, ttl)
        return token if acquired else None

    async def release(self, key: str, token: str) -> bool:
        """Release the lock only if token still holds it (atomic compare-and-delete)."""
        return await self._backend.delete_if_value(self._key(key), token)

    async def is_held(self, key: str) -> bool:
        return await self._backend.get(self._key(key)) is not None

    @asynccontextmanager
    async def held(self, key: str, ttl: int) -> AsyncIterator[str]:
        """Hold the lock for the block. Raises LockNotAcquiredError if taken."""
        token = await self.acquire(key, ttl)
        if token is None:
            raise LockNotAcquiredError(key)
        try:
            yield token
        finally:
            await self.release(key, token)
