"""Scalability helpers shared across nodes."""

from app.scalability.distributed_lock import DistributedLock, LockNotAcquiredError, RedisLockBackend

__all__ = ["DistributedLock", "LockNotAcquiredError", "RedisLockBackend"]
