# scripts/check_redis.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
from app.infrastructure.cache.redis_client import RedisClient
from app.scalability.distributed_lock import DistributedLock


async def check():
    r = RedisClient()
    lock = DistributedLock(backend=r)

    token = await lock.acquire("check:partition", ttl=30)
    second = await lock.acquire("check:partition", ttl=30)

    print("First acquire:", token is not None)
    print("Second acquire:", second is not None)
    print("Released:", await lock.release("check:partition", token))
    await r.close()

asyncio.run(check())
