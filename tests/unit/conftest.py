"""Shared fixtures: in-memory SQLite engine, partition components, record seeding."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.infrastructure.database.session import Base, build_sessionmaker
from app.partitions.catalog import PartitionCatalog
from app.partitions.handles import PartitionHandleCache
from app.partitions.provisioner import PartitionProvisioner

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def ts(minutes: int) -> datetime:
    """Deterministic timestamp T0 + minutes."""
    return T0 + timedelta(minutes=minutes)


@pytest.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def handle_cache():
    return PartitionHandleCache()


@pytest.fixture
def provisioner(engine, handle_cache):
    return PartitionProvisioner(engine, handle_cache)


@pytest.fixture
def catalog(engine):
    return PartitionCatalog(engine)


@pytest.fixture
def seed_partition(engine, handle_cache, provisioner):
    """Create a partition and insert records given as dicts (id, updated_at optional)."""

    async def _seed(name: str, records=()):
        await provisioner.ensure_partition(name)
        table = handle_cache.handle_for(None, name).table
        rows = []
        for i, record in enumerate(records):
            row = {"created_at": ts(i), "updated_at": ts(i), **record}
            rows.append(row)
        if rows:
            async with engine.begin() as conn:
                for row in rows:
                    await conn.execute(insert(table), row)
        return table

    return _seed


class FakeRedisLockBackend:
    """In-memory stand-in for the Redis SET NX EX lock operations."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._ttl: dict[str, int] = {}

    async def set_nx_ex(self, key: str, value: str, ttl: int) -> bool:
        if key in self._store:
            return False
        self._store[key] = value
        self._ttl[key] = ttl
        return True

    async def get(self, key: str) -> str | None:
        return self._store.get(key)

    async def delete_if_value(self, key: str, value: str) -> bool:
        if self._store.get(key) == value:
            del self._store[key]
            self._ttl.pop(key, None)
            return True
        return False


@pytest.fixture
def lock_backend():
    return FakeRedisLockBackend()
