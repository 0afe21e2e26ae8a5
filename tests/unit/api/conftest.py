"""Fixtures for API unit tests: in-memory SQLite, fake provisioning lock, AsyncClient, identities."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.domain.models.identity import Identity, Role
from app.infrastructure.database.identity_repository_db import DbIdentityRepository
from app.main import app
from app.scalability.distributed_lock import DistributedLock


@pytest.fixture
def app_with_overrides(engine, session_factory, handle_cache, lock_backend):
    """App with storage, handle cache and provisioning lock overridden for testing."""
    from app.api import dependencies
    from app.infrastructure.database.session import get_db

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[dependencies.get_engine] = lambda: engine
    app.dependency_overrides[dependencies.get_handle_cache] = lambda: handle_cache
    app.dependency_overrides[dependencies.get_provisioning_lock] = lambda: DistributedLock(backend=lock_backend)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def create_identity(session_factory):
    async def _create(identity_id, role=Role.OPERATOR, allowed=()):
        async with session_factory() as session:
            return await DbIdentityRepository(session).create(
                Identity(identity_id=identity_id, role=role, allowed_partition_ids=tuple(allowed))
            )

    return _create