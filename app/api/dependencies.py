"""FastAPI dependency injection: engine, sessions, partition components, services, identity."""

import logging
from typing import Annotated, Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.application.exceptions import IdentityNotFoundError
from app.application.sync_service import SyncService
from app.application.tenant_service import TenantService
from app.config.settings import get_settings
from app.core.context import partition_id_ctx
from app.domain.models.identity import Identity
from app.infrastructure.cache.redis_client import RedisClient
from app.infrastructure.database.identity_repository_db import DbIdentityRepository
from app.infrastructure.database.session import engine, get_db
from app.partitions.catalog import PartitionCatalog
from app.partitions.handles import PartitionHandleCache
from app.partitions.provisioner import PartitionProvisioner
from app.partitions.router import PartitionSelection, TenantRouter
from app.scalability.distributed_lock import DistributedLock
from app.security.rbac import RBACService

# Query parameters that carry an explicit partition selection, in priority order.
# databaseId, database and collection are sent by older field clients.
PARTITION_QUERY_PARAMS = ("partitionId", "databaseId", "database", "collection")

_handle_cache: PartitionHandleCache | None = None
_redis_client: RedisClient | None = None


def get_handle_cache() -> PartitionHandleCache:
    """Return the process-wide partition handle cache."""
    global _handle_cache
    if _handle_cache is None:
        _handle_cache = PartitionHandleCache()
    return _handle_cache


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


def get_engine() -> AsyncEngine:
    return engine


def get_provisioning_lock(
    redis: Annotated[RedisClient, Depends(get_redis_client)],
) -> Optional[DistributedLock]:
    if not get_settings().provisioning_lock_enabled:
        return None
    return DistributedLock(backend=redis)


def get_partition_catalog(
    db_engine: Annotated[AsyncEngine, Depends(get_engine)],
) -> PartitionCatalog:
    settings = get_settings()
    return PartitionCatalog(
        db_engine,
        logical_database=settings.voter_database,
        reserved_prefix=settings.reserved_prefix,
    )


def get_tenant_router(
    cache: Annotated[PartitionHandleCache, Depends(get_handle_cache)],
) -> TenantRouter:
    settings = get_settings()
    return TenantRouter(
        cache,
        logical_database=settings.voter_database,
        default_partition=settings.default_partition,
        reserved_prefix=settings.reserved_prefix,
    )


def get_provisioner(
    db_engine: Annotated[AsyncEngine, Depends(get_engine)],
    cache: Annotated[PartitionHandleCache, Depends(get_handle_cache)],
    lock: Annotated[Optional[DistributedLock], Depends(get_provisioning_lock)],
) -> PartitionProvisioner:
    settings = get_settings()
    return PartitionProvisioner(
        db_engine,
        cache,
        logical_database=settings.voter_database,
        reserved_prefix=settings.reserved_prefix,
        lock=lock,
        lock_ttl_seconds=settings.provisioning_lock_ttl_seconds,
    )


def get_sync_service(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> SyncService:
    """Build SyncService on the request session with configured page bounds."""
    settings = get_settings()
    return SyncService(
        session=session,
        logger=logging.getLogger("app.application.sync_service"),
        default_page_size=settings.export_default_page_size,
        min_page_size=settings.export_min_page_size,
        max_page_size=settings.export_max_page_size,
    )


def get_tenant_service(
    session: Annotated[AsyncSession, Depends(get_db)],
    provisioner: Annotated[PartitionProvisioner, Depends(get_provisioner)],
    catalog: Annotated[PartitionCatalog, Depends(get_partition_catalog)],
) -> TenantService:
    return TenantService(
        identities=DbIdentityRepository(session),
        provisioner=provisioner,
        catalog=catalog,
        logger=logging.getLogger("app.application.tenant_service"),
        reserved_prefix=get_settings().reserved_prefix,
    )


async def get_identity(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db)],
) -> Identity:
    """Load the caller identity named by X-Identity-ID (set on request.state by middleware)."""
    identity_id = request.state.identity_id
    identity = await DbIdentityRepository(session).get(identity_id)
    if identity is None:
        raise IdentityNotFoundError(f"Unknown identity '{identity_id}'")
    return identity


def require_action(action: str) -> Callable[..., Identity]:
    """Dependency factory: the caller identity, after an RBAC check for action."""

    def _checked(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        RBACService().check_permission(identity.role, action)
        return identity

    return _checked


def extract_requested_partition(request: Request, *body_values: Optional[str]) -> Optional[str]:
    """First non-blank explicit selection: query parameters, then body values."""
    candidates = [request.query_params.get(name) for name in PARTITION_QUERY_PARAMS]
    candidates.extend(body_values)
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate
    return None


def bind_partition(request: Request, selection: PartitionSelection) -> None:
    """Expose the resolved partition to audit logging."""
    request.state.partition_id = selection.partition_id
    partition_id_ctx.set(selection.partition_id)

