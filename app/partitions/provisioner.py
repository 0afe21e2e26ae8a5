"""
Partition provisioner: the only writer of partition existence.

clone() copies a master into a new partition with a single INSERT ... SELECT
executed by the database inside the same transaction that creates the target
table, so the target is either fully populated or absent. Both clone() and
drop() are idempotent; retrying after a timeout is the recovery path.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, List, Optional

from redis.exceptions import RedisError
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.infrastructure.database.session import begin_transactional_ddl
from app.partitions.catalog import table_exists
from app.partitions.exceptions import (
    InvalidPartitionNameError,
    InvalidSourceError,
    PartitionUnavailableError,
    ProvisioningInProgressError,
)
from app.partitions.handles import PartitionHandleCache
from app.partitions.naming import (
    is_valid_tenant_key,
    parse_private_partition_name,
    private_partition_name,
    sanitize_partition_name,
)
from app.scalability.distributed_lock import DistributedLock

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TTL_SECONDS = 600


class PartitionProvisioner:
    """Create, clone and drop partitions. Long-running; keep off deadline-sensitive paths."""

    def __init__(
        self,
        engine: AsyncEngine,
        handle_cache: PartitionHandleCache,
        logical_database: Optional[str] = None,
        reserved_prefix: str = "system_",
        lock: Optional[DistributedLock] = None,
        lock_ttl_seconds: int = DEFAULT_LOCK_TTL_SECONDS,
    ) -> None:
        self._engine = engine
        self._handles = handle_cache
        self._logical_database = logical_database
        self._reserved_prefix = reserved_prefix
        self._lock = lock
        self._lock_ttl = lock_ttl_seconds

    def _name(self, value: str) -> str:
        name = sanitize_partition_name(value, self._reserved_prefix)
        if not name:
            raise InvalidPartitionNameError(f"Invalid partition name: {value!r}")
        return name

    def _table(self, name: str):
        return self._handles.handle_for(self._logical_database, name).table

    @asynccontextmanager
    async def _guard(self, name: str) -> AsyncIterator[None]:
        if self._lock is None:
            yield
            return
        key = f"partition:{self._logical_database or ''}:{name}"
        try:
            token = await self._lock.acquire(key, self._lock_ttl)
        except (RedisError, OSError) as e:
            raise PartitionUnavailableError(f"Provisioning lock unavailable: {e}") from e
        if token is None:
            raise ProvisioningInProgressError(
                f"Partition '{name}' is being provisioned by another worker"
            )
        try:
            yield
        finally:
            try:
                await self._lock.release(key, token)
            except (RedisError, OSError) as e:
                # Left to expire with its TTL.
                logger.warning(
                    "provisioning_lock_release_failed",
                    extra={"partition": name, "error": str(e)},
                )

    async def clone(self, master_name: str, target_name: str) -> bool:
        """
        Copy every record of master_name into a new partition target_name.
        Returns True if the target was created, False if it already existed.
        Raises InvalidSourceError if the master does not exist.
        """
        master = sanitize_partition_name(master_name, self._reserved_prefix)
        if not master:
            raise InvalidSourceError(f"Invalid master partition: {master_name!r}")
        target = self._name(target_name)
        if master == target:
            raise InvalidPartitionNameError("Clone target must differ from its master")

        async with self._guard(target):
            try:
                async with self._engine.begin() as conn:
                    await begin_transactional_ddl(conn)
                    if not await table_exists(conn, master, self._logical_database):
                        raise InvalidSourceError(f"Master partition '{master}' does not exist")
                    if await table_exists(conn, target, self._logical_database):
                        logger.info(
                            "partition_clone_skipped",
                            extra={"master": master, "target": target},
                        )
                        return False

                    source_table = self._table(master)
                    target_table = self._table(target)
                    await conn.run_sync(target_table.create)
                    columns = [column.name for column in target_table.columns]
                    await conn.execute(
                        insert(target_table).from_select(
                            columns,
                            select(*[source_table.c[name] for name in columns]),
                        )
                    )
            except SQLAlchemyError as e:
                logger.error(
                    "partition_clone_failed",
                    extra={"master": master, "target": target, "error": str(e)},
                )
                raise PartitionUnavailableError(f"Clone of '{master}' into '{target}' failed: {e}") from e

        logger.info("partition_cloned", extra={"master": master, "target": target})
        return True

    async def drop(self, partition_name: str) -> bool:
        """Delete a partition and all its records. Returns False if it did not exist."""
        name = self._name(partition_name)
        async with self._guard(name):
            try:
                async with self._engine.begin() as conn:
                    if not await table_exists(conn, name, self._logical_database):
                        logger.info("partition_drop_skipped", extra={"partition": name})
                        return False
                    await conn.run_sync(self._table(name).drop)
            except SQLAlchemyError as e:
                logger.error("partition_drop_failed", extra={"partition": name, "error": str(e)})
                raise PartitionUnavailableError(f"Drop of '{name}' failed: {e}") from e

        logger.info("partition_dropped", extra={"partition": name})
        return True

    async def ensure_partition(self, partition_name: str) -> bool:
        """Create an empty partition if missing. Returns True if it was created."""
        name = self._name(partition_name)
        try:
            async with self._engine.begin() as conn:
                if await table_exists(conn, name, self._logical_database):
                    return False
                await conn.run_sync(self._table(name).create)
        except SQLAlchemyError as e:
            raise PartitionUnavailableError(f"Create of '{name}' failed: {e}") from e
        logger.info("partition_created", extra={"partition": name})
        return True

    async def clone_for_tenant(self, tenant_key: str, master_name: str) -> str:
        """Clone master_name into the tenant's private partition; returns its name."""
        target = private_partition_name(tenant_key, master_name)
        await self.clone(master_name, target)
        return target

    async def drop_tenant_partitions(self, tenant_key: str, partition_names: Iterable[str]) -> List[str]:
        """Drop every name in partition_names that is a private partition of tenant_key."""
        if not is_valid_tenant_key(tenant_key):
            # Such identities cannot own private partitions.
            return []
        key = tenant_key.strip()
        dropped: List[str] = []
        for name in dict.fromkeys(partition_names):
            parsed = parse_private_partition_name(name)
            if parsed is None or parsed[0] != key:
                continue
            if await self.drop(name):
                dropped.append(name)
        return dropped
