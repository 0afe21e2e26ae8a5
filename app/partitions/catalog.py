"""Partition catalog: enumerate partition tables of a logical database."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from app.partitions.exceptions import PartitionUnavailableError
from app.partitions.naming import display_name, is_private_partition_name, is_reserved_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionInfo:
    id: str
    display_name: str


async def table_exists(conn: AsyncConnection, name: str, schema: Optional[str] = None) -> bool:
    return await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(name, schema=schema))


async def table_names(conn: AsyncConnection, schema: Optional[str] = None) -> List[str]:
    return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names(schema=schema))


class PartitionCatalog:
    """Lists partitions. Selectable listings hide reserved and tenant-private names."""

    def __init__(
        self,
        engine: AsyncEngine,
        logical_database: Optional[str] = None,
        reserved_prefix: str = "system_",
    ) -> None:
        self._engine = engine
        self._logical_database = logical_database
        self._reserved_prefix = reserved_prefix

    async def list_partition_names(self) -> List[str]:
        """All tables of the logical database, sorted. Raises PartitionUnavailableError."""
        try:
            async with self._engine.connect() as conn:
                names = await table_names(conn, self._logical_database)
        except (SQLAlchemyError, OSError) as e:
            raise PartitionUnavailableError(f"Partition catalog unavailable: {e}") from e
        return sorted(names)

    async def exists(self, name: str) -> bool:
        try:
            async with self._engine.connect() as conn:
                return await table_exists(conn, name, self._logical_database)
        except (SQLAlchemyError, OSError) as e:
            raise PartitionUnavailableError(f"Partition catalog unavailable: {e}") from e

    def is_selectable(self, name: str) -> bool:
        return not is_reserved_name(name, self._reserved_prefix) and not is_private_partition_name(name)

    async def list_selectable(self) -> List[PartitionInfo]:
        """
        Master partitions a caller may pick. Returns [] when the store is unreachable;
        callers must read an empty result as "unknown", not "none exist".
        """
        try:
            names = await self.list_partition_names()
        except PartitionUnavailableError as e:
            logger.warning("partition_catalog_unavailable", extra={"error": e.message})
            return []
        return [
            PartitionInfo(id=name, display_name=display_name(name))
            for name in names
            if self.is_selectable(name)
        ]
