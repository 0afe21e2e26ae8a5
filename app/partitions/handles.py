"""Partition handle cache: one SQLAlchemy Table per (logical database, partition name)."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from sqlalchemy import MetaData, Table

from app.infrastructure.database.models import build_record_table
from app.partitions.exceptions import InvalidPartitionNameError

logger = logging.getLogger(__name__)

TableFactory = Callable[..., Table]


@dataclass(frozen=True)
class PartitionHandle:
    """Reusable handle for querying and mutating one partition."""

    logical_database: Optional[str]
    partition_id: str
    table: Table


class PartitionHandleCache:
    """
    Materialize-once cache of partition handles. Concurrent first access for the
    same key converges on a single handle; each handle owns its own MetaData so a
    partition name may exist under several logical databases without collision.
    No eviction: handle count is bounded by the number of partitions.
    """

    def __init__(self, table_factory: TableFactory = build_record_table) -> None:
        self._table_factory = table_factory
        self._handles: Dict[Tuple[str, str], PartitionHandle] = {}
        self._lock = threading.Lock()

    def handle_for(self, logical_database: Optional[str], partition_name: str) -> PartitionHandle:
        name = partition_name.strip() if isinstance(partition_name, str) else ""
        if not name:
            raise InvalidPartitionNameError("Partition name is required for a partition handle")
        key = (logical_database or "", name)

        handle = self._handles.get(key)
        if handle is not None:
            return handle

        with self._lock:
            handle = self._handles.get(key)
            if handle is None:
                table = self._table_factory(name, MetaData(), schema=logical_database or None)
                handle = PartitionHandle(
                    logical_database=logical_database or None,
                    partition_id=name,
                    table=table,
                )
                self._handles[key] = handle
                logger.debug(
                    "partition_handle_materialized",
                    extra={"logical_database": logical_database, "partition": name},
                )
        return handle

    def size(self) -> int:
        return len(self._handles)

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()
