"""Sync engine: incremental export (pull) and last-write-wins bulk upsert (push)."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from sqlalchemy import Table, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import BadChangeError, DomainValidationError
from app.domain.models.record import (
    CANONICAL_FIELDS,
    RAW_FIELD,
    RAW_FIELD_ALIASES,
    SERVER_MANAGED_FIELDS,
)
from app.domain.models.sync import (
    BulkUpsertResult,
    ExportPage,
    FailedChange,
    FailureReason,
    SyncChange,
)
from app.domain.validators.sync_validator import change_identifier, parse_sync_change
from app.infrastructure.database.types import utcnow
from app.partitions.exceptions import PartitionUnavailableError
from app.partitions.router import PartitionSelection

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ChangeOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    # Older than the stored row; reported to the client as a success.
    DROPPED = "dropped"


def build_column_values(
    payload: Mapping[str, Any],
    existing_raw: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Shallow-merge a client payload into column values. Canonical keys set their
    column, `raw`/`__raw` replaces the raw bag, any other key is merged into the
    raw bag. Server-managed keys are ignored.
    """
    values: Dict[str, Any] = {}
    raw_bag: Optional[Dict[str, Any]] = None

    for alias in RAW_FIELD_ALIASES:
        if alias not in payload:
            continue
        replacement = payload[alias]
        if replacement is not None and not isinstance(replacement, Mapping):
            raise DomainValidationError(f"{alias} must be an object")
        raw_bag = dict(replacement or {})

    for key, value in payload.items():
        if key in SERVER_MANAGED_FIELDS or key in RAW_FIELD_ALIASES:
            continue
        if key in CANONICAL_FIELDS:
            if isinstance(value, (dict, list)):
                raise DomainValidationError(f"{key} must be a scalar value")
            values[key] = None if value is None else str(value)
            continue
        if raw_bag is None:
            raw_bag = dict(existing_raw or {})
        raw_bag[key] = value

    if raw_bag is not None:
        values[RAW_FIELD] = raw_bag
    return values


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def row_to_item(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: _serialize(value) for key, value in row.items()}


class SyncService:
    """
    Pull: pages ordered by id, optionally filtered by updated_at > since.
    Push: each change resolved on its own; no cross-change transaction, no record locks.
    """

    def __init__(
        self,
        session: AsyncSession,
        logger: logging.Logger,
        default_page_size: int = 5000,
        min_page_size: int = 1,
        max_page_size: int = 20000,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session = session
        self._logger = logger
        self._default_page_size = default_page_size
        self._min_page_size = min_page_size
        self._max_page_size = max_page_size
        self._clock = clock

    def clamp_page_size(self, limit: Optional[int]) -> int:
        size = self._default_page_size if limit is None else limit
        return min(max(size, self._min_page_size), self._max_page_size)

    async def export(
        self,
        selection: PartitionSelection,
        page: int = 1,
        limit: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> ExportPage:
        """Return one page. Pages past the end are empty with has_more=False."""
        page = max(page or 1, 1)
        limit = self.clamp_page_size(limit)
        skip = (page - 1) * limit
        table = selection.handle.table

        # Captured before reading so rows written during the read land after the next cursor.
        server_time = self._clock()

        rows_stmt = select(table).order_by(table.c.id).offset(skip).limit(limit)
        count_stmt = select(func.count()).select_from(table)
        if since is not None:
            rows_stmt = rows_stmt.where(table.c.updated_at > since)
            count_stmt = count_stmt.where(table.c.updated_at > since)

        try:
            rows = (await self._session.execute(rows_stmt)).mappings().all()
            count = (await self._session.execute(count_stmt)).scalar_one()
        except SQLAlchemyError as e:
            self._logger.error(
                "export_failed",
                extra={"partition": selection.partition_id, "error": str(e)},
            )
            raise PartitionUnavailableError(
                f"Unable to read voter partition '{selection.partition_id}'"
            ) from e
        items = [row_to_item(row) for row in rows]

        self._logger.info(
            "export_page_served",
            extra={
                "partition": selection.partition_id,
                "page": page,
                "limit": limit,
                "returned": len(items),
                "count": count,
            },
        )
        return ExportPage(
            items=items,
            has_more=skip + len(items) < count,
            server_time=server_time,
            page=page,
            count=count,
            partition_id=selection.partition_id,
        )

    async def bulk_upsert(self, selection: PartitionSelection, changes: Sequence[Any]) -> BulkUpsertResult:
        """Apply changes one by one. Failures are collected; they never abort the batch."""
        result = BulkUpsertResult()
        table = selection.handle.table
        dropped = 0

        for raw in changes or ():
            try:
                change = parse_sync_change(raw)
            except BadChangeError as e:
                self._logger.warning(
                    "sync_change_rejected",
                    extra={"partition": selection.partition_id, "error": e.message},
                )
                result.failed.append(FailedChange(change_identifier(raw), FailureReason.BAD_CHANGE))
                continue

            try:
                outcome = await self._apply(table, change)
                await self._session.commit()
            except Exception as e:
                await self._session.rollback()
                self._logger.error(
                    "sync_change_failed",
                    extra={
                        "partition": selection.partition_id,
                        "record_id": change.record_id,
                        "error": str(e),
                    },
                )
                result.failed.append(FailedChange(change.record_id, FailureReason.EXCEPTION))
                continue

            if outcome == ChangeOutcome.DROPPED:
                dropped += 1
            result.success_ids.append(change.record_id)

        self._logger.info(
            "bulk_upsert_completed",
            extra={
                "partition": selection.partition_id,
                "succeeded": len(result.success_ids),
                "failed": len(result.failed),
                "conflicts_dropped": dropped,
            },
        )
        return result

    async def _apply(self, table: Table, change: SyncChange) -> ChangeOutcome:
        stmt = select(table).where(table.c.id == change.record_id)
        stored = (await self._session.execute(stmt)).mappings().one_or_none()
        now = self._clock()

        if stored is None:
            values = build_column_values(change.payload)
            await self._session.execute(
                insert(table).values(id=change.record_id, created_at=now, updated_at=now, **values)
            )
            return ChangeOutcome.CREATED

        client_ts = change.updated_at or EPOCH
        stored_ts = stored["updated_at"] or EPOCH
        if client_ts < stored_ts:
            return ChangeOutcome.DROPPED

        values = build_column_values(change.payload, stored["raw"])
        await self._session.execute(
            update(table).where(table.c.id == change.record_id).values(updated_at=now, **values)
        )
        return ChangeOutcome.UPDATED
