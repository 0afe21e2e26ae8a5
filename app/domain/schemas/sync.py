"""Pydantic schemas for the sync API. Wire names are camelCase for the field clients."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domain.models.sync import BulkUpsertResult, ExportPage


class ExportResponse(BaseModel):
    """One page of an incremental export."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[Dict[str, Any]]
    has_more: bool = Field(..., alias="hasMore")
    server_time: datetime = Field(..., alias="serverTime", description="Use as the next sinceUpdatedAt cursor")
    page: int = Field(..., ge=1)
    count: int = Field(..., ge=0, description="Total records matching the since filter")
    partition_id: str = Field(..., alias="partitionId")

    @classmethod
    def from_page(cls, page: ExportPage) -> "ExportResponse":
        return cls(
            items=page.items,
            has_more=page.has_more,
            server_time=page.server_time,
            page=page.page,
            count=page.count,
            partition_id=page.partition_id,
        )


class BulkUpsertRequest(BaseModel):
    """Batch of client edits. Entries stay untyped so one malformed change cannot reject the batch."""

    model_config = ConfigDict(populate_by_name=True)

    partition_id: Optional[str] = Field(None, alias="partitionId")
    database_id: Optional[str] = Field(None, alias="databaseId", description="Legacy alias of partitionId")
    collection: Optional[str] = Field(None, description="Legacy alias of partitionId")
    changes: List[Any] = Field(default_factory=list)


class FailedChangeResponse(BaseModel):
    id: Optional[str] = None
    reason: str


class BulkUpsertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success_ids: List[str] = Field(default_factory=list, alias="successIds")
    failed: List[FailedChangeResponse] = Field(default_factory=list)
    partition_id: str = Field(..., alias="partitionId")

    @classmethod
    def from_result(cls, result: BulkUpsertResult, partition_id: str) -> "BulkUpsertResponse":
        return cls(
            success_ids=list(result.success_ids),
            failed=[FailedChangeResponse(id=f.record_id, reason=f.reason.value) for f in result.failed],
            partition_id=partition_id,
        )
