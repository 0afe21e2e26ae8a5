"""Domain models for the pull/push sync protocol."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class SyncOperation(str, Enum):
    UPSERT = "upsert"


class FailureReason(str, Enum):
    BAD_CHANGE = "bad_change"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class SyncChange:
    """One client-side mutation. updated_at is None when the client omitted it or sent garbage."""

    record_id: str
    op: SyncOperation
    payload: Dict[str, Any]
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class FailedChange:
    record_id: Optional[str]
    reason: FailureReason


@dataclass
class BulkUpsertResult:
    success_ids: List[str] = field(default_factory=list)
    failed: List[FailedChange] = field(default_factory=list)


@dataclass(frozen=True)
class ExportPage:
    items: List[Dict[str, Any]]
    has_more: bool
    server_time: datetime
    page: int
    count: int
    partition_id: str
