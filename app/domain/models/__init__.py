from app.domain.models.identity import Identity, Role
from app.domain.models.sync import (
    BulkUpsertResult,
    ExportPage,
    FailedChange,
    FailureReason,
    SyncChange,
    SyncOperation,
)

__all__ = [
    "Identity",
    "Role",
    "BulkUpsertResult",
    "ExportPage",
    "FailedChange",
    "FailureReason",
    "SyncChange",
    "SyncOperation",
]
