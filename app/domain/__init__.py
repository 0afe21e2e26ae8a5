"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from app.domain.exceptions import (
    BadChangeError,
    DomainError,
    DomainValidationError,
    InvalidTenantKeyError,
)
from app.domain.models import (
    BulkUpsertResult,
    ExportPage,
    FailedChange,
    FailureReason,
    Identity,
    Role,
    SyncChange,
    SyncOperation,
)
from app.domain.validators import normalize_source_row, parse_client_timestamp, parse_sync_change

__all__ = [
    "BadChangeError",
    "BulkUpsertResult",
    "DomainError",
    "DomainValidationError",
    "ExportPage",
    "FailedChange",
    "FailureReason",
    "Identity",
    "InvalidTenantKeyError",
    "Role",
    "SyncChange",
    "SyncOperation",
    "normalize_source_row",
    "parse_client_timestamp",
    "parse_sync_change",
]
