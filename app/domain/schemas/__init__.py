"""Domain schemas. Request/response and validation."""

from app.domain.schemas.partition import PartitionListResponse, PartitionResponse
from app.domain.schemas.sync import (
    BulkUpsertRequest,
    BulkUpsertResponse,
    ExportResponse,
    FailedChangeResponse,
)
from app.domain.schemas.tenant import (
    TenantCreateRequest,
    TenantDeleteResponse,
    TenantResponse,
)

__all__ = [
    "BulkUpsertRequest",
    "BulkUpsertResponse",
    "ExportResponse",
    "FailedChangeResponse",
    "PartitionListResponse",
    "PartitionResponse",
    "TenantCreateRequest",
    "TenantDeleteResponse",
    "TenantResponse",
]
