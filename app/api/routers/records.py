"""Records sync API: GET /records (paginated export), POST /records/bulk-upsert."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.api.dependencies import (
    bind_partition,
    extract_requested_partition,
    get_sync_service,
    get_tenant_router,
    require_action,
)
from app.application.sync_service import SyncService
from app.domain.exceptions import DomainValidationError
from app.domain.models.identity import Identity
from app.domain.schemas.sync import BulkUpsertRequest, BulkUpsertResponse, ExportResponse
from app.domain.validators.sync_validator import parse_client_timestamp
from app.partitions.router import TenantRouter

router = APIRouter()


@router.get("", response_model=ExportResponse)
async def export_records(
    request: Request,
    identity: Annotated[Identity, Depends(require_action("export"))],
    tenant_router: Annotated[TenantRouter, Depends(get_tenant_router)],
    sync_service: Annotated[SyncService, Depends(get_sync_service)],
    page: int = 1,
    limit: Optional[int] = None,
    since_updated_at: Annotated[Optional[str], Query(alias="sinceUpdatedAt")] = None,
):
    """One export page. Clients store serverTime as the next cursor only after persisting the page."""
    since = None
    if since_updated_at:
        since = parse_client_timestamp(since_updated_at)
        if since is None:
            raise DomainValidationError("sinceUpdatedAt must be an ISO-8601 timestamp")

    selection = tenant_router.resolve(identity, extract_requested_partition(request))
    bind_partition(request, selection)

    export_page = await sync_service.export(selection, page=page, limit=limit, since=since)
    return ExportResponse.from_page(export_page)


@router.post("/bulk-upsert", response_model=BulkUpsertResponse)
async def bulk_upsert_records(
    request: Request,
    body: BulkUpsertRequest,
    identity: Annotated[Identity, Depends(require_action("bulk_upsert"))],
    tenant_router: Annotated[TenantRouter, Depends(get_tenant_router)],
    sync_service: Annotated[SyncService, Depends(get_sync_service)],
):
    """Push client edits. The partition must be named explicitly."""
    requested = extract_requested_partition(request, body.partition_id, body.database_id, body.collection)
    selection = tenant_router.resolve(identity, requested, require_explicit=True)
    bind_partition(request, selection)

    result = await sync_service.bulk_upsert(selection, body.changes)
    return BulkUpsertResponse.from_result(result, selection.partition_id)
