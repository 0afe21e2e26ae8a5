"""Admin tenant lifecycle API: create and delete tenants with their private partitions."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import get_tenant_service, require_action
from app.application.tenant_service import TenantService
from app.domain.models.identity import Identity
from app.domain.schemas.tenant import TenantCreateRequest, TenantDeleteResponse, TenantResponse

router = APIRouter()


@router.post("/tenants", response_model=TenantResponse, status_code=201)
async def create_tenant(
    body: TenantCreateRequest,
    identity: Annotated[Identity, Depends(require_action("manage_tenants"))],
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
):
    """Clone requested masters into private partitions and store the new identity. Long-running."""
    return await tenant_service.create_tenant(body)


@router.delete("/tenants/{identity_id}", response_model=TenantDeleteResponse)
async def delete_tenant(
    identity_id: str,
    identity: Annotated[Identity, Depends(require_action("manage_tenants"))],
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
):
    """Drop the tenant's private partitions, then delete the identity."""
    return await tenant_service.delete_tenant(identity_id)
