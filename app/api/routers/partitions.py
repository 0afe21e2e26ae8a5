"""Partition catalog API: GET /partitions (admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import get_partition_catalog, require_action
from app.domain.models.identity import Identity
from app.domain.schemas.partition import PartitionListResponse, PartitionResponse
from app.partitions.catalog import PartitionCatalog

router = APIRouter()


@router.get("", response_model=PartitionListResponse)
async def list_partitions(
    identity: Annotated[Identity, Depends(require_action("list_partitions"))],
    catalog: Annotated[PartitionCatalog, Depends(get_partition_catalog)],
):
    """Selectable master partitions. Empty when the store cannot be reached."""
    infos = await catalog.list_selectable()
    return PartitionListResponse(
        partitions=[PartitionResponse(id=info.id, display_name=info.display_name) for info in infos]
    )
