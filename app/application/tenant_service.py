"""Tenant lifecycle: create an identity with private partition clones; delete it with its partitions."""

import logging
from typing import List

from app.application.exceptions import TenantAlreadyExistsError, TenantNotFoundError
from app.application.identity_repository import IdentityRepository
from app.domain.models.identity import Identity
from app.domain.schemas.tenant import TenantCreateRequest, TenantDeleteResponse, TenantResponse
from app.partitions.catalog import PartitionCatalog
from app.partitions.naming import is_private_partition_name, sanitize_partition_name
from app.partitions.provisioner import PartitionProvisioner


class TenantService:
    """
    Orchestrates provisioning around identity storage. Clones are idempotent, so a
    failed create can be retried with the same request. Delete drops partitions
    before the identity so no partition is left without an owner.
    """

    def __init__(
        self,
        identities: IdentityRepository,
        provisioner: PartitionProvisioner,
        catalog: PartitionCatalog,
        logger: logging.Logger,
        reserved_prefix: str = "system_",
    ) -> None:
        self._identities = identities
        self._provisioner = provisioner
        self._catalog = catalog
        self._logger = logger
        self._reserved_prefix = reserved_prefix

    async def _shared_partitions(self, requested: List[str]) -> List[str]:
        names = [sanitize_partition_name(value, self._reserved_prefix) for value in requested]
        names = [name for name in dict.fromkeys(names) if name and not is_private_partition_name(name)]
        if not names:
            return []

        available = await self._catalog.list_selectable()
        if not available:
            # Catalog unknown: keep the request as-is rather than block tenant creation.
            self._logger.warning("shared_partition_validation_skipped", extra={"requested": names})
            return names

        valid = {info.id for info in available}
        unknown = [name for name in names if name not in valid]
        if unknown:
            self._logger.warning("shared_partitions_ignored", extra={"unknown": unknown})
        return [name for name in names if name in valid]

    async def create_tenant(self, request: TenantCreateRequest) -> TenantResponse:
        identity_id = request.identity_id
        if await self._identities.get(identity_id) is not None:
            raise TenantAlreadyExistsError(f"Identity '{identity_id}' already exists")

        shared = await self._shared_partitions(request.shared_partition_ids)

        created: List[str] = []
        for master in dict.fromkeys(request.master_partition_ids):
            created.append(await self._provisioner.clone_for_tenant(identity_id, master))

        identity = await self._identities.create(
            Identity(
                identity_id=identity_id,
                role=request.role,
                allowed_partition_ids=tuple(dict.fromkeys(created + shared)),
                username=request.username,
            )
        )
        self._logger.info(
            "tenant_created",
            extra={"tenant": identity_id, "private_partitions": created, "shared_partitions": shared},
        )
        return TenantResponse(
            identity_id=identity.identity_id,
            username=identity.username,
            role=identity.role,
            allowed_partition_ids=list(identity.allowed_partition_ids),
            created_partitions=created,
        )

    async def delete_tenant(self, identity_id: str) -> TenantDeleteResponse:
        identity = await self._identities.get(identity_id)
        if identity is None:
            raise TenantNotFoundError(f"Identity '{identity_id}' not found")

        # Clones may exist that never made it into the allowed set (e.g. a retried create).
        candidates = list(identity.allowed_partition_ids) + await self._catalog.list_partition_names()
        dropped = await self._provisioner.drop_tenant_partitions(identity_id, candidates)

        await self._identities.delete(identity_id)
        self._logger.info("tenant_deleted", extra={"tenant": identity_id, "dropped_partitions": dropped})
        return TenantDeleteResponse(identity_id=identity_id, dropped_partitions=dropped)
