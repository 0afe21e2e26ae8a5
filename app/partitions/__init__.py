"""Partition routing, caching, cataloging and provisioning."""

from app.partitions.catalog import PartitionCatalog, PartitionInfo
from app.partitions.exceptions import (
    AmbiguousSelectionError,
    InvalidPartitionNameError,
    InvalidSourceError,
    PartitionError,
    PartitionForbiddenError,
    PartitionUnavailableError,
    ProvisioningInProgressError,
    SelectionRequiredError,
)
from app.partitions.handles import PartitionHandle, PartitionHandleCache
from app.partitions.provisioner import PartitionProvisioner
from app.partitions.router import PartitionSelection, TenantRouter

__all__ = [
    "AmbiguousSelectionError",
    "InvalidPartitionNameError",
    "InvalidSourceError",
    "PartitionCatalog",
    "PartitionError",
    "PartitionForbiddenError",
    "PartitionHandle",
    "PartitionHandleCache",
    "PartitionInfo",
    "PartitionProvisioner",
    "PartitionSelection",
    "PartitionUnavailableError",
    "ProvisioningInProgressError",
    "SelectionRequiredError",
    "TenantRouter",
]
