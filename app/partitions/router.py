"""Tenant router: pick the single partition an identity operates on for one call."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from app.domain.models.identity import Identity
from app.partitions.exceptions import (
    AmbiguousSelectionError,
    PartitionForbiddenError,
    PartitionUnavailableError,
    SelectionRequiredError,
)
from app.partitions.handles import PartitionHandle, PartitionHandleCache
from app.partitions.naming import sanitize_partition_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionSelection:
    partition_id: str
    handle: PartitionHandle


class TenantRouter:
    """
    Resolution order: explicit request, the identity's sole permitted partition,
    the configured default. Mutation endpoints pass require_explicit=True so a
    bulk write never lands on a guessed partition.
    """

    def __init__(
        self,
        handle_cache: PartitionHandleCache,
        logical_database: Optional[str] = None,
        default_partition: Optional[str] = None,
        reserved_prefix: str = "system_",
    ) -> None:
        self._handles = handle_cache
        self._logical_database = logical_database
        self._default_partition = default_partition
        self._reserved_prefix = reserved_prefix

    def allowed_partitions(self, identity: Identity) -> List[str]:
        names = (
            sanitize_partition_name(value, self._reserved_prefix)
            for value in identity.allowed_partition_ids
        )
        return list(dict.fromkeys(name for name in names if name))

    def resolve(
        self,
        identity: Identity,
        requested: Optional[str] = None,
        require_explicit: bool = False,
    ) -> PartitionSelection:
        allowed = self.allowed_partitions(identity)
        candidate = sanitize_partition_name(requested, self._reserved_prefix)

        if not candidate:
            if len(allowed) > 1 or require_explicit:
                raise AmbiguousSelectionError("Please choose a voter partition (partitionId).")
            if len(allowed) == 1:
                candidate = allowed[0]
            else:
                candidate = sanitize_partition_name(self._default_partition, self._reserved_prefix)
                if not candidate:
                    raise SelectionRequiredError("partitionId is required.")

        if allowed and candidate not in allowed and not identity.is_elevated:
            logger.warning(
                "partition_access_denied",
                extra={"identity_id": identity.identity_id, "partition": candidate},
            )
            raise PartitionForbiddenError("You do not have access to this voter partition.")

        try:
            handle = self._handles.handle_for(self._logical_database, candidate)
        except Exception as e:
            logger.error(
                "partition_handle_failed",
                extra={"partition": candidate, "error": str(e)},
            )
            raise PartitionUnavailableError("Unable to open the selected voter partition.") from e
        return PartitionSelection(partition_id=candidate, handle=handle)
