"""Voter record shape shared by every partition."""

from typing import FrozenSet

# Typed columns present on every partition table, besides id / raw / timestamps.
CANONICAL_FIELDS = ("name", "voter_id", "mobile", "booth", "part", "serial")

RAW_FIELD = "raw"
# "raw" wins when a payload carries both spellings.
RAW_FIELD_ALIASES = ("__raw", "raw")

# Managed by the server; ignored when they appear in a client payload.
SERVER_MANAGED_FIELDS: FrozenSet[str] = frozenset(
    {"id", "_id", "created_at", "updated_at", "createdAt", "updatedAt", "__v"}
)
