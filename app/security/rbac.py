"""Role-based access control. No FastAPI."""

from app.domain.models.identity import Role
from app.security.exceptions import AuthorizationError

# Permission matrix:
# Role       ListPartitions  ManageTenants  Export  BulkUpsert
# ADMIN      ✓               ✓              ✓       ✓
# OPERATOR   ✗               ✗              ✓       ✓
# CANDIDATE  ✗               ✗              ✓       ✓
# VOLUNTEER  ✗               ✗              ✓       ✓
# USER       ✗               ✗              ✓       ✓

ADMIN_ACTIONS = frozenset({"list_partitions", "manage_tenants"})
SYNC_ACTIONS = frozenset({"export", "bulk_upsert"})

_ACTION_PERMISSIONS: dict[tuple[Role, str], bool] = {
    (role, action): role == Role.ADMIN or action in SYNC_ACTIONS
    for role in Role
    for action in ADMIN_ACTIONS | SYNC_ACTIONS
}


class RBACService:
    """Check permission for role and action. Raise AuthorizationError if invalid."""

    def check_permission(self, role: Role, action: str) -> None:
        """Raises AuthorizationError if role does not have permission for action."""
        key = (role, action)
        if key not in _ACTION_PERMISSIONS or not _ACTION_PERMISSIONS[key]:
            raise AuthorizationError(
                f"Role {role.value} does not have permission for action '{action}'"
            )
