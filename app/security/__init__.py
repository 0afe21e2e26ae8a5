"""Security: RBAC. No FastAPI."""

from app.security.exceptions import AuthorizationError, SecurityError
from app.security.rbac import RBACService

__all__ = [
    "AuthorizationError",
    "RBACService",
    "SecurityError",
]
