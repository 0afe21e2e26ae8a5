# Application layer: services that orchestrate domain and infrastructure.

from app.application.exceptions import (
    ApplicationError,
    IdentityNotFoundError,
    TenantAlreadyExistsError,
    TenantNotFoundError,
)
from app.application.identity_repository import IdentityRepository
from app.application.sync_service import SyncService
from app.application.tenant_service import TenantService

__all__ = [
    "ApplicationError",
    "IdentityNotFoundError",
    "IdentityRepository",
    "SyncService",
    "TenantAlreadyExistsError",
    "TenantNotFoundError",
    "TenantService",
]
