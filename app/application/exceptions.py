"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class IdentityNotFoundError(ApplicationError):
    """Raised when the caller's identity header does not match a stored identity."""


class TenantAlreadyExistsError(ApplicationError):
    """Raised when creating a tenant whose identity id is taken."""


class TenantNotFoundError(ApplicationError):
    """Raised when deleting a tenant that does not exist."""
