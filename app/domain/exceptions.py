"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


class BadChangeError(DomainValidationError):
    """Raised when a sync change envelope is malformed (missing id, unknown op, bad payload)."""


class InvalidTenantKeyError(DomainValidationError):
    """Raised when a tenant key cannot be embedded in a partition name."""
