"""Partition-layer exceptions. Typed, no HTTP."""


class PartitionError(Exception):
    """Base for all partition routing and provisioning errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidPartitionNameError(PartitionError):
    """Raised when a partition name is empty, reserved or otherwise unusable."""


class InvalidSourceError(PartitionError):
    """Raised when the master partition of a clone does not exist."""


class AmbiguousSelectionError(PartitionError):
    """Raised when the caller must pick a partition explicitly."""


class SelectionRequiredError(PartitionError):
    """Raised when no partition can be resolved at all (no selection, no default)."""


class PartitionForbiddenError(PartitionError):
    """Raised when the selected partition is outside the identity's permitted set."""


class PartitionUnavailableError(PartitionError):
    """Raised when the partition store cannot be reached or a handle cannot be opened."""


class ProvisioningInProgressError(PartitionError):
    """Raised when another worker holds the provisioning lock for the same partition."""
