"""Identity repository protocol. Application layer depends on this; infrastructure implements it."""

from typing import Optional, Protocol

from app.domain.models.identity import Identity


class IdentityRepository(Protocol):
    """Protocol for storing and loading caller identities."""

    async def get(self, identity_id: str) -> Optional[Identity]:
        """Return identity by id, or None if not found."""
        ...

    async def create(self, identity: Identity) -> Identity:
        """Persist a new identity. Returns the stored identity."""
        ...

    async def delete(self, identity_id: str) -> bool:
        """Delete identity. Returns True if a row was removed."""
        ...
