"""DB-backed identity repository. Persists identities to the system_identities table."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models.identity import Identity, Role
from app.infrastructure.database.models import IdentityRow


def _to_domain(orm: IdentityRow) -> Identity:
    return Identity(
        identity_id=orm.id,
        role=Role(orm.role),
        allowed_partition_ids=tuple(orm.allowed_partition_ids or ()),
        username=orm.username,
        created_at=orm.created_at,
    )


class DbIdentityRepository:
    """Implements IdentityRepository protocol on an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, identity_id: str) -> Optional[Identity]:
        stmt = select(IdentityRow).where(IdentityRow.id == identity_id)
        result = await self._session.execute(stmt)
        orm = result.scalar_one_or_none()
        if orm is None:
            return None
        return _to_domain(orm)

    async def create(self, identity: Identity) -> Identity:
        orm = IdentityRow(
            id=identity.identity_id,
            username=identity.username,
            role=identity.role.value,
            allowed_partition_ids=list(identity.allowed_partition_ids),
        )
        self._session.add(orm)
        await self._session.flush()
        await self._session.commit()
        await self._session.refresh(orm)
        return _to_domain(orm)

    async def delete(self, identity_id: str) -> bool:
        stmt = delete(IdentityRow).where(IdentityRow.id == identity_id)
        result = await self._session.execute(stmt)
        await self._session.commit()
        return bool(result.rowcount)
