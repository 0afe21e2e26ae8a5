# app/infrastructure/database/models.py

from typing import Optional

from sqlalchemy import JSON, Column, MetaData, String, Table

from app.infrastructure.database.session import Base
from app.infrastructure.database.types import UTCDateTime, utcnow


class BaseModel(Base):
    __abstract__ = True

    id = Column(String, primary_key=True)

    created_at = Column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(), default=utcnow, onupdate=utcnow, nullable=False)


class IdentityRow(BaseModel):
    """ORM model for caller identities. Lives under the reserved prefix so the catalog never lists it."""

    __tablename__ = "system_identities"

    username = Column(String, nullable=True, unique=True)
    role = Column(String, nullable=False, default="user")
    allowed_partition_ids = Column(JSON, nullable=False, default=list)


def build_record_table(name: str, metadata: MetaData, schema: Optional[str] = None) -> Table:
    """Schema of a voter partition. Every partition, master or tenant-private, uses exactly this."""
    return Table(
        name,
        metadata,
        Column("id", String, primary_key=True),
        Column("name", String, index=True),
        Column("voter_id", String, index=True),
        Column("mobile", String),
        Column("booth", String),
        Column("part", String),
        Column("serial", String),
        Column("raw", JSON),
        Column("created_at", UTCDateTime(), nullable=False, default=utcnow),
        Column("updated_at", UTCDateTime(), nullable=False, default=utcnow, index=True),
        schema=schema,
    )
