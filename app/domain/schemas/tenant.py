"""Pydantic schemas for the admin tenant lifecycle API."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.domain.models.identity import Role

# Underscore is the separator inside tenant_<key>_<master>, so keys cannot contain it.
TENANT_KEY_PATTERN = r"^[A-Za-z0-9-]+$"


class TenantCreateRequest(BaseModel):
    """Create an identity, clone its private partitions, grant shared ones."""

    identity_id: str = Field(..., min_length=1, max_length=64, pattern=TENANT_KEY_PATTERN)
    username: Optional[str] = None
    role: Role = Role.USER
    master_partition_ids: List[str] = Field(
        default_factory=list, description="Masters to clone into tenant-private partitions"
    )
    shared_partition_ids: List[str] = Field(
        default_factory=list, description="Existing partitions granted as-is"
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().lower()
        return v or None


class TenantResponse(BaseModel):
    identity_id: str
    username: Optional[str] = None
    role: Role
    allowed_partition_ids: List[str]
    created_partitions: List[str] = Field(default_factory=list)


class TenantDeleteResponse(BaseModel):
    identity_id: str
    dropped_partitions: List[str] = Field(default_factory=list)
