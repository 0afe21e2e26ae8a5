"""Domain model for the authenticated caller. No ORM or infrastructure."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Role(str, Enum):
    """Account roles. ADMIN is the elevated role that bypasses partition membership checks."""

    ADMIN = "admin"
    OPERATOR = "operator"
    CANDIDATE = "candidate"
    VOLUNTEER = "volunteer"
    USER = "user"


@dataclass(frozen=True)
class Identity:
    """Caller identity with its permitted partition set."""

    identity_id: str
    role: Role = Role.USER
    allowed_partition_ids: Tuple[str, ...] = field(default_factory=tuple)
    username: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_elevated(self) -> bool:
        return self.role == Role.ADMIN
