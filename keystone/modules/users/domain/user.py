"""
User Domain Model

Pure data model representing a user entity.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


class Role(str, Enum):
    """Roles available for RBAC checks."""
    ADMIN = "admin"
    USER = "user"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """User domain model."""
    username: str
    email: str
    password_hash: str
    role: Role = Role.USER
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        # Rows come back from the database with plain strings
        if not isinstance(self.role, Role):
            self.role = Role(self.role)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create User from dictionary (e.g., from database row)."""
        return cls(
            id=data["id"],
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            role=data.get("role") or Role.USER,
            created_at=data.get("created_at") or _utcnow(),
            updated_at=data.get("updated_at") or _utcnow(),
        )

    def has_role(self, role: Role) -> bool:
        return self.role == role

    def to_public_dict(self) -> Dict[str, Any]:
        """Serialize without the password hash."""
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
            "created_at": self.created_at,
        }
