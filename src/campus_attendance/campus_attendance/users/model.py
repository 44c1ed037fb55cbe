from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff member account.

    Plain data object; ``user_id`` is the human-assigned code (e.g. "T001")
    and never changes after creation.
    """

    user_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    department: Optional[str] = None
    is_active: bool = True

    def identity(self) -> dict:
        return {"id": self.user_id, "name": self.name, "role": self.role.value}

    def to_dict(self) -> dict:
        """Public representation, never includes the credential."""
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class Caller:
    """Identity bound to the session after login."""

    user_id: str
    role: Role
