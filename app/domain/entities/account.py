"""Domain entity representing an authenticated portal account."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AccountRole(str, Enum):
    """Discriminant telling which backing store owns an account."""

    STUDENT = "student"
    COMPANY = "company"
    ADMIN = "admin"


@dataclass
class Account:
    """A student, company or administrator, seen through one shape."""

    id: str
    role: AccountRole
    email: str
    display_name: str
    password_hash: str
    is_active: bool = True
    avatar_url: str | None = None

    def public_profile(self) -> dict[str, Any]:
        """Return the fields that may be attached to outbound messages."""

        return {
            "id": self.id,
            "role": self.role.value,
            "name": self.display_name,
            "email": self.email,
            "avatar_url": self.avatar_url,
        }


__all__ = ["Account", "AccountRole"]
