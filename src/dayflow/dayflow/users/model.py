from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class UserSummary:
    """Public user fields attached to attendance and leave rows."""

    id: str
    name: str
    email: str
    image: Optional[str] = None


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object, no database access.
    """

    id: str
    name: str
    email: str
    role: Role
    email_verified: bool = False
    image: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def summary(self) -> UserSummary:
        return UserSummary(id=self.id, name=self.name, email=self.email, image=self.image)
