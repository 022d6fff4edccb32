from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..common.bulk import BulkDeleteReport
from ..common.pagination import Page
from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        role: Role = Role.EMPLOYEE,
        email_verified: bool = False,
        image: Optional[str] = None,
    ) -> User:
        raise NotImplementedError

    def update(self, user_id: str, changes: Mapping[str, Any]) -> User:
        """Apply a partial update (name, email, role, image, email_verified)."""

        raise NotImplementedError

    def list(
        self,
        *,
        role: Optional[Role] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Page[User]:
        raise NotImplementedError

    def count(self, *, role: Optional[Role] = None) -> int:
        raise NotImplementedError

    def delete(self, user_id: str) -> User:
        raise NotImplementedError

    def bulk_delete(self, user_ids: Sequence[str]) -> BulkDeleteReport:
        raise NotImplementedError
