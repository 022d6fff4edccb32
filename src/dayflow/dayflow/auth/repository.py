from __future__ import annotations

from typing import Optional, Protocol

from ..users.model import User


class AccountRepository(Protocol):
    """Credential storage owned by the auth provider."""

    def get_password_hash(self, user_id: str) -> Optional[str]:
        raise NotImplementedError

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        raise NotImplementedError

    def create_user_with_account(self, *, name: str, email: str, password_hash: str) -> User:
        raise NotImplementedError
