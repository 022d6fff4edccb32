from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .repository import AccountRepository
from .session import SessionContext, SessionManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignInResult:
    ok: bool
    user: Optional[User] = None


@dataclass(frozen=True)
class SignUpResult:
    user: Optional[User]
    callback_url: Optional[str] = None


class AuthProvider(Protocol):
    def sign_in_email(self, email: str, password: str) -> SignInResult:
        raise NotImplementedError

    def sign_up_email(self, email: str, password: str, name: str, callback_url: Optional[str] = None) -> SignUpResult:
        raise NotImplementedError

    def get_session(self, carrier: Mapping[str, Any]) -> Optional[SessionContext]:
        raise NotImplementedError

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        raise NotImplementedError


class CredentialAuthProvider(AuthProvider):
    """Email/password provider backed by the accounts table."""

    def __init__(self, users: UserRepository, accounts: AccountRepository, sessions: SessionManager):
        self._users = users
        self._accounts = accounts
        self._sessions = sessions

    def _password_matches(self, user_id: str, password: str) -> bool:
        password_hash = self._accounts.get_password_hash(user_id)
        if not password_hash:
            return False
        try:
            return check_password_hash(password_hash, password)
        except ValueError:
            # Unknown hash method (placeholder or corrupted value).
            return False

    def sign_in_email(self, email: str, password: str) -> SignInResult:
        user = self._users.get_by_email(email)
        if user is None or not self._password_matches(user.id, password):
            return SignInResult(ok=False)
        return SignInResult(ok=True, user=user)

    def sign_up_email(self, email: str, password: str, name: str, callback_url: Optional[str] = None) -> SignUpResult:
        user = self._accounts.create_user_with_account(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
        )
        logger.info("account created for user %s", user.id)
        return SignUpResult(user=user, callback_url=callback_url)

    def get_session(self, carrier: Mapping[str, Any]) -> Optional[SessionContext]:
        return self._sessions.hydrate(carrier)

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        if self._users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        if not self._password_matches(user_id, current_password):
            raise AuthenticationError("Current password is incorrect")
        self._accounts.set_password_hash(user_id, generate_password_hash(new_password))
