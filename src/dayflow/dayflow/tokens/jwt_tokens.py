from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

import jwt

from ..core.constants import DEFAULT_SESSION_DAYS, VERIFICATION_TOKEN_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError

ALGORITHM = "HS256"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """HS256 JWTs: 7-day session tokens and 24-hour email verification tokens."""

    def __init__(
        self,
        secret: str,
        *,
        session_ttl: timedelta = timedelta(days=DEFAULT_SESSION_DAYS),
        verification_ttl: timedelta = timedelta(hours=VERIFICATION_TOKEN_HOURS),
        clock: Callable[[], datetime] = _now,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._session_ttl = session_ttl
        self._verification_ttl = verification_ttl
        self._clock = clock

    def _encode(self, claims: Dict[str, Any], ttl: timedelta) -> str:
        now = self._clock()
        return jwt.encode({**claims, "iat": now, "exp": now + ttl}, self._secret, algorithm=ALGORITHM)

    def session_token(self, user_id: str, role: Role) -> str:
        return self._encode({"userId": user_id, "role": Role(role).value}, self._session_ttl)

    def verification_token(self, email: str) -> str:
        return self._encode({"email": email}, self._verification_ttl)

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e
