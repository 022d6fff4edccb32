"""Per-request session context.

The signed Flask session cookie only carries ``user_id`` and ``issued_at``.
``SessionManager.hydrate`` turns that carrier into a ``SessionContext`` holding
the full user and profile, once per request.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Mapping, Optional

from ..common.datetime_utils import utcnow
from ..core.constants import DEFAULT_SESSION_DAYS, DEFAULT_SESSION_REFRESH_HOURS
from ..profiles.model import Profile
from ..profiles.repository import ProfileRepository
from ..users.model import User

logger = logging.getLogger(__name__)

USER_ID_KEY = "user_id"
ISSUED_AT_KEY = "issued_at"


@dataclass(frozen=True)
class SessionContext:
    user: User
    profile: Optional[Profile]
    issued_at: datetime
    expires_at: datetime
    refresh_due: bool = False

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin


class SessionManager:
    def __init__(
        self,
        profiles: ProfileRepository,
        *,
        ttl: timedelta = timedelta(days=DEFAULT_SESSION_DAYS),
        refresh_after: timedelta = timedelta(hours=DEFAULT_SESSION_REFRESH_HOURS),
        clock: Callable[[], datetime] = utcnow,
    ):
        self._profiles = profiles
        self._ttl = ttl
        self._refresh_after = refresh_after
        self._clock = clock

    def issue(self, user_id: str) -> Dict[str, Any]:
        """Carrier values to store in the session cookie."""

        return {USER_ID_KEY: user_id, ISSUED_AT_KEY: self._clock().isoformat()}

    def hydrate(self, carrier: Mapping[str, Any]) -> Optional[SessionContext]:
        user_id = carrier.get(USER_ID_KEY)
        raw_issued = carrier.get(ISSUED_AT_KEY)
        if not user_id or not raw_issued:
            return None
        try:
            issued_at = datetime.fromisoformat(str(raw_issued))
        except ValueError:
            logger.warning("discarding session with malformed issued_at %r", raw_issued)
            return None

        now = self._clock()
        expires_at = issued_at + self._ttl
        if now >= expires_at:
            logger.info("session for user %s expired", user_id)
            return None

        user_profile = self._profiles.get_user_profile(str(user_id))
        if user_profile is None:
            return None
        return SessionContext(
            user=user_profile.user,
            profile=user_profile.profile,
            issued_at=issued_at,
            expires_at=expires_at,
            refresh_due=now - issued_at >= self._refresh_after,
        )
