from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from dayflow.auth.session import ISSUED_AT_KEY, USER_ID_KEY, SessionManager
from dayflow.core.enums import Role
from dayflow.profiles.model import Profile, UserProfile
from dayflow.users.model import User


class InMemoryProfiles:
    def __init__(self, *payloads: UserProfile):
        self._by_user = {p.user.id: p for p in payloads}

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._by_user.get(user_id)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _manager(clock: Clock) -> SessionManager:
    user = User(id="u1", name="Ada", email="ada@dayflow.io", role=Role.ADMIN)
    profile = Profile(id="p1", user_id="u1", employee_id="1000001", name="Ada")
    return SessionManager(
        InMemoryProfiles(UserProfile(user=user, profile=profile)),
        ttl=timedelta(days=7),
        refresh_after=timedelta(hours=24),
        clock=clock,
    )


def test_issue_then_hydrate_within_lifetime():
    clock = Clock(datetime(2025, 1, 1, 9, 0))
    manager = _manager(clock)
    carrier = manager.issue("u1")

    clock.now += timedelta(hours=1)
    ctx = manager.hydrate(carrier)

    assert ctx is not None
    assert ctx.user_id == "u1"
    assert ctx.is_admin
    assert ctx.profile.employee_id == "1000001"
    assert ctx.expires_at == datetime(2025, 1, 8, 9, 0)
    assert ctx.refresh_due is False


def test_refresh_is_due_after_a_day():
    clock = Clock(datetime(2025, 1, 1, 9, 0))
    manager = _manager(clock)
    carrier = manager.issue("u1")

    clock.now += timedelta(hours=25)
    assert manager.hydrate(carrier).refresh_due is True


def test_expired_malformed_or_unknown_sessions_are_dropped():
    clock = Clock(datetime(2025, 1, 1, 9, 0))
    manager = _manager(clock)
    carrier = manager.issue("u1")

    clock.now += timedelta(days=7)
    assert manager.hydrate(carrier) is None

    assert manager.hydrate({USER_ID_KEY: "u1", ISSUED_AT_KEY: "yesterday"}) is None
    assert manager.hydrate({USER_ID_KEY: "ghost", ISSUED_AT_KEY: clock.now.isoformat()}) is None
    assert manager.hydrate({}) is None
