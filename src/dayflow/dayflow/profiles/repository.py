from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import Profile, UserProfile


class ProfileRepository(Protocol):
    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        raise NotImplementedError

    def update_user_profile(self, user_id: str, changes: Mapping[str, Any]) -> UserProfile:
        """Rename the user and upsert the profile in one unit of work.

        A missing profile is created with a fallback employee ID.
        """

        raise NotImplementedError
