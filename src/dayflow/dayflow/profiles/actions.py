from __future__ import annotations

from typing import Any, Mapping

from ..auth.provider import AuthProvider
from ..common.actions import action, required
from ..common.revalidate import Revalidator
from ..core.exceptions import AuthenticationError, NotFoundError
from ..core.result import fail, ok
from .model import SELF_EDITABLE_FIELDS
from .repository import ProfileRepository
from .schemas import UpdatePasswordSchema, UpdateProfileSchema

PROFILE_VIEW = "/profile"


class ProfileActions:
    def __init__(self, profiles: ProfileRepository, auth: AuthProvider, revalidator: Revalidator):
        self._profiles = profiles
        self._auth = auth
        self._revalidator = revalidator

    @action("Failed to fetch profile")
    def fetch_user_profile(self, user_id: str):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        payload = self._profiles.get_user_profile(user_id)
        if payload is None:
            raise NotFoundError("User not found")
        return ok("Profile fetched successfully", payload)

    @action("Failed to update profile")
    def update_user_profile(self, user_id: str, data: Mapping[str, Any], *, allow_salary: bool = False):
        """Owner edit of name/phone/address; ``allow_salary`` is set for admins only."""

        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        form = UpdateProfileSchema.model_validate(data)
        changes = form.model_dump(include=set(form.model_fields_set) | {"name"})
        if not allow_salary:
            changes = {k: v for k, v in changes.items() if k in SELF_EDITABLE_FIELDS}
        payload = self._profiles.update_user_profile(user_id, changes)
        self._revalidator.revalidate_path(PROFILE_VIEW)
        return ok("Profile updated successfully", payload)

    @action("Failed to update password")
    def update_password(self, user_id: str, data: Mapping[str, Any]):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        form = UpdatePasswordSchema.model_validate(data)
        try:
            self._auth.change_password(user_id, form.current_password, form.new_password)
        except AuthenticationError as e:
            return fail("Invalid input", field_errors={"currentPassword": [str(e)]})
        return ok("Password updated successfully")
