from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..common.actions import action, required
from ..common.pagination import clamp_window
from ..common.revalidate import Revalidator
from ..common.validators import require_choice
from ..core.enums import Role
from ..core.result import fail, ok
from .repository import UserRepository

USERS_VIEW = "/admin/users"


class UserActions:
    """Admin user management (accounts without the HR profile)."""

    def __init__(self, users: UserRepository, revalidator: Revalidator):
        self._users = users
        self._revalidator = revalidator

    @action("Error creating user")
    def create_user(self, data: Mapping[str, Any]):
        missing = required("Name and email are required", name=data.get("name"), email=data.get("email"))
        if missing:
            return missing
        user = self._users.create(
            name=str(data["name"]).strip(),
            email=str(data["email"]),
            role=require_choice(Role, data.get("role") or Role.EMPLOYEE.value, "Role"),
            email_verified=bool(data.get("emailVerified", False)),
            image=data.get("image"),
        )
        self._revalidator.revalidate_path(USERS_VIEW)
        return ok("User created successfully", user)

    @action("Error updating user")
    def update_user(self, user_id: str, data: Mapping[str, Any]):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        changes = {
            "name": data.get("name"),
            "email": data.get("email"),
            "role": require_choice(Role, data["role"], "Role") if data.get("role") else None,
            "image": data.get("image"),
            "email_verified": data.get("emailVerified"),
        }
        user = self._users.update(user_id, changes)
        self._revalidator.revalidate_path(USERS_VIEW)
        return ok("User updated successfully", user)

    @action("Error deleting user")
    def delete_user(self, user_id: str):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        user = self._users.delete(user_id)
        self._revalidator.revalidate_path(USERS_VIEW)
        return ok("User deleted successfully", user.id)

    @action("Error deleting users")
    def bulk_delete_users(self, user_ids: Sequence[str]):
        missing = required("User IDs are required", ids=list(user_ids or []))
        if missing:
            return missing
        report = self._users.bulk_delete(user_ids)
        self._revalidator.revalidate_path(USERS_VIEW)
        if not report.all_deleted:
            return fail("Some users could not be deleted", data=report)
        return ok("Users deleted successfully", report)

    @action("Failed to fetch users")
    def list_users(self, params: Mapping[str, Any]):
        limit, offset = clamp_window(params.get("limit"), params.get("offset"))
        page = self._users.list(
            role=require_choice(Role, params["role"], "Role") if params.get("role") else None,
            search=params.get("search") or None,
            limit=limit,
            offset=offset,
        )
        return ok("Users fetched successfully", page)
