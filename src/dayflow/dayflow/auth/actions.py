from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.actions import action
from ..core.constants import DEFAULT_REDIRECT_URL
from ..core.enums import Role
from ..core.result import fail, ok
from ..employees.repository import EmployeeRepository
from ..profiles.repository import ProfileRepository
from ..users.model import User
from ..users.repository import UserRepository
from .provider import AuthProvider
from .schemas import LoginSchema, RegisterSchema


@dataclass(frozen=True)
class AuthPayload:
    user: Optional[User]
    redirect_to: Optional[str] = None


class AuthActions:
    def __init__(
        self,
        provider: AuthProvider,
        users: UserRepository,
        profiles: ProfileRepository,
        employees: EmployeeRepository,
    ):
        self._provider = provider
        self._users = users
        self._profiles = profiles
        self._employees = employees

    @action("An error occurred during sign-in")
    def sign_in(self, data: Mapping[str, Any], *, redirect_to: Optional[str] = None):
        form = LoginSchema.model_validate(data)

        if self._users.get_by_email(form.email) is None:
            return fail("User not found", field_errors={"email": ["User with this email does not exist"]})

        result = self._provider.sign_in_email(form.email, form.password)
        if not result.ok:
            return fail("Invalid email or password")
        return ok("Successfully signed in", AuthPayload(user=result.user, redirect_to=redirect_to))

    @action("An unknown error occurred", invalid_message="Invalid data input")
    def sign_up(self, data: Mapping[str, Any], *, redirect_to: Optional[str] = None):
        form = RegisterSchema.model_validate(data)

        # Both uniqueness checks run before anything is written.
        if self._users.get_by_email(form.email) is not None:
            return fail("User already exists", field_errors={"email": ["User with this email already exists"]})
        if self._profiles.get_by_employee_id(form.employee_id) is not None:
            return fail("Employee already exists", field_errors={"employeeId": ["Employee ID already exists"]})

        created = self._provider.sign_up_email(
            form.email,
            form.password,
            form.name,
            callback_url=redirect_to or DEFAULT_REDIRECT_URL,
        )
        if created.user is None:
            return fail("Failed to create user")

        employee = self._employees.update(
            created.user.id,
            {"role": Role.ADMIN if form.is_admin else Role.EMPLOYEE},
            {"employee_id": form.employee_id, "name": form.name},
        )
        return ok("Sign-up successful", AuthPayload(user=employee.user, redirect_to=redirect_to))
