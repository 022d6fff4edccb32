from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping

from email_validator import EmailNotValidError, validate_email
from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.repository import AccountRepository
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..profiles.repository import ProfileRepository
from ..users.repository import UserRepository
from .jwt_tokens import TokenIssuer

logger = logging.getLogger(__name__)

_SPECIAL_RE = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")


def password_feedback(password: str) -> List[str]:
    """Unmet password requirements, empty when the password is strong enough."""

    feedback = []
    if len(password) < 8:
        feedback.append("At least 8 characters")
    if not re.search(r"[A-Z]", password):
        feedback.append("At least one uppercase letter")
    if not re.search(r"[a-z]", password):
        feedback.append("At least one lowercase letter")
    if not re.search(r"\d", password):
        feedback.append("At least one number")
    if not _SPECIAL_RE.search(password):
        feedback.append("At least one special character")
    return feedback


def _valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class TokenAuthService:
    """Use case: stateless sign-up/sign-in with bearer tokens."""

    def __init__(
        self,
        users: UserRepository,
        profiles: ProfileRepository,
        accounts: AccountRepository,
        employees: EmployeeRepository,
        issuer: TokenIssuer,
    ):
        self._users = users
        self._profiles = profiles
        self._accounts = accounts
        self._employees = employees
        self._issuer = issuer

    def signup(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        employee_id = str(data.get("employeeId") or "").strip()
        email = str(data.get("email") or "").strip()
        password = str(data.get("password") or "")
        role = str(data.get("role") or "").strip().upper()

        if not employee_id or not email or not password or not role:
            raise ValidationError("Please provide employeeId, email, password, and role")
        if role not in (Role.EMPLOYEE.value, Role.ADMIN.value):
            raise ValidationError("Role must be EMPLOYEE or ADMIN")
        if not _valid_email(email):
            raise ValidationError("Invalid email format")
        feedback = password_feedback(password)
        if feedback:
            raise ValidationError("Password does not meet security requirements", field_errors={"password": feedback})

        if self._users.get_by_email(email) is not None:
            raise ConflictError("Email already registered", field="email")
        if self._profiles.get_by_employee_id(employee_id) is not None:
            raise ConflictError("Employee ID already registered", field="employeeId")

        user = self._accounts.create_user_with_account(
            name=employee_id,
            email=email,
            password_hash=generate_password_hash(password),
        )
        employee = self._employees.update(
            user.id,
            {"role": Role(role)},
            {"employee_id": employee_id, "name": employee_id},
        )
        logger.info("token signup for %s (%s)", employee.user.id, role)
        return {
            "userId": employee.user.id,
            "email": employee.user.email,
            "role": employee.user.role.value,
            "employeeId": employee.profile.employee_id if employee.profile else None,
            "emailVerified": employee.user.email_verified,
            "verificationToken": self._issuer.verification_token(employee.user.email),
        }

    def verify_email(self, token: str) -> Dict[str, Any]:
        if not token:
            raise ValidationError("Verification token is required")
        claims = self._issuer.decode(token)
        user = self._users.get_by_email(str(claims.get("email", "")))
        if user is None:
            raise AuthenticationError("Invalid or expired verification token")
        user = self._users.update(user.id, {"email_verified": True})
        return {"userId": user.id, "email": user.email, "emailVerified": user.email_verified}

    def signin(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        email = str(data.get("email") or "").strip()
        password = str(data.get("password") or "")
        if not email or not password:
            raise ValidationError("Please provide email and password")
        if not _valid_email(email):
            raise ValidationError("Invalid email format")

        user = self._users.get_by_email(email)
        if user is None:
            raise AuthenticationError("Incorrect credentials")
        if not user.email_verified:
            raise AuthorizationError("Please verify your email before logging in")

        password_hash = self._accounts.get_password_hash(user.id)
        if not password_hash or not check_password_hash(password_hash, password):
            raise AuthenticationError("Incorrect credentials")

        profile = self._profiles.get_by_user_id(user.id)
        return {
            "userId": user.id,
            "email": user.email,
            "role": user.role.value,
            "employeeId": profile.employee_id if profile else None,
            "name": profile.name if profile else user.name,
            "token": self._issuer.session_token(user.id, user.role),
            "redirectUrl": "/dashboard/admin" if user.is_admin else "/dashboard/employee",
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        return self._issuer.decode(token)

    def me(self, token: str) -> Dict[str, Any]:
        claims = self._issuer.decode(token)
        payload = self._profiles.get_user_profile(str(claims.get("userId", "")))
        if payload is None:
            raise NotFoundError("User not found")
        return {
            "userId": payload.user.id,
            "email": payload.user.email,
            "role": payload.user.role.value,
            "emailVerified": payload.user.email_verified,
            "profile": payload.profile,
        }
