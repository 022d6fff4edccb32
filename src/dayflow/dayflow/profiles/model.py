from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional

from ..users.model import User

# Fields an employee may change on their own profile.
SELF_EDITABLE_FIELDS = ("name", "phone", "address")
# Fields an admin may change.
ADMIN_EDITABLE_FIELDS = ("employee_id", "name", "phone", "address", "salary")


@dataclass(frozen=True)
class Profile:
    """HR extension of a user (employee ID, contact details, salary)."""

    id: str
    user_id: str
    employee_id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    salary: Optional[int] = None


@dataclass(frozen=True)
class UserProfile:
    user: User
    profile: Optional[Profile]


def fallback_employee_id() -> str:
    """Placeholder employee ID for profiles created on first write.

    It is unique but carries no business meaning; an admin is expected to
    replace it.
    """
    return f"AUTO-{uuid.uuid4().hex[:10].upper()}"
