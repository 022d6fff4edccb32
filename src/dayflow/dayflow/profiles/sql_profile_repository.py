from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.models import ProfileRow, UserRow
from ..database.session import session_scope
from ..users.sql_user_repository import row_to_user
from .model import ADMIN_EDITABLE_FIELDS, Profile, UserProfile, fallback_employee_id
from .repository import ProfileRepository

DUPLICATE_EMPLOYEE_ID = "User with this employee ID already exists"


def row_to_profile(row: ProfileRow) -> Profile:
    return Profile(
        id=row.id,
        user_id=row.user_id,
        employee_id=row.employee_id,
        name=row.name,
        phone=row.phone,
        address=row.address,
        salary=row.salary,
    )


def apply_profile_changes(row: ProfileRow, changes: Mapping[str, Any], fields: Iterable[str]) -> None:
    # Keys absent from ``changes`` are left untouched; explicit None clears optional fields.
    for key in fields:
        if key not in changes:
            continue
        value = changes[key]
        if key in ("employee_id", "name") and not value:
            continue
        setattr(row, key, value)


def upsert_profile_row(s: Session, user_id: str, changes: Mapping[str, Any]) -> ProfileRow:
    row = s.scalars(select(ProfileRow).where(ProfileRow.user_id == user_id)).first()
    if row is None:
        user = s.get(UserRow, user_id)
        if user is None:
            raise NotFoundError("User not found")
        row = ProfileRow(
            user_id=user_id,
            employee_id=changes.get("employee_id") or fallback_employee_id(),
            name=changes.get("name") or user.name,
        )
        s.add(row)
    apply_profile_changes(row, changes, ADMIN_EDITABLE_FIELDS)
    s.flush()
    return row


class SQLProfileRepository(ProfileRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        with session_scope(self._db) as s:
            row = s.scalars(select(ProfileRow).where(ProfileRow.user_id == user_id)).first()
            return row_to_profile(row) if row else None

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        with session_scope(self._db) as s:
            row = s.scalars(select(ProfileRow).where(ProfileRow.employee_id == employee_id)).first()
            return row_to_profile(row) if row else None

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        with session_scope(self._db) as s:
            user = s.get(UserRow, user_id)
            if user is None:
                return None
            profile = row_to_profile(user.profile) if user.profile else None
            return UserProfile(user=row_to_user(user), profile=profile)

    def update_user_profile(self, user_id: str, changes: Mapping[str, Any]) -> UserProfile:
        try:
            with session_scope(self._db) as s:
                user = s.get(UserRow, user_id)
                if user is None:
                    raise NotFoundError("User not found")
                if changes.get("name"):
                    user.name = changes["name"]
                profile = upsert_profile_row(s, user_id, changes)
                return UserProfile(user=row_to_user(user), profile=row_to_profile(profile))
        except IntegrityError as e:
            raise ConflictError(DUPLICATE_EMPLOYEE_ID, field="employeeId") from e
