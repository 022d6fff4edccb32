from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError

from ..common.bulk import BulkDeleteReport
from ..common.pagination import Page
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.models import UserRow
from ..database.session import session_scope
from .model import User, UserSummary
from .repository import UserRepository

logger = logging.getLogger(__name__)

_UPDATABLE = ("name", "email", "role", "image", "email_verified")


def row_to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        role=Role(row.role),
        email_verified=bool(row.email_verified),
        image=row.image,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def row_to_summary(row: Optional[UserRow]) -> Optional[UserSummary]:
    if row is None:
        return None
    return UserSummary(id=row.id, name=row.name, email=row.email, image=row.image)


def search_users(term: str):
    """Case-insensitive substring match over user name and email."""

    needle = term.strip().lower()
    return or_(
        func.lower(UserRow.name).contains(needle, autoescape=True),
        func.lower(UserRow.email).contains(needle, autoescape=True),
    )


class SQLUserRepository(UserRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        with session_scope(self._db) as s:
            row = s.get(UserRow, user_id)
            return row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with session_scope(self._db) as s:
            row = s.scalars(select(UserRow).where(func.lower(UserRow.email) == email.strip().lower())).first()
            return row_to_user(row) if row else None

    def create(
        self,
        *,
        name: str,
        email: str,
        role: Role = Role.EMPLOYEE,
        email_verified: bool = False,
        image: Optional[str] = None,
    ) -> User:
        try:
            with session_scope(self._db) as s:
                row = UserRow(
                    name=name,
                    email=email.strip().lower(),
                    role=Role(role).value,
                    email_verified=email_verified,
                    image=image,
                )
                s.add(row)
                s.flush()
                return row_to_user(row)
        except IntegrityError as e:
            raise ConflictError("User with this email already exists", field="email") from e

    def update(self, user_id: str, changes: Mapping[str, Any]) -> User:
        try:
            with session_scope(self._db) as s:
                row = s.get(UserRow, user_id)
                if row is None:
                    raise NotFoundError("User not found")
                for key in _UPDATABLE:
                    if key not in changes or changes[key] is None:
                        continue
                    value = changes[key]
                    if key == "role":
                        value = Role(value).value
                    elif key == "email":
                        value = str(value).strip().lower()
                    setattr(row, key, value)
                s.flush()
                return row_to_user(row)
        except IntegrityError as e:
            raise ConflictError("User with this email already exists", field="email") from e

    def list(
        self,
        *,
        role: Optional[Role] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Page[User]:
        conditions = []
        if role is not None:
            conditions.append(UserRow.role == Role(role).value)
        if search and search.strip():
            conditions.append(search_users(search))

        with session_scope(self._db) as s:
            total = s.scalar(select(func.count()).select_from(UserRow).where(*conditions)) or 0
            rows = s.scalars(
                select(UserRow).where(*conditions).order_by(UserRow.created_at.desc(), UserRow.id).limit(limit).offset(offset)
            ).all()
            return Page(items=[row_to_user(r) for r in rows], total=int(total), limit=limit, offset=offset)

    def count(self, *, role: Optional[Role] = None) -> int:
        stmt = select(func.count()).select_from(UserRow)
        if role is not None:
            stmt = stmt.where(UserRow.role == Role(role).value)
        with session_scope(self._db) as s:
            return int(s.scalar(stmt) or 0)

    def delete(self, user_id: str) -> User:
        try:
            with session_scope(self._db) as s:
                row = s.get(UserRow, user_id)
                if row is None:
                    raise NotFoundError("User not found")
                user = row_to_user(row)
                s.execute(delete(UserRow).where(UserRow.id == user_id))
                return user
        except IntegrityError as e:
            # Dependent rows still reference the user; the employee path deletes them first.
            raise ConflictError("User still has profile, attendance or leave records") from e

    def bulk_delete(self, user_ids: Sequence[str]) -> BulkDeleteReport:
        ids = list(user_ids)
        try:
            with session_scope(self._db) as s:
                existing = s.scalars(select(UserRow.id).where(UserRow.id.in_(ids))).all()
                s.execute(delete(UserRow).where(UserRow.id.in_(existing)))
        except IntegrityError as e:
            raise ConflictError("Some users still have profile, attendance or leave records") from e
        logger.info("bulk user delete: %d of %d", len(existing), len(ids))
        return BulkDeleteReport.build(ids, existing)
