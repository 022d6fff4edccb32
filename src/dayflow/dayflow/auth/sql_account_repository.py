from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.models import AccountRow, UserRow
from ..database.session import session_scope
from ..users.model import User
from ..users.sql_user_repository import row_to_user
from .repository import AccountRepository


class SQLAccountRepository(AccountRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_password_hash(self, user_id: str) -> Optional[str]:
        with session_scope(self._db) as s:
            return s.scalar(select(AccountRow.password_hash).where(AccountRow.user_id == user_id))

    def set_password_hash(self, user_id: str, password_hash: str) -> None:
        with session_scope(self._db) as s:
            row = s.scalars(select(AccountRow).where(AccountRow.user_id == user_id)).first()
            if row is None:
                if s.get(UserRow, user_id) is None:
                    raise NotFoundError("User not found")
                s.add(AccountRow(user_id=user_id, password_hash=password_hash))
            else:
                row.password_hash = password_hash

    def create_user_with_account(self, *, name: str, email: str, password_hash: str) -> User:
        try:
            with session_scope(self._db) as s:
                user = UserRow(name=name, email=email.strip().lower(), role=Role.EMPLOYEE.value, email_verified=False)
                s.add(user)
                s.flush()
                s.add(AccountRow(user_id=user.id, password_hash=password_hash))
                s.flush()
                return row_to_user(user)
        except IntegrityError as e:
            raise ConflictError("User with this email already exists", field="email") from e
