from __future__ import annotations

import logging

import mysql.connector
from sqlalchemy import inspect, select
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DatabaseConnection, DBConfig
from .models import AccountRow, Base, ProfileRow, UserRow
from .session import session_scope

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # name, email, password, role, employee_id
    ("Admin Demo", "admin@dayflow.io", "Admin@123", Role.ADMIN, "1000001"),
    ("Employee Demo", "employee@dayflow.io", "Employee@123", Role.EMPLOYEE, "1000002"),
)


def ensure_database_exists(config: DBConfig) -> None:
    """Create the MySQL database if missing (no-op for URL-configured engines)."""

    if config.url:
        return
    conn = mysql.connector.connect(
        host=config.host,
        port=int(config.port),
        user=config.user,
        password=config.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db: DatabaseConnection) -> None:
    """Create missing tables (idempotent)."""

    Base.metadata.create_all(db.engine)


def ensure_demo_users(db: DatabaseConnection) -> None:
    with session_scope(db) as s:
        for name, email, password, role, employee_id in DEMO_USERS:
            user = s.scalars(select(UserRow).where(UserRow.email == email)).first()
            if user is None:
                user = UserRow(name=name, email=email, email_verified=True, role=role.value)
                s.add(user)
                s.flush()
            else:
                user.name = name
                user.role = role.value

            if user.account is None:
                s.add(AccountRow(user_id=user.id, password_hash=generate_password_hash(password)))
            else:
                user.account.password_hash = generate_password_hash(password)

            if user.profile is None:
                s.add(ProfileRow(user_id=user.id, employee_id=employee_id, name=name))
    logger.info("demo users ready (%d)", len(DEMO_USERS))


def list_tables(db: DatabaseConnection) -> list[str]:
    return sorted(inspect(db.engine).get_table_names())
