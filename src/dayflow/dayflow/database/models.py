"""Relational schema (SQLAlchemy ORM).

Rows are mapped to the frozen domain dataclasses inside the repositories; ORM
objects never leave a session.
"""
from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship

from ..common.datetime_utils import utcnow
from ..core.enums import LeaveStatus, Role


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    email_verified = Column(Boolean, nullable=False, default=False)
    image = Column(String(512), nullable=True)
    role = Column(String(20), nullable=False, default=Role.EMPLOYEE.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    profile = relationship("ProfileRow", back_populates="user", uselist=False)
    account = relationship("AccountRow", back_populates="user", uselist=False)
    attendance = relationship("AttendanceRow", back_populates="user")
    leaves = relationship("LeaveRow", back_populates="user")


class AccountRow(Base):
    """Credentials owned by the auth provider (one per user)."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("UserRow", back_populates="account")


class ProfileRow(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    employee_id = Column(String(32), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, default="")
    phone = Column(String(32), nullable=True)
    address = Column(Text, nullable=True)
    salary = Column(Integer, nullable=True)

    user = relationship("UserRow", back_populates="profile")


class AttendanceRow(Base):
    __tablename__ = "attendance"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)

    user = relationship("UserRow", back_populates="attendance")

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
        Index("idx_attendance_date", "date"),
    )


class LeaveRow(Base):
    __tablename__ = "leaves"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    leave_type = Column(String(20), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=LeaveStatus.PENDING.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("UserRow", back_populates="leaves")
