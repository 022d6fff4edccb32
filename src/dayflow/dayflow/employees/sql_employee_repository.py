from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..attendance.sql_attendance_repository import row_to_attendance
from ..common.bulk import BulkDeleteReport
from ..common.pagination import Page
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.models import AccountRow, AttendanceRow, LeaveRow, ProfileRow, UserRow
from ..database.session import session_scope
from ..leaves.sql_leave_repository import row_to_leave
from ..profiles.sql_profile_repository import row_to_profile, upsert_profile_row
from ..users.sql_user_repository import row_to_user, search_users
from .model import Employee, EmployeeDashboard, EmployeeDetail
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_USER_FIELDS = ("name", "email", "email_verified", "image", "role")


def _attendance_count():
    return (
        select(func.count(AttendanceRow.id))
        .where(AttendanceRow.user_id == UserRow.id)
        .correlate(UserRow)
        .scalar_subquery()
    )


def _leave_count():
    return select(func.count(LeaveRow.id)).where(LeaveRow.user_id == UserRow.id).correlate(UserRow).scalar_subquery()


def _employee_select():
    return select(UserRow, _attendance_count(), _leave_count()).options(joinedload(UserRow.profile))


def _to_employee(row: UserRow, attendance_count: int, leave_count: int) -> Employee:
    return Employee(
        user=row_to_user(row),
        profile=row_to_profile(row.profile) if row.profile else None,
        attendance_count=int(attendance_count or 0),
        leave_count=int(leave_count or 0),
    )


def _search_employees(term: str):
    needle = term.strip().lower()
    return or_(
        search_users(term),
        UserRow.profile.has(
            or_(
                func.lower(ProfileRow.employee_id).contains(needle, autoescape=True),
                func.lower(ProfileRow.phone).contains(needle, autoescape=True),
            )
        ),
    )


def _ensure_unique(s: Session, *, email: Optional[str], employee_id: Optional[str], user_id: Optional[str] = None) -> None:
    if email:
        stmt = select(UserRow.id).where(UserRow.email == email)
        if user_id:
            stmt = stmt.where(UserRow.id != user_id)
        if s.scalar(stmt):
            raise ConflictError("User with this email already exists", field="email")
    if employee_id:
        stmt = select(ProfileRow.id).where(ProfileRow.employee_id == employee_id)
        if user_id:
            stmt = stmt.where(ProfileRow.user_id != user_id)
        if s.scalar(stmt):
            raise ConflictError("Employee ID already exists", field="employeeId")


class SQLEmployeeRepository(EmployeeRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def _load(self, s: Session, user_id: str) -> Optional[Employee]:
        found = s.execute(_employee_select().where(UserRow.id == user_id)).first()
        return _to_employee(*found) if found else None

    def create(self, user: Mapping[str, Any], profile: Optional[Mapping[str, Any]] = None) -> Employee:
        if profile is not None and not profile.get("employee_id"):
            raise ValidationError("Employee ID is required", field_errors={"employeeId": ["Employee ID is required"]})
        email = str(user["email"]).strip().lower()
        try:
            with session_scope(self._db) as s:
                _ensure_unique(s, email=email, employee_id=profile.get("employee_id") if profile else None)
                row = UserRow(
                    name=user["name"],
                    email=email,
                    role=Role(user.get("role") or Role.EMPLOYEE).value,
                    email_verified=bool(user.get("email_verified") or False),
                    image=user.get("image"),
                )
                s.add(row)
                s.flush()
                if profile is not None:
                    s.add(
                        ProfileRow(
                            user_id=row.id,
                            employee_id=profile["employee_id"],
                            name=profile.get("name") or row.name,
                            phone=profile.get("phone"),
                            address=profile.get("address"),
                            salary=profile.get("salary"),
                        )
                    )
                    s.flush()
                return self._load(s, row.id)
        except IntegrityError as e:
            raise ConflictError("Email or employee ID already exists") from e

    def update(self, user_id: str, user: Mapping[str, Any], profile: Optional[Mapping[str, Any]] = None) -> Employee:
        email = str(user["email"]).strip().lower() if user.get("email") else None
        try:
            with session_scope(self._db) as s:
                row = s.get(UserRow, user_id)
                if row is None:
                    raise NotFoundError("Employee not found")
                _ensure_unique(s, email=email, employee_id=(profile or {}).get("employee_id"), user_id=user_id)
                for key in _USER_FIELDS:
                    if user.get(key) is None:
                        continue
                    value = user[key]
                    if key == "role":
                        value = Role(value).value
                    elif key == "email":
                        value = email
                    setattr(row, key, value)
                if profile is not None:
                    upsert_profile_row(s, user_id, profile)
                s.flush()
                return self._load(s, user_id)
        except IntegrityError as e:
            raise ConflictError("Email or employee ID already exists") from e

    def delete(self, user_id: str) -> str:
        with session_scope(self._db) as s:
            if s.scalar(select(UserRow.id).where(UserRow.id == user_id)) is None:
                raise NotFoundError("Employee not found")
            # Children first: attendance, leaves, profile, credentials, then the user.
            s.execute(delete(AttendanceRow).where(AttendanceRow.user_id == user_id))
            s.execute(delete(LeaveRow).where(LeaveRow.user_id == user_id))
            s.execute(delete(ProfileRow).where(ProfileRow.user_id == user_id))
            s.execute(delete(AccountRow).where(AccountRow.user_id == user_id))
            s.execute(delete(UserRow).where(UserRow.id == user_id))
        logger.info("employee %s deleted with dependent rows", user_id)
        return user_id

    def bulk_delete(self, user_ids: Sequence[str]) -> BulkDeleteReport:
        ids = list(user_ids)
        with session_scope(self._db) as s:
            existing = s.scalars(select(UserRow.id).where(UserRow.id.in_(ids))).all()
            s.execute(delete(AttendanceRow).where(AttendanceRow.user_id.in_(existing)))
            s.execute(delete(LeaveRow).where(LeaveRow.user_id.in_(existing)))
            s.execute(delete(ProfileRow).where(ProfileRow.user_id.in_(existing)))
            s.execute(delete(AccountRow).where(AccountRow.user_id.in_(existing)))
            s.execute(delete(UserRow).where(UserRow.id.in_(existing)))
        logger.info("bulk employee delete: %d of %d", len(existing), len(ids))
        return BulkDeleteReport.build(ids, existing)

    def get(self, user_id: str) -> Optional[Employee]:
        with session_scope(self._db) as s:
            return self._load(s, user_id)

    def list_all(self, *, role: Optional[Role] = None) -> List[Employee]:
        stmt = _employee_select().order_by(UserRow.created_at.desc(), UserRow.id)
        if role is not None:
            stmt = stmt.where(UserRow.role == Role(role).value)
        with session_scope(self._db) as s:
            return [_to_employee(*found) for found in s.execute(stmt).all()]

    def filter(
        self,
        *,
        search: Optional[str] = None,
        role: Optional[Role] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Page[Employee]:
        conditions = []
        if role is not None:
            conditions.append(UserRow.role == Role(role).value)
        if search and search.strip():
            conditions.append(_search_employees(search))

        with session_scope(self._db) as s:
            total = s.scalar(select(func.count()).select_from(UserRow).where(*conditions)) or 0
            found = s.execute(
                _employee_select().where(*conditions).order_by(UserRow.created_at.desc(), UserRow.id).limit(limit).offset(offset)
            ).all()
            return Page(items=[_to_employee(*f) for f in found], total=int(total), limit=limit, offset=offset)

    def _recent(self, s: Session, user_id: str, recent: int):
        attendance = s.scalars(
            select(AttendanceRow).where(AttendanceRow.user_id == user_id).order_by(AttendanceRow.date.desc()).limit(recent)
        ).all()
        leaves = s.scalars(
            select(LeaveRow).where(LeaveRow.user_id == user_id).order_by(LeaveRow.start_date.desc()).limit(recent)
        ).all()
        return (
            [row_to_attendance(r, with_user=False) for r in attendance],
            [row_to_leave(r, with_user=False) for r in leaves],
        )

    def detail(self, user_id: str, *, recent: int = 10) -> Optional[EmployeeDetail]:
        with session_scope(self._db) as s:
            row = s.get(UserRow, user_id)
            if row is None:
                return None
            attendance, leaves = self._recent(s, user_id, recent)
            return EmployeeDetail(
                user=row_to_user(row),
                profile=row_to_profile(row.profile) if row.profile else None,
                attendance=attendance,
                leaves=leaves,
            )

    def dashboard(self, user_id: str, *, recent: int = 5) -> Optional[EmployeeDashboard]:
        with session_scope(self._db) as s:
            row = s.get(UserRow, user_id)
            if row is None:
                return None
            attendance, leaves = self._recent(s, user_id, recent)
            return EmployeeDashboard(
                profile=row_to_profile(row.profile) if row.profile else None,
                attendance=attendance,
                leaves=leaves,
            )
