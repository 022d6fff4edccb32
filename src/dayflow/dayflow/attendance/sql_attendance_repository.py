from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..common.bulk import BulkDeleteReport
from ..common.pagination import Page
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.models import AttendanceRow, UserRow
from ..database.session import session_scope
from ..users.sql_user_repository import row_to_summary, search_users
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

DUPLICATE_DAY = "Attendance for this user and date already exists"


def row_to_attendance(row: AttendanceRow, *, with_user: bool = True) -> AttendanceRecord:
    return AttendanceRecord(
        id=row.id,
        user_id=row.user_id,
        date=row.date,
        status=AttendanceStatus(row.status),
        user=row_to_summary(row.user) if with_user else None,
    )


def _require_user(s: Session, user_id: str) -> None:
    if s.get(UserRow, user_id) is None:
        raise NotFoundError("User not found")


class SQLAttendanceRepository(AttendanceRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def create(self, *, user_id: str, date: date, status: AttendanceStatus) -> AttendanceRecord:
        try:
            with session_scope(self._db) as s:
                _require_user(s, user_id)
                row = AttendanceRow(user_id=user_id, date=date, status=AttendanceStatus(status).value)
                s.add(row)
                s.flush()
                return row_to_attendance(row)
        except IntegrityError as e:
            raise ConflictError(DUPLICATE_DAY) from e

    def _mark_once(self, user_id: str, day: date, status: AttendanceStatus) -> AttendanceRecord:
        with session_scope(self._db) as s:
            _require_user(s, user_id)
            row = s.scalars(
                select(AttendanceRow).where(AttendanceRow.user_id == user_id, AttendanceRow.date == day)
            ).first()
            if row is None:
                row = AttendanceRow(user_id=user_id, date=day, status=status.value)
                s.add(row)
            else:
                row.status = status.value
            s.flush()
            return row_to_attendance(row)

    def mark(self, *, user_id: str, date: date, status: AttendanceStatus) -> AttendanceRecord:
        status = AttendanceStatus(status)
        try:
            return self._mark_once(user_id, date, status)
        except IntegrityError:
            # Lost an insert race on (user_id, date); the row exists now.
            logger.info("attendance upsert race for user %s on %s, retrying as update", user_id, date)
            return self._mark_once(user_id, date, status)

    def update(
        self,
        attendance_id: str,
        *,
        status: Optional[AttendanceStatus] = None,
        date: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> AttendanceRecord:
        try:
            with session_scope(self._db) as s:
                row = s.get(AttendanceRow, attendance_id)
                if row is None:
                    raise NotFoundError("Attendance not found")
                if status is not None:
                    row.status = AttendanceStatus(status).value
                if date is not None:
                    row.date = date
                if user_id and user_id != row.user_id:
                    _require_user(s, user_id)
                    row.user_id = user_id
                s.flush()
                # Re-read the owner after a user_id change.
                s.expire(row, ["user"])
                return row_to_attendance(row)
        except IntegrityError as e:
            raise ConflictError(DUPLICATE_DAY) from e

    def delete(self, attendance_id: str) -> str:
        with session_scope(self._db) as s:
            result = s.execute(delete(AttendanceRow).where(AttendanceRow.id == attendance_id))
            if result.rowcount == 0:
                raise NotFoundError("Attendance not found")
        return attendance_id

    def bulk_delete(self, attendance_ids: Sequence[str]) -> BulkDeleteReport:
        ids = list(attendance_ids)
        with session_scope(self._db) as s:
            existing = s.scalars(select(AttendanceRow.id).where(AttendanceRow.id.in_(ids))).all()
            s.execute(delete(AttendanceRow).where(AttendanceRow.id.in_(existing)))
        logger.info("bulk attendance delete: %d of %d", len(existing), len(ids))
        return BulkDeleteReport.build(ids, existing)

    def filter(self, flt: AttendanceFilter) -> Page[AttendanceRecord]:
        conditions = []
        if flt.status:
            conditions.append(AttendanceRow.status == AttendanceStatus(flt.status).value)
        if flt.user_id:
            conditions.append(AttendanceRow.user_id == flt.user_id)
        if flt.date_from:
            conditions.append(AttendanceRow.date >= flt.date_from)
        if flt.date_to:
            conditions.append(AttendanceRow.date <= flt.date_to)
        if flt.search and flt.search.strip():
            conditions.append(AttendanceRow.user.has(search_users(flt.search)))

        with session_scope(self._db) as s:
            total = s.scalar(select(func.count()).select_from(AttendanceRow).where(*conditions)) or 0
            rows = s.scalars(
                select(AttendanceRow)
                .options(joinedload(AttendanceRow.user))
                .where(*conditions)
                .order_by(AttendanceRow.date.desc(), AttendanceRow.id)
                .limit(flt.limit)
                .offset(flt.offset)
            ).all()
            return Page(
                items=[row_to_attendance(r) for r in rows],
                total=int(total),
                limit=flt.limit,
                offset=flt.offset,
            )

    def list_for_user(
        self,
        user_id: str,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[AttendanceRecord]:
        stmt = select(AttendanceRow).where(AttendanceRow.user_id == user_id)
        if date_from:
            stmt = stmt.where(AttendanceRow.date >= date_from)
        if date_to:
            stmt = stmt.where(AttendanceRow.date <= date_to)
        stmt = stmt.order_by(AttendanceRow.date.desc())
        if limit:
            stmt = stmt.limit(limit)
        with session_scope(self._db) as s:
            return [row_to_attendance(r, with_user=False) for r in s.scalars(stmt).all()]

    def list_all(self, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> List[AttendanceRecord]:
        stmt = select(AttendanceRow).options(joinedload(AttendanceRow.user))
        if date_from:
            stmt = stmt.where(AttendanceRow.date >= date_from)
        if date_to:
            stmt = stmt.where(AttendanceRow.date <= date_to)
        with session_scope(self._db) as s:
            rows = s.scalars(stmt.order_by(AttendanceRow.date.desc())).all()
            return [row_to_attendance(r) for r in rows]

    def count_by_status(self, on: date) -> Dict[AttendanceStatus, int]:
        counts = {status: 0 for status in AttendanceStatus}
        with session_scope(self._db) as s:
            for status, n in s.execute(
                select(AttendanceRow.status, func.count()).where(AttendanceRow.date == on).group_by(AttendanceRow.status)
            ).all():
                counts[AttendanceStatus(status)] = int(n)
        return counts
