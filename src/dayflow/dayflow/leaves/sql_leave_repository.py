from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import joinedload

from ..common.bulk import BulkDeleteReport
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.models import LeaveRow, UserRow
from ..database.session import session_scope
from ..users.sql_user_repository import row_to_summary
from .model import LeaveRecord
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def row_to_leave(row: LeaveRow, *, with_user: bool = True) -> LeaveRecord:
    return LeaveRecord(
        id=row.id,
        user_id=row.user_id,
        leave_type=LeaveType(row.leave_type),
        start_date=row.start_date,
        end_date=row.end_date,
        reason=row.reason,
        status=LeaveStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
        user=row_to_summary(row.user) if with_user else None,
    )


class SQLLeaveRepository(LeaveRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, leave_id: str) -> Optional[LeaveRecord]:
        with session_scope(self._db) as s:
            row = s.get(LeaveRow, leave_id)
            return row_to_leave(row) if row else None

    def create(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRecord:
        with session_scope(self._db) as s:
            if s.get(UserRow, user_id) is None:
                raise NotFoundError("User not found")
            row = LeaveRow(
                user_id=user_id,
                leave_type=LeaveType(leave_type).value,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                status=LeaveStatus.PENDING.value,
            )
            s.add(row)
            s.flush()
            return row_to_leave(row)

    def update(self, leave_id: str, changes: Mapping[str, Any]) -> LeaveRecord:
        with session_scope(self._db) as s:
            row = s.get(LeaveRow, leave_id)
            if row is None:
                raise NotFoundError("Leave not found")
            if changes.get("leave_type"):
                row.leave_type = LeaveType(changes["leave_type"]).value
            if changes.get("status"):
                row.status = LeaveStatus(changes["status"]).value
            if changes.get("start_date"):
                row.start_date = changes["start_date"]
            if changes.get("end_date"):
                row.end_date = changes["end_date"]
            if changes.get("reason") is not None:
                row.reason = changes["reason"]
            if row.end_date < row.start_date:
                raise ValidationError(
                    "End date must be on or after start date",
                    field_errors={"endDate": ["End date must be on or after start date"]},
                )
            s.flush()
            return row_to_leave(row)

    def delete(self, leave_id: str) -> str:
        with session_scope(self._db) as s:
            result = s.execute(delete(LeaveRow).where(LeaveRow.id == leave_id))
            if result.rowcount == 0:
                raise NotFoundError("Leave not found")
        return leave_id

    def bulk_delete(self, leave_ids: Sequence[str]) -> BulkDeleteReport:
        ids = list(leave_ids)
        with session_scope(self._db) as s:
            existing = s.scalars(select(LeaveRow.id).where(LeaveRow.id.in_(ids))).all()
            s.execute(delete(LeaveRow).where(LeaveRow.id.in_(existing)))
        logger.info("bulk leave delete: %d of %d", len(existing), len(ids))
        return BulkDeleteReport.build(ids, existing)

    def list_for_user(self, user_id: str, *, limit: Optional[int] = None) -> List[LeaveRecord]:
        stmt = (
            select(LeaveRow)
            .options(joinedload(LeaveRow.user))
            .where(LeaveRow.user_id == user_id)
            .order_by(LeaveRow.created_at.desc(), LeaveRow.start_date.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        with session_scope(self._db) as s:
            return [row_to_leave(r) for r in s.scalars(stmt).all()]

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> List[LeaveRecord]:
        stmt = select(LeaveRow).options(joinedload(LeaveRow.user)).order_by(LeaveRow.created_at.desc())
        if status is not None:
            stmt = stmt.where(LeaveRow.status == LeaveStatus(status).value)
        with session_scope(self._db) as s:
            return [row_to_leave(r) for r in s.scalars(stmt).all()]

    def list_starting_between(self, user_id: str, start: date, end: date) -> List[LeaveRecord]:
        stmt = select(LeaveRow).where(
            LeaveRow.user_id == user_id,
            LeaveRow.start_date >= start,
            LeaveRow.start_date <= end,
        )
        with session_scope(self._db) as s:
            return [row_to_leave(r, with_user=False) for r in s.scalars(stmt).all()]

    def count(self, *, status: Optional[LeaveStatus] = None) -> int:
        stmt = select(func.count()).select_from(LeaveRow)
        if status is not None:
            stmt = stmt.where(LeaveRow.status == LeaveStatus(status).value)
        with session_scope(self._db) as s:
            return int(s.scalar(stmt) or 0)
