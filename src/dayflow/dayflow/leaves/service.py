from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import today
from ..core.enums import LeaveStatus
from .model import LeaveRecord, LeaveStats
from .repository import LeaveRepository
from .schemas import ApplyLeaveSchema


class LeaveService:
    """Use case: leave applications and per-year statistics."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def apply(self, *, user_id: str, form: ApplyLeaveSchema) -> LeaveRecord:
        # New leaves are always PENDING; the repository never takes a status on create.
        return self._leaves.create(
            user_id=user_id,
            leave_type=form.leave_type,
            start_date=form.start_date,
            end_date=form.end_date,
            reason=form.reason,
        )

    def stats(self, *, user_id: str, year: Optional[int] = None) -> LeaveStats:
        year = int(year) if year else today().year
        leaves = self._leaves.list_starting_between(user_id, date(year, 1, 1), date(year, 12, 31))

        by_status = {s: 0 for s in LeaveStatus}
        for leave in leaves:
            by_status[leave.status] += 1

        return LeaveStats(
            year=year,
            total=len(leaves),
            pending=by_status[LeaveStatus.PENDING],
            approved=by_status[LeaveStatus.APPROVED],
            rejected=by_status[LeaveStatus.REJECTED],
            total_days=sum(leave.duration_days for leave in leaves if leave.status == LeaveStatus.APPROVED),
        )
