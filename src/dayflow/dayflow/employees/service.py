from __future__ import annotations

from typing import List

from ..core.constants import RECENT_ACTIVITY_LIMIT, RECENT_ACTIVITY_PER_SOURCE
from ..core.exceptions import NotFoundError
from .model import ActivityItem
from .repository import EmployeeRepository


class EmployeeService:
    """Use case: derived employee views (activity feed)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def recent_activity(self, user_id: str) -> List[ActivityItem]:
        recent = self._employees.dashboard(user_id, recent=RECENT_ACTIVITY_PER_SOURCE)
        if recent is None:
            raise NotFoundError("Employee not found")

        items = [
            ActivityItem(type="ATTENDANCE", date=a.date, message=f"Attendance marked as {a.status.value}")
            for a in recent.attendance
        ]
        items += [
            ActivityItem(
                type="LEAVE",
                date=leave.start_date,
                message=f"Leave {leave.status.value.lower()} ({leave.leave_type.value})",
            )
            for leave in recent.leaves
        ]
        items.sort(key=lambda item: item.date, reverse=True)
        return items[:RECENT_ACTIVITY_LIMIT]
