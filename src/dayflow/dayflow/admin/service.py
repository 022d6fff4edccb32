from __future__ import annotations

from datetime import date
from typing import List, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.model import LeaveRecord
from ..leaves.repository import LeaveRepository
from .model import AdminDashboard

DECISIONS = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class AdminService:
    """Use case: admin overview and leave decisions."""

    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository, leaves: LeaveRepository):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves

    def all_employees(self) -> List[Employee]:
        return self._employees.list_all(role=Role.EMPLOYEE)

    def attendance_records(self, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> List[AttendanceRecord]:
        if date_from and date_to and date_to < date_from:
            raise ValidationError("Date to must be on or after date from")
        return self._attendance.list_all(date_from=date_from, date_to=date_to)

    def leave_requests(self, *, status: Optional[LeaveStatus] = None) -> List[LeaveRecord]:
        return self._leaves.list_all(status=status)

    def decide_leave(self, *, leave_id: str, status: LeaveStatus) -> LeaveRecord:
        # Terminal leaves may be decided again; there is no transition guard.
        if status not in DECISIONS:
            raise ValidationError("Status must be APPROVED or REJECTED")
        return self._leaves.update(leave_id, {"status": status})

    def dashboard(self, *, day: Optional[date] = None) -> AdminDashboard:
        day = day or today()
        return AdminDashboard(
            day=day,
            total_employees=self._employees.filter(role=Role.EMPLOYEE, limit=1).total,
            attendance_today=self._attendance.count_by_status(day),
            pending_leaves=self._leaves.count(status=LeaveStatus.PENDING),
        )
