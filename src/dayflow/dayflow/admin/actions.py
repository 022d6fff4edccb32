from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.actions import action, required
from ..common.revalidate import Revalidator
from ..common.validators import require_choice, require_date
from ..core.enums import LeaveStatus
from ..core.result import ok
from ..leaves.actions import ADMIN_LEAVES_VIEW, MY_LEAVES_VIEW
from .service import AdminService


class AdminActions:
    def __init__(self, service: AdminService, revalidator: Revalidator):
        self._service = service
        self._revalidator = revalidator

    @action("Failed to fetch employees")
    def all_employees(self):
        return ok("Employees fetched successfully", self._service.all_employees())

    @action("Failed to fetch attendance records")
    def attendance_records(self, params: Optional[Mapping[str, Any]] = None):
        params = params or {}
        records = self._service.attendance_records(
            date_from=require_date(params["from"], "From") if params.get("from") else None,
            date_to=require_date(params["to"], "To") if params.get("to") else None,
        )
        return ok("Attendance records fetched successfully", records)

    @action("Failed to fetch leave requests")
    def leave_requests(self, params: Optional[Mapping[str, Any]] = None):
        params = params or {}
        status = require_choice(LeaveStatus, params["status"], "Status") if params.get("status") else None
        return ok("Leave requests fetched successfully", self._service.leave_requests(status=status))

    @action("Failed to update leave status")
    def update_leave_status(self, leave_id: str, data: Mapping[str, Any]):
        missing = required("Leave ID and status are required", id=leave_id, status=data.get("status"))
        if missing:
            return missing
        leave = self._service.decide_leave(
            leave_id=leave_id,
            status=require_choice(LeaveStatus, data["status"], "Status"),
        )
        self._revalidator.revalidate_path(MY_LEAVES_VIEW)
        self._revalidator.revalidate_path(ADMIN_LEAVES_VIEW)
        return ok(f"Leave {leave.status.value.lower()}", leave)

    @action("Failed to fetch dashboard")
    def dashboard(self):
        return ok("Dashboard fetched successfully", self._service.dashboard())
