from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.actions import action, required
from ..common.pagination import clamp_window
from ..common.revalidate import Revalidator
from ..common.validators import require_choice, require_date
from ..core.enums import AttendanceStatus
from ..core.result import fail, ok
from .model import AttendanceFilter
from .repository import AttendanceRepository

ATTENDANCE_VIEW = "/admin/attendance"


class AttendanceActions:
    def __init__(self, attendance: AttendanceRepository, revalidator: Revalidator):
        self._attendance = attendance
        self._revalidator = revalidator

    @action("Error creating attendance")
    def create_attendance(self, data: Mapping[str, Any]):
        missing = required(
            "User, date, and status are required",
            user_id=data.get("userId"),
            date=data.get("date"),
            status=data.get("status"),
        )
        if missing:
            return missing
        record = self._attendance.create(
            user_id=str(data["userId"]),
            date=require_date(data["date"], "Date"),
            status=require_choice(AttendanceStatus, data["status"], "Status"),
        )
        self._revalidator.revalidate_path(ATTENDANCE_VIEW)
        return ok("Attendance created successfully", record)

    @action("Error marking attendance")
    def mark_attendance(self, data: Mapping[str, Any]):
        missing = required(
            "User, date, and status are required",
            user_id=data.get("userId"),
            date=data.get("date"),
            status=data.get("status"),
        )
        if missing:
            return missing
        record = self._attendance.mark(
            user_id=str(data["userId"]),
            date=require_date(data["date"], "Date"),
            status=require_choice(AttendanceStatus, data["status"], "Status"),
        )
        self._revalidator.revalidate_path(ATTENDANCE_VIEW)
        return ok("Attendance marked successfully", record)

    @action("Error updating attendance")
    def update_attendance(self, attendance_id: str, data: Mapping[str, Any]):
        missing = required("Attendance ID is required", id=attendance_id)
        if missing:
            return missing
        record = self._attendance.update(
            attendance_id,
            status=require_choice(AttendanceStatus, data["status"], "Status") if data.get("status") else None,
            date=require_date(data["date"], "Date") if data.get("date") else None,
            user_id=data.get("userId") or None,
        )
        self._revalidator.revalidate_path(ATTENDANCE_VIEW)
        return ok("Attendance updated successfully", record)

    @action("Error deleting attendance")
    def delete_attendance(self, attendance_id: str):
        missing = required("Attendance ID is required", id=attendance_id)
        if missing:
            return missing
        deleted_id = self._attendance.delete(attendance_id)
        self._revalidator.revalidate_path(ATTENDANCE_VIEW)
        return ok("Attendance deleted successfully", deleted_id)

    @action("Error deleting attendances")
    def bulk_delete_attendances(self, attendance_ids: Sequence[str]):
        missing = required("Attendance IDs are required", ids=list(attendance_ids or []))
        if missing:
            return missing
        report = self._attendance.bulk_delete(attendance_ids)
        self._revalidator.revalidate_path(ATTENDANCE_VIEW)
        if not report.all_deleted:
            return fail("Some attendances could not be deleted", data=report)
        return ok("Attendances deleted successfully", report)

    @action("Failed to fetch filtered attendances")
    def filter_attendances(self, params: Mapping[str, Any]):
        limit, offset = clamp_window(params.get("limit"), params.get("offset"))
        flt = AttendanceFilter(
            status=require_choice(AttendanceStatus, params["status"], "Status") if params.get("status") else None,
            search=params.get("search") or None,
            user_id=params.get("userId") or None,
            date_from=require_date(params["dateFrom"], "Date from") if params.get("dateFrom") else None,
            date_to=require_date(params["dateTo"], "Date to") if params.get("dateTo") else None,
            limit=limit,
            offset=offset,
        )
        return ok("Attendances fetched successfully", self._attendance.filter(flt))

    @action("Failed to fetch attendance")
    def fetch_user_attendance(self, user_id: str, params: Optional[Mapping[str, Any]] = None):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        params = params or {}
        records = self._attendance.list_for_user(
            user_id,
            date_from=require_date(params["dateFrom"], "Date from") if params.get("dateFrom") else None,
            date_to=require_date(params["dateTo"], "Date to") if params.get("dateTo") else None,
        )
        return ok("Attendance fetched successfully", records)

    @action("Failed to fetch attendance")
    def fetch_all_attendance(self):
        return ok("Attendance fetched successfully", self._attendance.list_all())
