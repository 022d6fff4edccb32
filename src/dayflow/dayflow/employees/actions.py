from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.actions import action, required
from ..common.pagination import clamp_window
from ..common.revalidate import Revalidator
from ..common.validators import require_choice
from ..core.constants import RECENT_DASHBOARD_ROWS, RECENT_DETAIL_ROWS
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..core.result import fail, ok
from .repository import EmployeeRepository
from .service import EmployeeService

EMPLOYEES_VIEW = "/admin/employees"

_PROFILE_KEYS = {
    "employeeId": "employee_id",
    "name": "name",
    "phone": "phone",
    "address": "address",
    "salary": "salary",
}


def user_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "name": data.get("name"),
        "email": data.get("email"),
        "email_verified": data.get("emailVerified"),
        "image": data.get("image"),
        "role": require_choice(Role, data["role"], "Role") if data.get("role") else None,
    }


def profile_fields(data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Snake-case view of a nested ``profile`` payload, or None when absent."""

    profile = data.get("profile")
    if profile is None:
        return None
    return {snake: profile[camel] for camel, snake in _PROFILE_KEYS.items() if camel in profile}


class EmployeeActions:
    def __init__(self, employees: EmployeeRepository, service: EmployeeService, revalidator: Revalidator):
        self._employees = employees
        self._service = service
        self._revalidator = revalidator

    @action("Error creating employee")
    def create_employee(self, data: Mapping[str, Any]):
        missing = required("Name and email are required", name=data.get("name"), email=data.get("email"))
        if missing:
            return missing
        profile = profile_fields(data)
        if profile is not None and not profile.get("employee_id"):
            return fail("Employee ID is required")
        employee = self._employees.create(user_fields(data), profile)
        self._revalidator.revalidate_path(EMPLOYEES_VIEW)
        return ok("Employee created successfully", employee)

    @action("Error updating employee")
    def update_employee(self, user_id: str, data: Mapping[str, Any]):
        missing = required("Employee ID is required", id=user_id)
        if missing:
            return missing
        employee = self._employees.update(user_id, user_fields(data), profile_fields(data))
        self._revalidator.revalidate_path(EMPLOYEES_VIEW)
        return ok("Employee updated successfully", employee)

    @action("Error deleting employee")
    def delete_employee(self, user_id: str):
        missing = required("Employee ID is required", id=user_id)
        if missing:
            return missing
        deleted_id = self._employees.delete(user_id)
        self._revalidator.revalidate_path(EMPLOYEES_VIEW)
        return ok("Employee deleted successfully", deleted_id)

    @action("Error deleting employees")
    def bulk_delete_employees(self, user_ids: Sequence[str]):
        missing = required("Employee IDs are required", ids=list(user_ids or []))
        if missing:
            return missing
        report = self._employees.bulk_delete(user_ids)
        self._revalidator.revalidate_path(EMPLOYEES_VIEW)
        if not report.all_deleted:
            return fail("Some employees could not be deleted", data=report)
        return ok("Employees deleted successfully", report)

    @action("Failed to fetch employees")
    def list_employees(self):
        return ok("Employees fetched successfully", self._employees.list_all())

    @action("Failed to fetch filtered employees")
    def filter_employees(self, params: Mapping[str, Any]):
        limit, offset = clamp_window(params.get("limit"), params.get("offset"))
        page = self._employees.filter(
            search=params.get("search") or None,
            role=require_choice(Role, params["role"], "Role") if params.get("role") else None,
            limit=limit,
            offset=offset,
        )
        return ok("Employees fetched successfully", page)

    @action("Failed to fetch employee")
    def fetch_employee(self, user_id: str):
        missing = required("Employee ID is required", id=user_id)
        if missing:
            return missing
        detail = self._employees.detail(user_id, recent=RECENT_DETAIL_ROWS)
        if detail is None:
            raise NotFoundError("Employee not found")
        return ok("Employee fetched successfully", detail)

    @action("Failed to fetch dashboard")
    def employee_dashboard(self, user_id: str):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        dashboard = self._employees.dashboard(user_id, recent=RECENT_DASHBOARD_ROWS)
        if dashboard is None:
            raise NotFoundError("Employee not found")
        return ok("Dashboard fetched successfully", dashboard)

    @action("Failed to fetch recent activity")
    def recent_activity(self, user_id: str):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        return ok("Recent activity fetched successfully", self._service.recent_activity(user_id))
