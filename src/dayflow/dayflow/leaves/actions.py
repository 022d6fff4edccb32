from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..common.actions import action, required
from ..common.revalidate import Revalidator
from ..common.validators import require_choice, require_date
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError
from ..core.result import fail, ok
from .repository import LeaveRepository
from .schemas import ApplyLeaveSchema
from .service import LeaveService

MY_LEAVES_VIEW = "/profile/leaves"
ADMIN_LEAVES_VIEW = "/admin/leaves"


class LeaveActions:
    def __init__(self, leaves: LeaveRepository, service: LeaveService, revalidator: Revalidator):
        self._leaves = leaves
        self._service = service
        self._revalidator = revalidator

    def _stale(self) -> None:
        self._revalidator.revalidate_path(MY_LEAVES_VIEW)
        self._revalidator.revalidate_path(ADMIN_LEAVES_VIEW)

    def _submit(self, data: Mapping[str, Any]):
        missing = required(
            "User, dates, and leave type are required",
            user_id=data.get("userId"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            leave_type=data.get("leaveType"),
        )
        if missing:
            return None, missing
        form = ApplyLeaveSchema.model_validate(data)
        return self._service.apply(user_id=str(data["userId"]), form=form), None

    @action("Error applying for leave")
    def apply_leave(self, data: Mapping[str, Any]):
        leave, failure = self._submit(data)
        if failure:
            return failure
        self._stale()
        return ok("Leave application submitted successfully", leave)

    @action("Error creating leave")
    def create_leave(self, data: Mapping[str, Any]):
        leave, failure = self._submit(data)
        if failure:
            return failure
        self._stale()
        return ok("Leave created successfully", leave)

    @action("Error updating leave")
    def update_leave(self, leave_id: str, data: Mapping[str, Any]):
        """Admin edit, also used to approve or reject."""

        missing = required("Leave ID is required", id=leave_id)
        if missing:
            return missing
        changes = {
            "leave_type": require_choice(LeaveType, data["leaveType"], "Leave type") if data.get("leaveType") else None,
            "status": require_choice(LeaveStatus, data["status"], "Status") if data.get("status") else None,
            "start_date": require_date(data["startDate"], "Start date") if data.get("startDate") else None,
            "end_date": require_date(data["endDate"], "End date") if data.get("endDate") else None,
            "reason": data.get("reason"),
        }
        leave = self._leaves.update(leave_id, changes)
        self._stale()
        return ok("Leave updated successfully", leave)

    @action("Error cancelling leave")
    def cancel_leave(self, leave_id: str):
        # No PENDING-only guard here; the portal only offers cancel on pending leaves.
        missing = required("Leave ID is required", id=leave_id)
        if missing:
            return missing
        deleted_id = self._leaves.delete(leave_id)
        self._stale()
        return ok("Leave cancelled successfully", deleted_id)

    @action("Error deleting leave")
    def delete_leave(self, leave_id: str):
        missing = required("Leave ID is required", id=leave_id)
        if missing:
            return missing
        deleted_id = self._leaves.delete(leave_id)
        self._stale()
        return ok("Leave deleted successfully", deleted_id)

    @action("Error deleting leaves")
    def bulk_delete_leaves(self, leave_ids: Sequence[str]):
        missing = required("Leave IDs are required", ids=list(leave_ids or []))
        if missing:
            return missing
        report = self._leaves.bulk_delete(leave_ids)
        self._stale()
        if not report.all_deleted:
            return fail("Some leaves could not be deleted", data=report)
        return ok("Leaves deleted successfully", report)

    @action("Error fetching leaves")
    def fetch_user_leaves(self, user_id: str):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        return ok("Leaves fetched successfully", self._leaves.list_for_user(user_id))

    @action("Error fetching leaves")
    def fetch_all_leaves(self):
        return ok("Leaves fetched successfully", self._leaves.list_all())

    @action("Error fetching leave")
    def fetch_leave(self, leave_id: str):
        missing = required("Leave ID is required", id=leave_id)
        if missing:
            return missing
        leave = self._leaves.get_by_id(leave_id)
        if leave is None:
            raise NotFoundError("Leave not found")
        return ok("Leave fetched successfully", leave)

    @action("Error fetching leave statistics")
    def user_leave_stats(self, user_id: str, year: Optional[int] = None):
        missing = required("User ID is required", id=user_id)
        if missing:
            return missing
        return ok("Leave statistics fetched successfully", self._service.stats(user_id=user_id, year=year))
