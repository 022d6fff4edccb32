from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from dayflow.admin.service import AdminService
from dayflow.common.pagination import Page
from dayflow.core.enums import AttendanceStatus, LeaveStatus, LeaveType, Role
from dayflow.core.exceptions import NotFoundError, ValidationError
from dayflow.leaves.model import LeaveRecord


class FakeEmployees:
    def __init__(self, total: int):
        self.total = total
        self.calls = []

    def list_all(self, *, role=None):
        self.calls.append(role)
        return []

    def filter(self, *, search=None, role=None, limit=10, offset=0):
        return Page(items=[], total=self.total, limit=limit, offset=offset)


class FakeAttendance:
    def __init__(self):
        self.ranges = []

    def list_all(self, *, date_from=None, date_to=None):
        self.ranges.append((date_from, date_to))
        return []

    def count_by_status(self, on):
        counts = {s: 0 for s in AttendanceStatus}
        counts[AttendanceStatus.PRESENT] = 4
        return counts


class FakeLeaves:
    def __init__(self):
        self._leaves = {
            "l1": LeaveRecord(
                id="l1",
                user_id="u1",
                leave_type=LeaveType.SICK,
                start_date=date(2025, 1, 5),
                end_date=date(2025, 1, 7),
                reason="Flu and fever",
                status=LeaveStatus.PENDING,
            )
        }

    def update(self, leave_id, changes):
        if leave_id not in self._leaves:
            raise NotFoundError("Leave not found")
        self._leaves[leave_id] = replace(self._leaves[leave_id], status=changes["status"])
        return self._leaves[leave_id]

    def list_all(self, *, status=None):
        return [l for l in self._leaves.values() if status is None or l.status == status]

    def count(self, *, status=None):
        return len(self.list_all(status=status))


@pytest.fixture
def service():
    return AdminService(FakeEmployees(total=12), FakeAttendance(), FakeLeaves())


def test_decide_leave_accepts_only_decisions(service):
    with pytest.raises(ValidationError):
        service.decide_leave(leave_id="l1", status=LeaveStatus.PENDING)

    assert service.decide_leave(leave_id="l1", status=LeaveStatus.APPROVED).status == LeaveStatus.APPROVED
    # A decided leave can be decided again.
    assert service.decide_leave(leave_id="l1", status=LeaveStatus.REJECTED).status == LeaveStatus.REJECTED

    with pytest.raises(NotFoundError):
        service.decide_leave(leave_id="missing", status=LeaveStatus.APPROVED)


def test_dashboard_summarises_the_day(service):
    board = service.dashboard(day=date(2025, 1, 6))

    assert board.day == date(2025, 1, 6)
    assert board.total_employees == 12
    assert board.attendance_today[AttendanceStatus.PRESENT] == 4
    assert board.pending_leaves == 1


def test_listings_pass_filters_through(service):
    service.all_employees()
    assert service._employees.calls == [Role.EMPLOYEE]

    service.attendance_records(date_from=date(2025, 1, 1), date_to=date(2025, 1, 31))
    assert service._attendance.ranges == [(date(2025, 1, 1), date(2025, 1, 31))]

    with pytest.raises(ValidationError):
        service.attendance_records(date_from=date(2025, 2, 1), date_to=date(2025, 1, 1))

    assert service.leave_requests(status=LeaveStatus.APPROVED) == []
    assert len(service.leave_requests()) == 1


def test_update_leave_status_action(container, make_employee):
    employee = make_employee()
    leave = container.leave_actions.apply_leave(
        {
            "userId": employee.user.id,
            "leaveType": "ANNUAL",
            "startDate": "2025-05-01",
            "endDate": "2025-05-02",
            "reason": "Family wedding trip",
        }
    ).data

    missing = container.admin_actions.update_leave_status(leave.id, {})
    assert missing.message == "Leave ID and status are required"

    approved = container.admin_actions.update_leave_status(leave.id, {"status": "APPROVED"})
    assert approved.success
    assert approved.message == "Leave approved"
    assert container.admin_actions.leave_requests({"status": "PENDING"}).data == []
