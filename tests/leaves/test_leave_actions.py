from __future__ import annotations

from dayflow.core.enums import LeaveStatus, LeaveType
from dayflow.leaves.actions import ADMIN_LEAVES_VIEW, MY_LEAVES_VIEW


def apply(container, user_id, start="2025-01-05", end="2025-01-07", **extra):
    data = {
        "userId": user_id,
        "leaveType": "SICK",
        "startDate": start,
        "endDate": end,
        "reason": "Flu and fever, doctor's note attached",
    }
    data.update(extra)
    return container.leave_actions.apply_leave(data)


def test_new_leave_is_always_pending(container, make_employee):
    employee = make_employee()

    result = apply(container, employee.user.id, status="APPROVED")

    assert result.success, result.message
    assert result.message == "Leave application submitted successfully"
    assert result.data.status == LeaveStatus.PENDING
    assert result.data.leave_type == LeaveType.SICK
    assert result.data.duration_days == 3
    assert result.data.user.id == employee.user.id
    assert container.revalidator.drain() == [MY_LEAVES_VIEW, ADMIN_LEAVES_VIEW]


def test_missing_fields_fail_flat(container):
    result = container.leave_actions.apply_leave({"userId": "u1", "leaveType": "SICK"})

    assert result.success is False
    assert result.message == "User, dates, and leave type are required"
    assert result.field_errors is None


def test_schema_violations_fail_with_field_errors(container, make_employee):
    employee = make_employee()

    result = apply(container, employee.user.id, start="2025-01-07", end="2025-01-05", reason="short")

    assert result.success is False
    assert result.field_errors["endDate"] == ["End date must be on or after start date"]
    assert result.field_errors["reason"] == ["Reason must be at least 10 characters"]
    assert container.leaves_repo.count() == 0


def test_leave_for_unknown_user(container):
    result = apply(container, "ghost")
    assert result.success is False
    assert result.message == "User not found"


def test_stats_count_the_year_and_approved_days(container, make_employee):
    employee = make_employee()
    uid = employee.user.id
    approved = apply(container, uid).data
    apply(container, uid, start="2025-03-10", end="2025-03-10")
    rejected = apply(container, uid, start="2025-06-01", end="2025-06-02").data
    apply(container, uid, start="2024-12-30", end="2025-01-02")

    container.leave_actions.update_leave(approved.id, {"status": "APPROVED"})
    container.leave_actions.update_leave(rejected.id, {"status": "REJECTED"})

    stats = container.leave_actions.user_leave_stats(uid, 2025).data
    assert (stats.year, stats.total, stats.pending, stats.approved, stats.rejected) == (2025, 3, 1, 1, 1)
    assert stats.total_days == 3


def test_admin_update_validates_dates_and_choices(container, make_employee):
    employee = make_employee()
    leave = apply(container, employee.user.id).data

    bad_order = container.leave_actions.update_leave(leave.id, {"endDate": "2025-01-01"})
    assert bad_order.success is False
    assert bad_order.field_errors == {"endDate": ["End date must be on or after start date"]}

    bad_status = container.leave_actions.update_leave(leave.id, {"status": "ARCHIVED"})
    assert bad_status.success is False
    assert bad_status.message == "Status must be one of: PENDING, APPROVED, REJECTED"

    changed = container.leave_actions.update_leave(leave.id, {"leaveType": "ANNUAL", "endDate": "2025-01-10"})
    assert changed.success, changed.message
    assert changed.data.leave_type == LeaveType.ANNUAL
    assert changed.data.duration_days == 6
    assert container.leave_actions.fetch_leave(leave.id).data.end_date.isoformat() == "2025-01-10"


def test_cancel_removes_the_leave(container, make_employee):
    employee = make_employee()
    leave = apply(container, employee.user.id).data

    result = container.leave_actions.cancel_leave(leave.id)
    assert result.success
    assert result.data == leave.id
    assert container.leave_actions.fetch_user_leaves(employee.user.id).data == []

    again = container.leave_actions.cancel_leave(leave.id)
    assert again.success is False
    assert again.message == "Leave not found"


def test_bulk_delete_reports_missing_ids(container, make_employee):
    employee = make_employee()
    first = apply(container, employee.user.id).data
    second = apply(container, employee.user.id, start="2025-02-01", end="2025-02-01").data

    partial = container.leave_actions.bulk_delete_leaves([first.id, "stale-id"])
    assert partial.success is False
    assert partial.data.deleted_ids == []
    assert partial.data.missing_ids == ["stale-id"]

    full = container.leave_actions.bulk_delete_leaves([second.id])
    assert full.success
    assert full.data.deleted_ids == [second.id]

    assert container.leave_actions.bulk_delete_leaves([]).message == "Leave IDs are required"


def test_admin_create_and_list(container, make_employee):
    employee = make_employee()
    created = container.leave_actions.create_leave(
        {
            "userId": employee.user.id,
            "leaveType": "UNPAID",
            "startDate": "2025-04-01",
            "endDate": "2025-04-02",
            "reason": "Personal errands abroad",
        }
    )
    assert created.success
    assert created.message == "Leave created successfully"

    listed = container.leave_actions.fetch_all_leaves().data
    assert [leave.id for leave in listed] == [created.data.id]
    assert listed[0].user.email == employee.user.email
