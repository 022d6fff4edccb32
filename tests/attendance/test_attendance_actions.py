from __future__ import annotations

from dayflow.attendance.actions import ATTENDANCE_VIEW


def test_mark_requires_fields_and_valid_status(container, make_employee):
    employee = make_employee()
    actions = container.attendance_actions

    assert actions.mark_attendance({"userId": employee.user.id}).message == "User, date, and status are required"
    bad = actions.mark_attendance({"userId": employee.user.id, "date": "2025-01-01", "status": "LATE"})
    assert bad.success is False
    assert bad.message == "Status must be one of: PRESENT, ABSENT, HALF_DAY, LEAVE"
    bad_date = actions.mark_attendance({"userId": employee.user.id, "date": "01/02/2025", "status": "PRESENT"})
    assert bad_date.message == "Date must be a date (YYYY-MM-DD)"


def test_create_update_and_delete(container, make_employee):
    employee = make_employee()
    actions = container.attendance_actions

    created = actions.create_attendance({"userId": employee.user.id, "date": "2025-01-01", "status": "PRESENT"})
    assert created.success, created.message
    duplicate = actions.create_attendance({"userId": employee.user.id, "date": "2025-01-01", "status": "ABSENT"})
    assert duplicate.message == "Attendance for this user and date already exists"

    updated = actions.update_attendance(created.data.id, {"status": "ABSENT"})
    assert updated.data.status.value == "ABSENT"

    deleted = actions.delete_attendance(created.data.id)
    assert deleted.data == created.data.id
    assert actions.delete_attendance(created.data.id).message == "Attendance not found"
    assert container.revalidator.drain() == [ATTENDANCE_VIEW]


def test_filter_clamps_window(container, make_employee):
    employee = make_employee()
    container.attendance_actions.mark_attendance({"userId": employee.user.id, "date": "2025-01-01", "status": "PRESENT"})

    page = container.attendance_actions.filter_attendances({"limit": "0", "offset": "-3", "status": "PRESENT"}).data
    assert (page.limit, page.offset, page.total) == (10, 0, 1)
