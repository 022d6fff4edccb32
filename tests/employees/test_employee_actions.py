from __future__ import annotations

from datetime import date

from dayflow.core.enums import AttendanceStatus, LeaveStatus, LeaveType, Role
from dayflow.database.models import AccountRow, AttendanceRow, LeaveRow, ProfileRow, UserRow
from dayflow.database.session import session_scope
from sqlalchemy import func, select


def _count(db, model, user_id):
    with session_scope(db) as s:
        return s.scalar(select(func.count()).select_from(model).where(model.user_id == user_id))


def _seed_history(container, user_id):
    for day in (1, 2):
        container.attendance_repo.mark(user_id=user_id, date=date(2025, 1, day), status=AttendanceStatus.PRESENT)
    container.leaves_repo.create(
        user_id=user_id,
        leave_type=LeaveType.CASUAL,
        start_date=date(2025, 1, 10),
        end_date=date(2025, 1, 10),
        reason="Moving apartments",
    )


def test_create_with_profile_and_counts(container):
    result = container.employee_actions.create_employee(
        {
            "name": "Jane Doe",
            "email": "Jane@Dayflow.io",
            "role": "EMPLOYEE",
            "profile": {"employeeId": "2000001", "phone": "5550109999", "salary": 4200},
        }
    )

    assert result.success, result.message
    employee = result.data
    assert employee.user.email == "jane@dayflow.io"
    assert employee.profile.employee_id == "2000001"
    assert employee.profile.name == "Jane Doe"
    assert employee.profile.salary == 4200
    assert (employee.attendance_count, employee.leave_count) == (0, 0)


def test_create_rejects_duplicates(container, make_employee):
    make_employee(email="jane@dayflow.io", employee_id="2000001")

    by_email = container.employee_actions.create_employee({"name": "Other", "email": "jane@dayflow.io"})
    assert by_email.message == "User with this email already exists"

    by_employee_id = container.employee_actions.create_employee(
        {"name": "Other", "email": "other@dayflow.io", "profile": {"employeeId": "2000001"}}
    )
    assert by_employee_id.message == "Employee ID already exists"

    no_employee_id = container.employee_actions.create_employee(
        {"name": "Other", "email": "other@dayflow.io", "profile": {"phone": "5550109999"}}
    )
    assert no_employee_id.message == "Employee ID is required"


def test_update_without_profile_creates_one_with_fallback_id(container):
    user = container.users_repo.create(name="Bare User", email="bare@dayflow.io")

    result = container.employee_actions.update_employee(user.id, {"role": "ADMIN", "profile": {"phone": "5550109999"}})

    assert result.success, result.message
    assert result.data.user.role == Role.ADMIN
    assert result.data.profile.employee_id.startswith("AUTO-")
    assert result.data.profile.name == "Bare User"
    assert result.data.profile.phone == "5550109999"


def test_delete_cascades_dependent_rows(container, db, make_employee):
    employee = make_employee()
    uid = employee.user.id
    _seed_history(container, uid)
    assert container.employees_repo.get(uid).attendance_count == 2
    assert container.employees_repo.get(uid).leave_count == 1

    result = container.employee_actions.delete_employee(uid)

    assert result.success, result.message
    assert result.data == uid
    for model in (AttendanceRow, LeaveRow, ProfileRow, AccountRow):
        assert _count(db, model, uid) == 0
    with session_scope(db) as s:
        assert s.get(UserRow, uid) is None

    again = container.employee_actions.delete_employee(uid)
    assert again.message == "Employee not found"


def test_plain_user_delete_is_refused_while_history_exists(container, make_employee):
    employee = make_employee()
    _seed_history(container, employee.user.id)

    result = container.user_actions.delete_user(employee.user.id)

    assert result.success is False
    assert result.message == "User still has profile, attendance or leave records"
    assert container.users_repo.get_by_id(employee.user.id) is not None


def test_bulk_delete(container, make_employee):
    first = make_employee()
    second = make_employee()
    _seed_history(container, first.user.id)

    partial = container.employee_actions.bulk_delete_employees([first.user.id, "ghost"])
    assert partial.success is False
    assert partial.message == "Some employees could not be deleted"
    assert partial.data.missing_ids == ["ghost"]
    assert container.employees_repo.get(first.user.id) is None

    full = container.employee_actions.bulk_delete_employees([second.user.id])
    assert full.success
    assert full.data.deleted_ids == [second.user.id]


def test_filter_searches_profile_fields(container, make_employee):
    make_employee(name="Jane Doe", employee_id="3000001")
    make_employee(name="John Roe", employee_id="3000002")
    make_employee(name="Ada Admin", role=Role.ADMIN, employee_id="3000003")

    page = container.employee_actions.filter_employees({"search": "3000002"}).data
    assert [e.user.name for e in page.items] == ["John Roe"]

    employees_only = container.employee_actions.filter_employees({"role": "EMPLOYEE", "limit": "1"}).data
    assert employees_only.total == 2
    assert len(employees_only.items) == 1

    assert container.admin_service.dashboard(day=date(2025, 1, 1)).total_employees == 2


def test_detail_dashboard_and_activity(container, make_employee):
    employee = make_employee()
    uid = employee.user.id
    _seed_history(container, uid)

    detail = container.employee_actions.fetch_employee(uid).data
    assert [a.date for a in detail.attendance] == [date(2025, 1, 2), date(2025, 1, 1)]
    assert detail.leaves[0].status == LeaveStatus.PENDING

    activity = container.employee_actions.recent_activity(uid).data
    assert [item.type for item in activity] == ["LEAVE", "ATTENDANCE", "ATTENDANCE"]
    assert activity[0].message == "Leave pending (CASUAL)"
    assert activity[1].message == "Attendance marked as PRESENT"

    assert container.employee_actions.employee_dashboard("ghost").message == "Employee not found"
