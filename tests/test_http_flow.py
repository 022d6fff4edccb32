from __future__ import annotations

from dayflow.auth.controller import REVALIDATE_HEADER
from dayflow.core.enums import Role

LEAVE = {
    "leaveType": "CASUAL",
    "startDate": "2025-01-05",
    "endDate": "2025-01-07",
    "reason": "Visiting family upstate",
}


def test_guards_require_session_and_admin(client, make_employee, login):
    make_employee(email="jane@dayflow.io")

    anonymous = client.get("/api/profile")
    assert anonymous.status_code == 401
    assert anonymous.get_json() == {"success": False, "message": "Please sign in to continue"}

    login("jane@dayflow.io")
    assert client.get("/api/profile").status_code == 200
    forbidden = client.get("/api/leaves")
    assert forbidden.status_code == 403
    assert forbidden.get_json()["message"] == "Admin access required"

    client.post("/api/auth/sign-out")
    assert client.get("/api/profile").status_code == 401


def test_sign_in_failure_returns_field_errors(client):
    resp = client.post("/api/auth/sign-in", json={"email": "nobody@dayflow.io", "password": "x"})
    assert resp.status_code == 400
    assert resp.get_json()["fieldErrors"] == {"email": ["User with this email does not exist"]}


def test_sign_up_starts_a_session(client):
    resp = client.post(
        "/api/auth/sign-up",
        json={
            "name": "New Hire",
            "email": "hire@dayflow.io",
            "employeeId": "5000001",
            "password": "Secret@1",
            "confirmPassword": "Secret@1",
        },
    )
    assert resp.status_code == 201, resp.get_json()

    session = client.get("/api/auth/session").get_json()["data"]
    assert session["user"]["email"] == "hire@dayflow.io"
    assert session["user"]["role"] == "EMPLOYEE"
    assert session["profile"]["employeeId"] == "5000001"


def test_employee_leave_and_attendance_flow(client, container, make_employee, login):
    jane = make_employee(email="jane@dayflow.io")
    other = make_employee(email="other@dayflow.io")
    login("jane@dayflow.io")

    applied = client.post("/api/leaves", json={**LEAVE, "userId": other.user.id, "status": "APPROVED"})
    assert applied.status_code == 201
    leave = applied.get_json()["data"]
    assert leave["userId"] == jane.user.id
    assert leave["status"] == "PENDING"
    assert leave["durationDays"] == 3
    assert applied.headers[REVALIDATE_HEADER] == "/profile/leaves,/admin/leaves"

    stats = client.get("/api/leaves/me/stats?year=2025").get_json()["data"]
    assert (stats["total"], stats["pending"], stats["totalDays"]) == (1, 1, 0)

    marked = client.post(
        "/api/attendance/mark",
        json={"userId": other.user.id, "date": "2025-01-06", "status": "PRESENT"},
    )
    assert marked.status_code == 200
    assert marked.get_json()["data"]["userId"] == jane.user.id
    assert container.attendance_repo.list_for_user(other.user.id) == []

    mine = client.get("/api/attendance/me").get_json()["data"]
    assert [r["date"] for r in mine] == ["2025-01-06"]

    activity = client.get("/api/employees/me/activity").get_json()["data"]
    assert [a["type"] for a in activity] == ["ATTENDANCE", "LEAVE"]

    cancelled = client.post(f"/api/leaves/{leave['id']}/cancel")
    assert cancelled.get_json() == {"success": True, "message": "Leave cancelled successfully", "data": leave["id"]}


def test_admin_flow(client, make_employee, login):
    make_employee(name="Ada Admin", email="ada@dayflow.io", role=Role.ADMIN)
    jane = make_employee(email="jane@dayflow.io")
    login("ada@dayflow.io")

    leave = client.post("/api/leaves/admin", json={**LEAVE, "userId": jane.user.id}).get_json()["data"]
    approved = client.patch(f"/api/admin/leaves/{leave['id']}/status", json={"status": "APPROVED"})
    assert approved.status_code == 200
    assert approved.get_json()["data"]["status"] == "APPROVED"

    client.post("/api/attendance", json={"userId": jane.user.id, "date": "2025-01-06", "status": "ABSENT"})
    page = client.get("/api/attendance?status=ABSENT&search=jane").get_json()["data"]
    assert page["total"] == 1
    assert page["items"][0]["user"]["email"] == "jane@dayflow.io"

    employees = client.get("/api/admin/employees").get_json()["data"]
    assert [e["user"]["email"] for e in employees] == ["jane@dayflow.io"]

    dashboard = client.get("/api/admin/dashboard").get_json()["data"]
    assert dashboard["totalEmployees"] == 1
    assert dashboard["pendingLeaves"] == 0
    assert set(dashboard["attendanceToday"]) == {"PRESENT", "ABSENT", "HALF_DAY", "LEAVE"}

    invalid = client.patch(f"/api/admin/leaves/{leave['id']}/status", json={"status": "PENDING"})
    assert invalid.status_code == 400
    assert invalid.get_json()["message"] == "Status must be APPROVED or REJECTED"

    bulk = client.post("/api/employees/bulk-delete", json={"ids": [jane.user.id, "ghost"]})
    assert bulk.status_code == 400
    body = bulk.get_json()
    assert body["data"]["missingIds"] == ["ghost"]
    assert body["data"]["deletedIds"] == []


def test_profile_salary_only_for_admins(client, make_employee, login):
    make_employee(email="jane@dayflow.io")
    login("jane@dayflow.io")

    resp = client.patch("/api/profile", json={"name": "Jane Doe", "salary": 100000})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["profile"]["salary"] is None


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_stale_views_are_reported_only_by_the_writing_request(client, container, make_employee, login):
    jane = make_employee(email="jane@dayflow.io")
    container.leave_actions.apply_leave(dict(LEAVE, userId=jane.user.id))

    signed_in = login("jane@dayflow.io")
    assert REVALIDATE_HEADER not in signed_in.headers

    applied = client.post("/api/leaves", json=dict(LEAVE, startDate="2025-02-03", endDate="2025-02-04"))
    assert applied.status_code == 201, applied.get_json()
    assert applied.headers[REVALIDATE_HEADER] == "/profile/leaves,/admin/leaves"

    listed = client.get("/api/leaves/me")
    assert listed.status_code == 200
    assert REVALIDATE_HEADER not in listed.headers
