from __future__ import annotations

from flask import Flask, request

from ..auth.guards import admin_required
from ..common.http import json_body, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.admin_actions

    @app.route("/api/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        return respond(actions.dashboard())

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees():
        return respond(actions.all_employees())

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        return respond(actions.attendance_records(request.args.to_dict()))

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @admin_required
    def admin_leaves():
        return respond(actions.leave_requests(request.args.to_dict()))

    @app.route("/api/admin/leaves/<leave_id>/status", methods=["PATCH"], endpoint="admin_leave_status")
    @admin_required
    def admin_leave_status(leave_id: str):
        return respond(actions.update_leave_status(leave_id, json_body()))
