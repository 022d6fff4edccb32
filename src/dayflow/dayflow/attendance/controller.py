from __future__ import annotations

from flask import Flask, request

from ..auth.guards import admin_required, current_session, login_required
from ..common.http import id_list, json_body, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.attendance_actions

    @app.route("/api/attendance", methods=["GET"], endpoint="filter_attendance")
    @admin_required
    def filter_attendance():
        return respond(actions.filter_attendances(request.args.to_dict()))

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @admin_required
    def create_attendance():
        return respond(actions.create_attendance(json_body()), created=True)

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = json_body()
        ctx = current_session()
        if not ctx.is_admin:
            # Employees can only mark their own day.
            data["userId"] = ctx.user_id
        return respond(actions.mark_attendance(data))

    @app.route("/api/attendance/me", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        return respond(actions.fetch_user_attendance(current_session().user_id, request.args.to_dict()))

    @app.route("/api/attendance/all", methods=["GET"], endpoint="all_attendance")
    @admin_required
    def all_attendance():
        return respond(actions.fetch_all_attendance())

    @app.route("/api/attendance/<attendance_id>", methods=["PATCH"], endpoint="update_attendance")
    @admin_required
    def update_attendance(attendance_id: str):
        return respond(actions.update_attendance(attendance_id, json_body()))

    @app.route("/api/attendance/<attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @admin_required
    def delete_attendance(attendance_id: str):
        return respond(actions.delete_attendance(attendance_id))

    @app.route("/api/attendance/bulk-delete", methods=["POST"], endpoint="bulk_delete_attendance")
    @admin_required
    def bulk_delete_attendance():
        return respond(actions.bulk_delete_attendances(id_list()))
