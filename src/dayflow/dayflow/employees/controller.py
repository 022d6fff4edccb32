from __future__ import annotations

from flask import Flask, request

from ..auth.guards import admin_required, current_session, login_required
from ..common.http import id_list, json_body, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.employee_actions

    @app.route("/api/employees", methods=["GET"], endpoint="filter_employees")
    @admin_required
    def filter_employees():
        return respond(actions.filter_employees(request.args.to_dict()))

    @app.route("/api/employees/all", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        return respond(actions.list_employees())

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        return respond(actions.create_employee(json_body()), created=True)

    @app.route("/api/employees/me/dashboard", methods=["GET"], endpoint="my_dashboard")
    @login_required
    def my_dashboard():
        return respond(actions.employee_dashboard(current_session().user_id))

    @app.route("/api/employees/me/activity", methods=["GET"], endpoint="my_activity")
    @login_required
    def my_activity():
        return respond(actions.recent_activity(current_session().user_id))

    @app.route("/api/employees/<user_id>", methods=["GET"], endpoint="get_employee")
    @admin_required
    def get_employee(user_id: str):
        return respond(actions.fetch_employee(user_id))

    @app.route("/api/employees/<user_id>", methods=["PATCH"], endpoint="update_employee")
    @admin_required
    def update_employee(user_id: str):
        return respond(actions.update_employee(user_id, json_body()))

    @app.route("/api/employees/<user_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(user_id: str):
        return respond(actions.delete_employee(user_id))

    @app.route("/api/employees/bulk-delete", methods=["POST"], endpoint="bulk_delete_employees")
    @admin_required
    def bulk_delete_employees():
        return respond(actions.bulk_delete_employees(id_list()))
