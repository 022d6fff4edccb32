from __future__ import annotations

from flask import Flask, request

from ..auth.guards import admin_required, current_session, login_required
from ..common.http import id_list, json_body, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.leave_actions

    @app.route("/api/leaves", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        data = json_body()
        data["userId"] = current_session().user_id
        return respond(actions.apply_leave(data), created=True)

    @app.route("/api/leaves/me", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        return respond(actions.fetch_user_leaves(current_session().user_id))

    @app.route("/api/leaves/me/stats", methods=["GET"], endpoint="my_leave_stats")
    @login_required
    def my_leave_stats():
        year = request.args.get("year", type=int)
        return respond(actions.user_leave_stats(current_session().user_id, year))

    @app.route("/api/leaves/<leave_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @login_required
    def cancel_leave(leave_id: str):
        return respond(actions.cancel_leave(leave_id))

    @app.route("/api/leaves", methods=["GET"], endpoint="all_leaves")
    @admin_required
    def all_leaves():
        return respond(actions.fetch_all_leaves())

    @app.route("/api/leaves/admin", methods=["POST"], endpoint="create_leave")
    @admin_required
    def create_leave():
        return respond(actions.create_leave(json_body()), created=True)

    @app.route("/api/leaves/<leave_id>", methods=["GET"], endpoint="get_leave")
    @admin_required
    def get_leave(leave_id: str):
        return respond(actions.fetch_leave(leave_id))

    @app.route("/api/leaves/<leave_id>", methods=["PATCH"], endpoint="update_leave")
    @admin_required
    def update_leave(leave_id: str):
        return respond(actions.update_leave(leave_id, json_body()))

    @app.route("/api/leaves/<leave_id>", methods=["DELETE"], endpoint="delete_leave")
    @admin_required
    def delete_leave(leave_id: str):
        return respond(actions.delete_leave(leave_id))

    @app.route("/api/leaves/bulk-delete", methods=["POST"], endpoint="bulk_delete_leaves")
    @admin_required
    def bulk_delete_leaves():
        return respond(actions.bulk_delete_leaves(id_list()))

    @app.route("/api/users/<user_id>/leaves", methods=["GET"], endpoint="user_leaves")
    @admin_required
    def user_leaves(user_id: str):
        return respond(actions.fetch_user_leaves(user_id))

    @app.route("/api/users/<user_id>/leaves/stats", methods=["GET"], endpoint="user_leave_stats")
    @admin_required
    def user_leave_stats(user_id: str):
        return respond(actions.user_leave_stats(user_id, request.args.get("year", type=int)))
