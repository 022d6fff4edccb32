from __future__ import annotations

from flask import Flask, request

from ..auth.guards import admin_required
from ..common.http import id_list, json_body, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.user_actions

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        return respond(actions.list_users(request.args.to_dict()))

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @admin_required
    def create_user():
        return respond(actions.create_user(json_body()), created=True)

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    @admin_required
    def update_user(user_id: str):
        return respond(actions.update_user(user_id, json_body()))

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: str):
        return respond(actions.delete_user(user_id))

    @app.route("/api/users/bulk-delete", methods=["POST"], endpoint="bulk_delete_users")
    @admin_required
    def bulk_delete_users():
        return respond(actions.bulk_delete_users(id_list()))
