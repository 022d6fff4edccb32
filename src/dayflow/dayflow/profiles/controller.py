from __future__ import annotations

from flask import Flask

from ..auth.guards import current_session, login_required
from ..common.http import json_body, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    actions = container.profile_actions

    @app.route("/api/profile", methods=["GET"], endpoint="my_profile")
    @login_required
    def my_profile():
        return respond(actions.fetch_user_profile(current_session().user_id))

    @app.route("/api/profile", methods=["PATCH"], endpoint="update_my_profile")
    @login_required
    def update_my_profile():
        ctx = current_session()
        return respond(actions.update_user_profile(ctx.user_id, json_body(), allow_salary=ctx.is_admin))

    @app.route("/api/profile/password", methods=["POST"], endpoint="update_my_password")
    @login_required
    def update_my_password():
        return respond(actions.update_password(current_session().user_id, json_body()))
