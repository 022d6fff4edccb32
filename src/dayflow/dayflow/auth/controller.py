from __future__ import annotations

import logging

from flask import Flask, g, jsonify, request, session

from ..common.http import json_body, respond
from ..container import Container
from ..core.result import ok, to_envelope
from .guards import current_session, login_required

logger = logging.getLogger(__name__)

REVALIDATE_HEADER = "X-Dayflow-Revalidate"


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def load_session_context():
        # Hydrated once per request; views read it through current_session().
        g.session_ctx = container.auth_provider.get_session(session)
        if g.session_ctx is None and "user_id" in session:
            session.clear()

    @app.after_request
    def refresh_session_and_report_stale_views(response):
        ctx = current_session()
        if ctx is not None and ctx.refresh_due and session.get("user_id") == ctx.user_id:
            session.update(container.sessions.issue(ctx.user_id))
            logger.debug("session for user %s refreshed", ctx.user_id)
        stale = container.revalidator.drain()
        if stale:
            response.headers[REVALIDATE_HEADER] = ",".join(stale)
        return response

    def _start_session(user_id: str) -> None:
        session.clear()
        session.permanent = True
        session.update(container.sessions.issue(user_id))

    @app.route("/api/auth/sign-in", methods=["POST"], endpoint="sign_in")
    def sign_in():
        result = container.auth_actions.sign_in(json_body(), redirect_to=request.args.get("redirectTo"))
        if result.success:
            _start_session(result.data.user.id)
        return respond(result)

    @app.route("/api/auth/sign-up", methods=["POST"], endpoint="sign_up")
    def sign_up():
        result = container.auth_actions.sign_up(json_body(), redirect_to=request.args.get("redirectTo"))
        if result.success:
            _start_session(result.data.user.id)
        return respond(result, created=True)

    @app.route("/api/auth/sign-out", methods=["POST"], endpoint="sign_out")
    def sign_out():
        session.clear()
        g.session_ctx = None
        return jsonify(to_envelope(ok("Signed out"))), 200

    @app.route("/api/auth/session", methods=["GET"], endpoint="current_session")
    @login_required
    def get_session():
        ctx = current_session()
        return respond(ok("Session active", {"user": ctx.user, "profile": ctx.profile, "expiresAt": ctx.expires_at}))
