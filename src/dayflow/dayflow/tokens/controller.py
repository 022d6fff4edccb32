from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import utcnow
from ..common.http import json_body
from ..common.serialization import to_jsonable
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .service import TokenAuthService

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ConflictError, 409),
    (AuthorizationError, 403),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ValidationError, 400),
)


def _ok(message: str, data: Any = None, status: int = 200):
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = to_jsonable(data)
    return jsonify(body), status


def _error(e: DomainError):
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
    body = {"success": False, "message": str(e)}
    field_errors = getattr(e, "field_errors", None)
    if field_errors:
        body["fieldErrors"] = field_errors
    return jsonify(body), status


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def register(app: Flask, service: TokenAuthService) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "Server is running", "timestamp": utcnow().isoformat()})

    @app.route("/api/auth/signup", methods=["POST"], endpoint="token_signup")
    def signup():
        try:
            data = service.signup(json_body())
        except DomainError as e:
            return _error(e)
        return _ok("User registered successfully. Email verification pending.", data, 201)

    @app.route("/api/auth/verify-email", methods=["POST"], endpoint="token_verify_email")
    def verify_email():
        try:
            data = service.verify_email(str(json_body().get("token") or ""))
        except AuthenticationError:
            return _error(AuthenticationError("Invalid or expired verification token"))
        except DomainError as e:
            return _error(e)
        return _ok("Email verified successfully", data)

    @app.route("/api/auth/signin", methods=["POST"], endpoint="token_signin")
    def signin():
        try:
            data = service.signin(json_body())
        except DomainError as e:
            return _error(e)
        return _ok("Login successful", data)

    @app.route("/api/auth/verify-token", methods=["POST"], endpoint="token_verify")
    def verify_token():
        token = _bearer_token()
        if token is None:
            return _error(AuthenticationError("No token provided"))
        try:
            claims = service.verify_token(token)
        except AuthenticationError:
            return _error(AuthenticationError("Invalid or expired token"))
        return _ok("Token is valid", claims)

    @app.route("/api/auth/me", methods=["GET"], endpoint="token_me")
    def me():
        token = _bearer_token()
        if token is None:
            return _error(AuthenticationError("No token provided"))
        try:
            data = service.me(token)
        except AuthenticationError:
            return _error(AuthenticationError("Unauthorized"))
        except DomainError as e:
            return _error(e)
        return _ok("Current user", data)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="token_logout")
    def logout():
        # Tokens are stateless; the client drops its copy.
        return _ok("Logout successful")
