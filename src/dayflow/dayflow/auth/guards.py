from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, jsonify

from ..core.result import fail, to_envelope
from .session import SessionContext


def current_session() -> Optional[SessionContext]:
    return g.get("session_ctx")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_session() is None:
            return jsonify(to_envelope(fail("Please sign in to continue"))), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = current_session()
        if ctx is None:
            return jsonify(to_envelope(fail("Please sign in to continue"))), 401
        if not ctx.is_admin:
            return jsonify(to_envelope(fail("Admin access required"))), 403
        return view(*args, **kwargs)

    return wrapper
