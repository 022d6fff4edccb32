from __future__ import annotations

from typing import Any, Dict, List, Tuple

from flask import Response, jsonify, request

from ..core.result import ActionFailure, ActionSuccess, to_envelope


def respond(result: ActionSuccess[Any] | ActionFailure, *, created: bool = False) -> Tuple[Response, int]:
    """JSON envelope with 200/201 on success and 400 on failure."""

    if result.success:
        return jsonify(to_envelope(result)), 201 if created else 200
    return jsonify(to_envelope(result)), 400


def json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def id_list() -> List[str]:
    ids = json_body().get("ids") or []
    return [str(i) for i in ids] if isinstance(ids, list) else []
