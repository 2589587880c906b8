from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import AuthenticationError


def json_body() -> dict[str, Any]:
    """Request JSON as a dict; anything else (missing, malformed, a list) becomes {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int, **payload):
    return jsonify({"success": False, "message": message, **payload}), status


def bearer_token() -> str:
    # Expected format: "Authorization: Bearer <token>"
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization token is missing")
    return token.strip()


def token_required(auth_service):
    """Decorator factory: resolve the bearer token to a user and pass it as the first argument."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = auth_service.current_user(bearer_token())
            return view(user, *args, **kwargs)

        return wrapper

    return decorator
