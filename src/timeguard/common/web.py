"""Session guards and JSON helpers shared by the Flask controllers."""
from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please log in to continue.", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please log in to continue.", 401)
        if session.get("role") != Role.ADMIN.value:
            return json_error("Admins only.", 403)
        return view(*args, **kwargs)

    return wrapper
