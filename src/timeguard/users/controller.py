from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.validators import is_truthy
from ..common.web import admin_required, current_user_id, json_error, login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from ..container import Container


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        try:
            user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except InvalidCredentialsError as e:
            return json_error(str(e), 401)

        session.clear()
        session.permanent = is_truthy(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["role"] = user.role.value

        return jsonify({"success": True, "user": user.to_public_dict()})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out."})

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        try:
            user = container.user_service.get(current_user_id())
        except UserNotFoundError:
            session.clear()
            return json_error("Please log in to continue.", 401)
        return jsonify({"user": user.to_public_dict(), "busy": container.attendance_service.is_busy(user.user_id)})

    @app.route("/admin/status", endpoint="admin_status")
    @admin_required
    def admin_status():
        users = container.user_service.list_employees()
        return jsonify({"employees": [u.to_public_dict() for u in users]})

    @app.route("/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        users = container.user_service.list_employees()
        return jsonify({"users": [u.to_public_dict() for u in users]})

    @app.route("/admin/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = _payload()
        try:
            user = container.user_service.create_employee(
                full_name=data.get("full_name", ""),
                username=data.get("username", ""),
                password=data.get("password", ""),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "user": user.to_public_dict()}), 201

    @app.route("/admin/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    def update_user(user_id: int):
        data = _payload()
        try:
            user = container.user_service.update_employee(
                user_id,
                full_name=data.get("full_name", ""),
                username=data.get("username", ""),
                password=data.get("password") or None,
            )
        except UserNotFoundError as e:
            return json_error(str(e), 404)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "user": user.to_public_dict()})

    @app.route("/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        try:
            container.user_service.delete_user(current_role=Role(session.get("role")), user_id=user_id)
        except UserNotFoundError as e:
            return json_error(str(e), 404)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "message": "Employee deleted."})
