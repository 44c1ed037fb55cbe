from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import current_caller, json_body, role_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        user_id = body.get("id")
        password = body.get("password")
        if not isinstance(user_id, str) or not user_id.strip() or not isinstance(password, str) or not password:
            raise ValidationError("ID and password are required")

        user = container.auth_service.authenticate(user_id.strip(), password)

        session.clear()
        session.permanent = True
        session["user_id"] = user.user_id
        session["role"] = user.role.value

        return jsonify(id=user.user_id, name=user.name, role=user.role.value, department=user.department)

    # logout and me check the session only; the account may be gone.
    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        current_caller()
        session.clear()
        return jsonify(message="Logged out successfully")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    def me():
        user = container.auth_service.get_profile(current_caller().user_id)
        return jsonify(user.to_dict())

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @role_required(Role.ADMIN)
    def list_users():
        users = container.user_service.list_users(caller=current_caller())
        return jsonify([u.to_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @role_required(Role.ADMIN)
    def create_user():
        body = json_body()
        user = container.user_service.create_user(
            caller=current_caller(),
            user_id=body.get("id"),
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
            role=body.get("role"),
            department=body.get("department"),
        )
        return jsonify(user.to_dict()), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @role_required(Role.ADMIN)
    def update_user(user_id: str):
        user = container.user_service.update_user(caller=current_caller(), user_id=user_id, changes=json_body())
        return jsonify(user.to_dict())

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @role_required(Role.ADMIN)
    def delete_user(user_id: str):
        container.user_service.delete_user(caller=current_caller(), user_id=user_id)
        return jsonify(message="User deleted successfully")
