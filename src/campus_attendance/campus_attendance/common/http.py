"""Flask glue shared by every controller: session identity, role gates, JSON errors."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.constants import APP_EXTENSION_KEY
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from ..users.access import require_role
from ..users.model import Caller

logger = logging.getLogger(__name__)


def current_caller() -> Caller:
    user_id = session.get("user_id")
    role = session.get("role")
    if not user_id or not role:
        raise AuthenticationError("Authentication required")
    try:
        return Caller(user_id=user_id, role=Role(role))
    except ValueError:
        session.clear()
        raise AuthenticationError("Authentication required")


def current_account() -> Caller:
    """Session caller re-checked against the store.

    Sessions of deleted or deactivated accounts are dropped, and a changed
    role replaces the one remembered at login.
    """

    caller = current_caller()
    container = current_app.extensions[APP_EXTENSION_KEY]
    user = container.users_repo.get_by_id(caller.user_id)
    if not user or not user.is_active:
        logger.warning("session of %s dropped: account missing or inactive", caller.user_id)
        session.clear()
        raise AuthenticationError("Authentication required")

    if user.role != caller.role:
        session["role"] = user.role.value
    return Caller(user_id=user.user_id, role=user.role)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_account()
        return view(*args, **kwargs)

    return wrapper


def role_required(*roles: Role):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            require_role(current_account(), allowed)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        return jsonify(message=str(err)), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify(message=err.description or err.name), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify(message="Internal server error"), 500
