from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    optional_text,
    require_choice,
    require_email,
    require_max_length,
    require_min_length,
    require_non_empty,
)
from ..core.constants import MAX_EMAIL_LENGTH, MAX_ID_LENGTH, MAX_LABEL_LENGTH, MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import InvalidCredentialsError, NotFoundError, ValidationError
from .access import require_role
from .model import Caller, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_HASH_METHOD = "scrypt"


class AuthService:
    """Use case: authenticate user (login) and resolve the session identity."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, user_id: str, password: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            logger.warning("login failed for id=%s", user_id)
            raise InvalidCredentialsError()

        try:
            ok = check_password_hash(user.password_hash, password)
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("login failed for id=%s", user_id)
            raise InvalidCredentialsError()

        logger.info("login ok: %s (%s)", user.user_id, user.role.value)
        return user

    def get_profile(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user


class UserService:
    """Use case: manage user accounts (admin)."""

    def __init__(self, users: UserRepository, *, hash_method: str = DEFAULT_HASH_METHOD):
        self._users = users
        self._hash_method = hash_method

    def hash_password(self, password: str) -> str:
        return generate_password_hash(password, method=self._hash_method)

    def list_users(self, *, caller: Caller) -> Sequence[User]:
        require_role(caller, {Role.ADMIN})
        return sorted(self._users.list_all(), key=lambda u: u.user_id)

    def create_user(
        self,
        *,
        caller: Caller,
        user_id: str,
        name: str,
        email: str,
        password: str,
        role: str,
        department: Optional[str] = None,
    ) -> User:
        require_role(caller, {Role.ADMIN})

        user = User(
            user_id=require_max_length(require_non_empty(user_id, "id"), "id", MAX_ID_LENGTH),
            name=require_max_length(require_non_empty(name, "name"), "name", MAX_NAME_LENGTH),
            email=require_max_length(require_email(email), "email", MAX_EMAIL_LENGTH),
            password_hash=self.hash_password(require_min_length(password, "password", MIN_PASSWORD_LENGTH)),
            role=require_choice(role, Role, "role"),
            department=require_max_length(optional_text(department, "department"), "department", MAX_LABEL_LENGTH),
            is_active=True,
        )
        if not self._users.create(user):
            raise ValidationError("User id already exists")

        logger.info("user created: %s (%s) by %s", user.user_id, user.role.value, caller.user_id)
        return user

    def update_user(self, *, caller: Caller, user_id: str, changes: Mapping) -> User:
        """Apply a partial update.

        ``changes`` uses the wire field names (name, email, password, role,
        department, isActive); unknown fields are ignored and the id is immutable.
        """

        require_role(caller, {Role.ADMIN})

        if "id" in changes and changes["id"] != user_id:
            raise ValidationError("User id cannot be changed")

        fields: dict = {}
        if "name" in changes:
            fields["name"] = require_max_length(require_non_empty(changes["name"], "name"), "name", MAX_NAME_LENGTH)
        if "email" in changes:
            fields["email"] = require_max_length(require_email(changes["email"]), "email", MAX_EMAIL_LENGTH)
        if "password" in changes:
            password = require_min_length(changes["password"], "password", MIN_PASSWORD_LENGTH)
            fields["password_hash"] = self.hash_password(password)
        if "role" in changes:
            fields["role"] = require_choice(changes["role"], Role, "role")
        if "department" in changes:
            fields["department"] = require_max_length(
                optional_text(changes["department"], "department"), "department", MAX_LABEL_LENGTH
            )
        if "isActive" in changes:
            if not isinstance(changes["isActive"], bool):
                raise ValidationError("isActive must be a boolean")
            fields["is_active"] = changes["isActive"]

        user = self._users.update(user_id, **fields)
        if not user:
            raise NotFoundError("User not found")

        logger.info("user updated: %s fields=%s by %s", user_id, sorted(fields), caller.user_id)
        return user

    def delete_user(self, *, caller: Caller, user_id: str) -> None:
        require_role(caller, {Role.ADMIN})

        if user_id == caller.user_id:
            raise ValidationError("You cannot delete your own account")

        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")

        # Attendance, schedules and leave requests of the user are kept as history.
        logger.info("user deleted: %s by %s", user_id, caller.user_id)
