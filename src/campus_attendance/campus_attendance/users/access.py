"""Role gates shared by every domain service.

Mazers supervise teachers and assistants supervise staff; head and admin
have oversight of everyone's records.
"""

from __future__ import annotations

import logging
from typing import Collection

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import Caller, User

logger = logging.getLogger(__name__)

OVERSIGHT_ROLES = frozenset({Role.HEAD, Role.ADMIN})

SUPERVISED_ROLES = {
    Role.MAZER: frozenset({Role.TEACHER}),
    Role.ASSISTANT: frozenset({Role.STAFF}),
}

FORBIDDEN_MESSAGE = "Insufficient permissions"


def require_role(caller: Caller, allowed: Collection[Role]) -> None:
    if caller.role not in allowed:
        logger.warning("forbidden: %s (%s) needs one of %s", caller.user_id, caller.role.value, sorted(r.value for r in allowed))
        raise AuthorizationError(FORBIDDEN_MESSAGE)


def require_self_or_oversight(caller: Caller, user_id: str) -> None:
    if caller.user_id != user_id and caller.role not in OVERSIGHT_ROLES:
        logger.warning("forbidden: %s tried to read records of %s", caller.user_id, user_id)
        raise AuthorizationError("Access denied")


def supervised_roles(role: Role) -> frozenset:
    return SUPERVISED_ROLES.get(role, frozenset())


def require_supervises(caller: Caller, target: User) -> None:
    if target.role not in supervised_roles(caller.role):
        logger.warning("forbidden: %s (%s) cannot mark %s (%s)", caller.user_id, caller.role.value, target.user_id, target.role.value)
        raise AuthorizationError(f"A {caller.role.value} cannot mark attendance for a {target.role.value}")
