from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Staff roles used for authorization."""

    HEAD = "head"
    ADMIN = "admin"
    MAZER = "mazer"
    ASSISTANT = "assistant"
    TEACHER = "teacher"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Daily attendance outcome recorded by a supervisor."""

    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"


class LeaveType(str, Enum):
    SICK = "sick"
    ANNUAL = "annual"
    PERSONAL = "personal"
    EMERGENCY = "emergency"


class LeaveStatus(str, Enum):
    """Leave approval workflow: pending -> approved | rejected."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING
