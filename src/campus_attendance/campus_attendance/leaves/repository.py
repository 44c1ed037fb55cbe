from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
        created_at: datetime,
    ) -> LeaveRequest:
        """Insert a new pending request."""

        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_pending(self) -> Sequence[LeaveRequest]:
        """Oldest first."""

        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[LeaveRequest]:
        """All statuses, most recent first."""

        raise NotImplementedError

    def count_pending(self) -> int:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: str,
        responded_at: datetime,
    ) -> Optional[LeaveRequest]:
        """Move a pending request to ``status``.

        Returns None when the request is missing or no longer pending.
        """

        raise NotImplementedError
