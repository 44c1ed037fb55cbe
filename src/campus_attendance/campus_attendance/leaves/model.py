from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import LeaveStatus, LeaveType
from ..users.model import User


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: str
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    approved_by: Optional[str] = None
    responded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "userId": self.user_id,
            "leaveType": self.leave_type.value,
            "fromDate": self.from_date.isoformat(),
            "toDate": self.to_date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "approvedBy": self.approved_by,
            "createdAt": isoformat_or_none(self.created_at),
            "respondedAt": isoformat_or_none(self.responded_at),
        }


@dataclass(frozen=True)
class LeaveRequestEntry:
    """Read-model for the review queue (joined with the requester)."""

    request: LeaveRequest
    user: Optional[User]

    def to_dict(self) -> dict:
        out = self.request.to_dict()
        out["user"] = self.user.identity() if self.user else None
        return out
