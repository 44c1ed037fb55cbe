from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus
from ..users.model import User


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance outcome per user per day."""

    attendance_id: int
    user_id: str
    work_date: date
    status: AttendanceStatus
    time_in: Optional[str]
    time_out: Optional[str]
    marked_by: str
    marked_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "timeIn": self.time_in,
            "timeOut": self.time_out,
            "markedBy": self.marked_by,
            "markedAt": isoformat_or_none(self.marked_at),
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """Read-model: an attendance record joined with its user's identity."""

    record: AttendanceRecord
    user: Optional[User]

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["user"] = self.user.identity() if self.user else None
        return out
