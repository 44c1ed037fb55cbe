from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..users.model import User


@dataclass(frozen=True)
class Schedule:
    """Recurring weekly slot: a subject (teacher) or a work shift (staff)."""

    schedule_id: int
    user_id: str
    day_of_week: str
    start_time: str
    end_time: str
    subject: Optional[str] = None
    work_type: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "userId": self.user_id,
            "dayOfWeek": self.day_of_week,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "subject": self.subject,
            "workType": self.work_type,
        }


@dataclass(frozen=True)
class ScheduleEntry:
    """Read-model: a schedule slot with its user and today's attendance."""

    schedule: Schedule
    user: Optional[User]
    attendance: Optional[AttendanceRecord]

    def to_dict(self) -> dict:
        out = self.schedule.to_dict()
        out["user"] = self.user.identity() if self.user else None
        out["attendance"] = self.attendance.to_dict() if self.attendance else None
        return out
