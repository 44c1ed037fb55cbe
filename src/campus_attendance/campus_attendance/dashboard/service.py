from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..leaves.repository import LeaveRequestRepository
from ..users.access import OVERSIGHT_ROLES, require_role
from ..users.model import Caller
from ..users.repository import UserRepository


@dataclass(frozen=True)
class DashboardStats:
    present_today: int
    absent_today: int
    pending_leaves: int
    attendance_rate: int
    total_users: int

    def to_dict(self) -> dict:
        return {
            "presentToday": self.present_today,
            "absentToday": self.absent_today,
            "pendingLeaves": self.pending_leaves,
            "attendanceRate": self.attendance_rate,
            "totalUsers": self.total_users,
        }


def attendance_rate(present: int, active_users: int) -> int:
    """Percentage of active users marked present, rounded half up."""
    if active_users <= 0:
        return 0
    return int(present * 100 / active_users + 0.5)


class DashboardService:
    """Summary counts for the head/admin overview, always computed from current state."""

    def __init__(self, attendance: AttendanceRepository, leaves: LeaveRequestRepository, users: UserRepository):
        self._attendance = attendance
        self._leaves = leaves
        self._users = users

    def get_stats(self, *, caller: Caller, today: date | None = None) -> DashboardStats:
        require_role(caller, OVERSIGHT_ROLES)
        today = today or now_local().date()

        records = self._attendance.list_for_date(today)
        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
        active = self._users.count_active()

        return DashboardStats(
            present_today=present,
            absent_today=absent,
            pending_leaves=self._leaves.count_pending(),
            attendance_rate=attendance_rate(present, active),
            total_users=active,
        )
