from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        """Most recent first (by work date)."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        time_in: Optional[str],
        time_out: Optional[str],
        marked_by: str,
        marked_at: datetime,
    ) -> AttendanceRecord:
        """Create or replace the record of (user_id, work_date).

        Last write wins; the slot keeps its attendance_id.
        """

        raise NotImplementedError
