from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Dict, Optional, Sequence, Tuple

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._by_user_date: Dict[Tuple[str, date], AttendanceRecord] = {}
        self._next_id = 1

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._by_user_date.values() if r.work_date == work_date]
        items.sort(key=lambda r: r.attendance_id)
        return items

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
        with self._lock:
            key = (user_id, work_date)
            existing = self._by_user_date.get(key)
            if existing:
                attendance_id = existing.attendance_id
            else:
                attendance_id = self._next_id
                self._next_id += 1

            rec = AttendanceRecord(
                attendance_id=attendance_id,
                user_id=user_id,
                work_date=work_date,
                status=status,
                time_in=time_in,
                time_out=time_out,
                marked_by=marked_by,
                marked_at=marked_at,
            )
            self._by_user_date[key] = rec
            return rec
