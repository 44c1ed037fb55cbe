from __future__ import annotations

import threading
from typing import Dict, Optional, Sequence

from .model import Schedule
from .repository import ScheduleRepository


class InMemoryScheduleRepository(ScheduleRepository):
    def __init__(self):
        self._lock = threading.RLock()
        self._schedules: Dict[int, Schedule] = {}
        self._next_id = 1

    def list_for_day(self, day_of_week: str) -> Sequence[Schedule]:
        with self._lock:
            items = [s for s in self._schedules.values() if s.day_of_week == day_of_week]
        items.sort(key=lambda s: (s.start_time, s.schedule_id))
        return items

    def list_for_user(self, user_id: str) -> Sequence[Schedule]:
        with self._lock:
            items = [s for s in self._schedules.values() if s.user_id == user_id]
        items.sort(key=lambda s: s.schedule_id)
        return items

    def create(
        self,
        *,
        user_id: str,
        day_of_week: str,
        start_time: str,
        end_time: str,
        subject: Optional[str] = None,
        work_type: Optional[str] = None,
    ) -> Schedule:
        with self._lock:
            schedule = Schedule(
                schedule_id=self._next_id,
                user_id=user_id,
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                subject=subject,
                work_type=work_type,
            )
            self._next_id += 1
            self._schedules[schedule.schedule_id] = schedule
            return schedule
