from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, require_clock_time
from ..common.validators import optional_text, require_max_length, require_non_empty
from ..core.constants import DAYS_OF_WEEK, MAX_LABEL_LENGTH
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.access import require_role, require_self_or_oversight
from ..users.model import Caller
from ..users.repository import UserRepository
from .model import Schedule, ScheduleEntry
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, users: UserRepository, attendance: AttendanceRepository):
        self._schedules = schedules
        self._users = users
        self._attendance = attendance

    def get_schedule_for_day(self, day_of_week: str, *, today: date | None = None) -> Sequence[ScheduleEntry]:
        """Who works/teaches on the given weekday, with today's attendance per slot."""

        today = today or now_local().date()
        day = (day_of_week or "").strip().lower()

        entries: list[ScheduleEntry] = []
        for schedule in self._schedules.list_for_day(day):
            entries.append(
                ScheduleEntry(
                    schedule=schedule,
                    user=self._users.get_by_id(schedule.user_id),
                    attendance=self._attendance.get_for_user_and_date(schedule.user_id, today),
                )
            )
        return entries

    def list_for_user(self, *, caller: Caller, user_id: str) -> Sequence[Schedule]:
        require_self_or_oversight(caller, user_id)
        return self._schedules.list_for_user(user_id)

    def create_schedule(
        self,
        *,
        caller: Caller,
        user_id: str,
        day_of_week: str,
        start_time: str,
        end_time: str,
        subject: Optional[str] = None,
        work_type: Optional[str] = None,
    ) -> Schedule:
        require_role(caller, {Role.ADMIN})

        user_id = require_non_empty(user_id, "userId")
        day = require_non_empty(day_of_week, "dayOfWeek").lower()
        if day not in DAYS_OF_WEEK:
            raise ValidationError("dayOfWeek must be a weekday name")

        start = require_clock_time(start_time, "startTime")
        end = require_clock_time(end_time, "endTime")
        if end <= start:
            raise ValidationError("endTime must be after startTime")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        subject = require_max_length(optional_text(subject, "subject"), "subject", MAX_LABEL_LENGTH)
        work_type = require_max_length(optional_text(work_type, "workType"), "workType", MAX_LABEL_LENGTH)
        if subject and user.role != Role.TEACHER:
            raise ValidationError("Only teachers have a subject")
        if work_type and user.role != Role.STAFF:
            raise ValidationError("Only staff have a work type")

        schedule = self._schedules.create(
            user_id=user_id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            subject=subject,
            work_type=work_type,
        )
        logger.info("schedule created: #%s %s %s by %s", schedule.schedule_id, user_id, day, caller.user_id)
        return schedule
