from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_clock, now_local, require_clock_time, require_iso_date
from ..common.validators import require_choice, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.access import OVERSIGHT_ROLES, SUPERVISED_ROLES, require_role, require_self_or_oversight, require_supervises
from ..users.model import Caller
from ..users.repository import UserRepository
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def normalize_limit(raw) -> int:
    """Parse a history limit; bad or non-positive values fall back to the default."""
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_HISTORY_LIMIT
    if limit <= 0:
        return DEFAULT_HISTORY_LIMIT
    return min(limit, MAX_HISTORY_LIMIT)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def mark_attendance(
        self,
        *,
        caller: Caller,
        user_id: str,
        work_date,
        status,
        time_in: Optional[str] = None,
        time_out: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Record (or overwrite) the day's outcome for a supervised user."""

        require_role(caller, SUPERVISED_ROLES.keys())
        now = now or now_local()

        user_id = require_non_empty(user_id, "userId")
        work_date = require_iso_date(work_date, "date")
        status = require_choice(status, AttendanceStatus, "status")

        target = self._users.get_by_id(user_id)
        if not target:
            raise NotFoundError("User not found")
        require_supervises(caller, target)

        if status == AttendanceStatus.PRESENT:
            time_in = require_clock_time(time_in, "timeIn") if time_in else format_clock(now)
        else:
            time_in = None
            time_out = None

        if time_out:
            time_out = require_clock_time(time_out, "timeOut")
            # HH:MM strings compare in clock order
            if time_in and time_out < time_in:
                raise ValidationError("timeOut cannot be before timeIn")
        else:
            time_out = None

        rec = self._attendance.upsert(
            user_id=user_id,
            work_date=work_date,
            status=status,
            time_in=time_in,
            time_out=time_out,
            marked_by=caller.user_id,
            marked_at=now,
        )
        logger.info("attendance marked: %s %s=%s by %s", user_id, work_date.isoformat(), status.value, caller.user_id)
        return rec

    def get_attendance_for_day(self, *, caller: Caller, work_date) -> Sequence[AttendanceEntry]:
        require_role(caller, OVERSIGHT_ROLES)
        work_date = require_iso_date(work_date, "date")

        return [
            AttendanceEntry(record=rec, user=self._users.get_by_id(rec.user_id))
            for rec in self._attendance.list_for_date(work_date)
        ]

    def get_history(self, *, caller: Caller, user_id: str, limit=DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        require_self_or_oversight(caller, user_id)
        return self._attendance.get_recent_for_user(user_id, normalize_limit(limit))

    def get_record(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, work_date)
