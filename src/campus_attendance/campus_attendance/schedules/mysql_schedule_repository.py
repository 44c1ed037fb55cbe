from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Schedule
from .repository import ScheduleRepository

_SELECT = """
    SELECT id, user_id, day_of_week, start_time, end_time, subject, work_type
    FROM schedules
"""


def _row_to_schedule(r: dict) -> Schedule:
    return Schedule(
        schedule_id=int(r["id"]),
        user_id=r["user_id"],
        day_of_week=r["day_of_week"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        subject=r.get("subject"),
        work_type=r.get("work_type"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_day(self, day_of_week: str) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE day_of_week=%s ORDER BY start_time, id", (day_of_week,))
            return [_row_to_schedule(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: str) -> Sequence[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s ORDER BY id", (user_id,))
            return [_row_to_schedule(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedules(user_id, day_of_week, start_time, end_time, subject, work_type)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, day_of_week, start_time, end_time, subject, work_type),
            )
            return Schedule(
                schedule_id=int(cur.lastrowid),
                user_id=user_id,
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                subject=subject,
                work_type=work_type,
            )
