from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT id, user_id, work_date, status, time_in, time_out, marked_by, marked_at
    FROM attendance
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=r["user_id"],
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        time_in=r.get("time_in"),
        time_out=r.get("time_out"),
        marked_by=r["marked_by"],
        marked_at=r["marked_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s AND work_date=%s", (user_id, work_date))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE user_id=%s ORDER BY work_date DESC LIMIT %s",
                (user_id, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE work_date=%s ORDER BY id", (work_date,))
            return [_row_to_record(r) for r in fetchall(cur)]

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
        # UNIQUE(user_id, work_date) makes this a single atomic statement per slot.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, work_date, status, time_in, time_out, marked_by, marked_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    time_in=VALUES(time_in),
                    time_out=VALUES(time_out),
                    marked_by=VALUES(marked_by),
                    marked_at=VALUES(marked_at)
                """,
                (user_id, work_date, status.value, time_in, time_out, marked_by, marked_at),
            )
            cur.execute(_SELECT + " WHERE user_id=%s AND work_date=%s", (user_id, work_date))
            return _row_to_record(fetchone(cur))
