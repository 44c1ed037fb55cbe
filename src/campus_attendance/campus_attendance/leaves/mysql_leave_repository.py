from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_SELECT = """
    SELECT id, user_id, leave_type, from_date, to_date, reason,
           status, approved_by, created_at, responded_at
    FROM leave_requests
"""


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        user_id=r["user_id"],
        leave_type=LeaveType(r["leave_type"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        approved_by=r.get("approved_by"),
        responded_at=r.get("responded_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: str,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        reason: str,
        created_at: datetime,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_type, from_date, to_date, reason, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, leave_type.value, from_date, to_date, reason, LeaveStatus.PENDING.value, created_at),
            )
            return LeaveRequest(
                request_id=int(cur.lastrowid),
                user_id=user_id,
                leave_type=leave_type,
                from_date=from_date,
                to_date=to_date,
                reason=reason,
                status=LeaveStatus.PENDING,
                created_at=created_at,
            )

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_pending(self) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE status=%s ORDER BY created_at ASC, id ASC", (LeaveStatus.PENDING.value,))
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: str) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE user_id=%s ORDER BY created_at DESC, id DESC", (user_id,))
            return [_row_to_request(r) for r in fetchall(cur)]

    def count_pending(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s", (LeaveStatus.PENDING.value,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        approved_by: str,
        responded_at: datetime,
    ) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, responded_at=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, approved_by, responded_at, int(request_id), LeaveStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(_SELECT + " WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None
