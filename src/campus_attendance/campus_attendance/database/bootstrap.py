from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterable

from ..core.enums import AttendanceStatus, LeaveType, Role
from ..users.model import User
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("H001", "Dr. Smith", "dr.smith@university.edu", Role.HEAD, "Administration"),
    ("A001", "Ms. Anderson", "ms.anderson@university.edu", Role.ADMIN, "Administration"),
    ("M001", "Mr. Wilson", "mr.wilson@university.edu", Role.MAZER, "Academic Affairs"),
    ("AS001", "Ms. Thompson", "ms.thompson@university.edu", Role.ASSISTANT, "Human Resources"),
    ("T001", "Mr. Chan", "mr.chan@university.edu", Role.TEACHER, "Mathematics"),
    ("T002", "Ms. Lina", "ms.lina@university.edu", Role.TEACHER, "English"),
    ("T003", "Ms. Sarah Johnson", "ms.johnson@university.edu", Role.TEACHER, "Science"),
    ("T004", "Dr. Michael", "dr.michael@university.edu", Role.TEACHER, "Physics"),
    ("S001", "Ms. Vanna", "ms.vanna@university.edu", Role.STAFF, "IT Services"),
    ("S002", "Mr. Dara", "mr.dara@university.edu", Role.STAFF, "IT Services"),
    ("S003", "Ms. Linda Kim", "ms.kim@university.edu", Role.STAFF, "Administration"),
    ("S004", "Mr. Robert Kim", "mr.rkim@university.edu", Role.STAFF, "Maintenance"),
    ("S005", "Ms. Anna Park", "ms.park@university.edu", Role.STAFF, "Library"),
]

# (user, day, start, end, subject, work type)
DEMO_SCHEDULES = [
    ("T001", "monday", "08:00", "10:00", "Math", None),
    ("T002", "monday", "10:00", "12:00", "English", None),
    ("T003", "monday", "13:00", "15:00", "Science", None),
    ("T004", "monday", "15:00", "17:00", "Physics", None),
    ("S001", "monday", "08:00", "17:00", None, "IT Full-Time"),
    ("S002", "monday", "08:00", "12:00", None, "IT Part-Time"),
    ("S003", "monday", "09:00", "16:00", None, "Administration"),
    ("S004", "monday", "07:00", "15:00", None, "Maintenance"),
    ("S005", "monday", "10:00", "18:00", None, "Library"),
]

# (user, time in, marked by)
DEMO_PRESENT_TODAY = [
    ("T001", "07:45", "M001"),
    ("S001", "07:55", "AS001"),
    ("S003", "08:50", "AS001"),
]

# (user, type, from, to, reason)
DEMO_LEAVES = [
    ("T003", LeaveType.SICK, date(2024, 11, 26), date(2024, 11, 27), "Medical appointment"),
    ("S004", LeaveType.ANNUAL, date(2024, 12, 1), date(2024, 12, 5), "Family vacation"),
]


def seed_demo_data(container, *, now: datetime | None = None) -> bool:
    """Load the demo roster into an empty store.

    Returns False (and changes nothing) when users already exist.
    """

    now = now or datetime.now()
    if container.users_repo.list_all():
        return False

    password_hash = container.user_service.hash_password(DEMO_PASSWORD)
    for user_id, name, email, role, department in DEMO_USERS:
        container.users_repo.create(
            User(
                user_id=user_id,
                name=name,
                email=email,
                password_hash=password_hash,
                role=role,
                department=department,
                is_active=True,
            )
        )

    for user_id, day, start, end, subject, work_type in DEMO_SCHEDULES:
        container.schedules_repo.create(
            user_id=user_id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            subject=subject,
            work_type=work_type,
        )

    for user_id, time_in, marked_by in DEMO_PRESENT_TODAY:
        container.attendance_repo.upsert(
            user_id=user_id,
            work_date=now.date(),
            status=AttendanceStatus.PRESENT,
            time_in=time_in,
            time_out=None,
            marked_by=marked_by,
            marked_at=now,
        )

    for offset, (user_id, leave_type, start, end, reason) in enumerate(DEMO_LEAVES):
        container.leaves_repo.create(
            user_id=user_id,
            leave_type=leave_type,
            from_date=start,
            to_date=end,
            reason=reason,
            created_at=now + timedelta(seconds=offset),
        )

    logger.info("demo data loaded: %d users, %d schedules", len(DEMO_USERS), len(DEMO_SCHEDULES))
    return True


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s", conn_factory.config.describe())


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
