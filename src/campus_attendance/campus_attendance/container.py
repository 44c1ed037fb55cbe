from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.memory_leave_repository import InMemoryLeaveRequestRepository
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .leaves.repository import LeaveRequestRepository
from .leaves.service import LeaveService
from .schedules.memory_schedule_repository import InMemoryScheduleRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import DEFAULT_HASH_METHOD, AuthService, UserService

BACKENDS = ("memory", "mysql")


@dataclass(frozen=True)
class Container:
    """Owns the record store and every service built on it for one application."""

    backend: str
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    schedules_repo: ScheduleRepository
    leaves_repo: LeaveRequestRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    schedule_service: ScheduleService
    leave_service: LeaveService
    dashboard_service: DashboardService


def build_container(
    *,
    backend: str = "memory",
    db_config: Optional[dict] = None,
    password_hash_method: str = DEFAULT_HASH_METHOD,
) -> Container:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown STORE_BACKEND {backend!r}; expected one of {BACKENDS}")

    conn: Optional[DatabaseConnection] = None
    if backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_mapping(db_config or {}))
        users_repo = MySQLUserRepository(conn)
        attendance_repo = MySQLAttendanceRepository(conn)
        schedules_repo = MySQLScheduleRepository(conn)
        leaves_repo = MySQLLeaveRequestRepository(conn)
    else:
        users_repo = InMemoryUserRepository()
        attendance_repo = InMemoryAttendanceRepository()
        schedules_repo = InMemoryScheduleRepository()
        leaves_repo = InMemoryLeaveRequestRepository()

    return Container(
        backend=backend,
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        leaves_repo=leaves_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, hash_method=password_hash_method),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        schedule_service=ScheduleService(schedules_repo, users_repo, attendance_repo),
        leave_service=LeaveService(leaves_repo, users_repo),
        dashboard_service=DashboardService(attendance_repo, leaves_repo, users_repo),
    )
