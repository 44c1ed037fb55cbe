from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_COLUMNS = {
    "name": "name",
    "email": "email",
    "password_hash": "password_hash",
    "role": "role",
    "department": "department",
    "is_active": "is_active",
}


def _row_to_user(row: dict) -> User:
    return User(
        user_id=row["id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row.get("department"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, password_hash, role, department, is_active
                FROM users
                WHERE id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, email, password_hash, role, department, is_active
                FROM users
                ORDER BY id
                """
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def create(self, user: User) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(id, name, email, password_hash, role, department, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user.user_id,
                        user.name,
                        user.email,
                        user.password_hash,
                        user.role.value,
                        user.department,
                        int(user.is_active),
                    ),
                )
        except IntegrityError as err:
            if is_duplicate_key(err):
                return False
            raise
        return True

    def update(self, user_id: str, **changes) -> Optional[User]:
        assignments: list[str] = []
        params: list[object] = []
        for field, value in changes.items():
            column = _COLUMNS[field]
            if isinstance(value, Role):
                value = value.value
            elif isinstance(value, bool):
                value = int(value)
            assignments.append(f"{column}=%s")
            params.append(value)

        with db_cursor(self._conn_factory) as (_, cur):
            if assignments:
                cur.execute(
                    f"UPDATE users SET {', '.join(assignments)} WHERE id=%s",
                    tuple(params + [user_id]),
                )
            cur.execute(
                """
                SELECT id, name, email, password_hash, role, department, is_active
                FROM users
                WHERE id=%s
                """,
                (user_id,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM users WHERE is_active=1")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
