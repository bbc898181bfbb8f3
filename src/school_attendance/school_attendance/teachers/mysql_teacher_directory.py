from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Teacher
from .repository import TeacherDirectory


def _row_to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["user_id"]),
        name=r["full_name"],
        employee_id=r.get("employee_id"),
        email=r.get("email"),
        role=Role(r["role"]),
        is_active=bool(r["is_active"]),
    )


class MySQLTeacherDirectory(TeacherDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, employee_id, email, role, is_active
                FROM users
                WHERE user_id=%s
                """,
                (int(teacher_id),),
            )
            r = fetchone(cur)
            return _row_to_teacher(r) if r else None

    def list_active(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, employee_id, email, role, is_active
                FROM users
                WHERE role=%s AND is_active=1
                ORDER BY user_id ASC
                """,
                (Role.TEACHER.value,),
            )
            return [_row_to_teacher(r) for r in fetchall(cur)]
