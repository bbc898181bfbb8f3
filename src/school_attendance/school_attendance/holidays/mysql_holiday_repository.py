from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository

_SELECT = "SELECT holiday_id, holiday_date, name, description, is_recurring FROM public_holidays"


def _row_to_holiday(r: dict) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        holiday_date=r["holiday_date"],
        name=r["name"],
        description=r.get("description") or "",
        is_recurring=bool(r["is_recurring"]),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE holiday_id=%s", (int(holiday_id),))
            r = fetchone(cur)
            return _row_to_holiday(r) if r else None

    def find_by_date(self, day: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE holiday_date=%s ORDER BY holiday_id LIMIT 1", (day,))
            r = fetchone(cur)
            return _row_to_holiday(r) if r else None

    def find_recurring(self, *, month: int, day: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE is_recurring=1 AND MONTH(holiday_date)=%s AND DAY(holiday_date)=%s
                ORDER BY holiday_id
                LIMIT 1
                """,
                (int(month), int(day)),
            )
            r = fetchone(cur)
            return _row_to_holiday(r) if r else None

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY holiday_date ASC")
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def list_for_year(self, year: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE YEAR(holiday_date)=%s OR is_recurring=1 ORDER BY holiday_date ASC",
                (int(year),),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def list_upcoming(self, *, from_date: date, limit: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE holiday_date >= %s ORDER BY holiday_date ASC LIMIT %s",
                (from_date, int(limit)),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        holiday_date: date,
        name: str,
        description: str,
        is_recurring: bool,
        created_by: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO public_holidays(holiday_date, name, description, is_recurring, created_by)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (holiday_date, name, description, int(is_recurring), created_by),
            )
            return int(cur.lastrowid)

    def update(self, holiday: Holiday) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE public_holidays
                SET holiday_date=%s, name=%s, description=%s, is_recurring=%s
                WHERE holiday_id=%s
                """,
                (
                    holiday.holiday_date,
                    holiday.name,
                    holiday.description,
                    int(holiday.is_recurring),
                    int(holiday.holiday_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM public_holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
