from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, MarkedBy
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_duplicate_key
from .model import AttendanceRecord, GeoLocation
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, teacher_id, attendance_date, status, marked_by, check_in_time,
    latitude, longitude, address, remarks, auto_marked, auto_marked_reason, auto_marked_at
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None or r.get("address"):
        location = GeoLocation(
            latitude=r.get("latitude"),
            longitude=r.get("longitude"),
            address=r.get("address"),
        )
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        teacher_id=int(r["teacher_id"]),
        day=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        marked_by=MarkedBy(r["marked_by"]),
        check_in_time=r.get("check_in_time"),
        location=location,
        remarks=r.get("remarks") or "",
        auto_marked=bool(r.get("auto_marked")),
        auto_marked_reason=r.get("auto_marked_reason"),
        auto_marked_at=r.get("auto_marked_at"),
    )


def _record_params(record: AttendanceRecord) -> tuple:
    loc = record.location
    return (
        record.teacher_id,
        record.day,
        record.status.value,
        record.marked_by.value,
        record.check_in_time,
        loc.latitude if loc else None,
        loc.longitude if loc else None,
        loc.address if loc else None,
        record.remarks or "",
        1 if record.auto_marked else 0,
        record.auto_marked_reason,
        record.auto_marked_at,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_teacher_and_day(self, teacher_id: int, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teacher_attendance WHERE teacher_id=%s AND attendance_date=%s",
                (int(teacher_id), day),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        with translate_duplicate_key("Attendance already recorded for this teacher and day"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO teacher_attendance(
                        teacher_id, attendance_date, status, marked_by, check_in_time,
                        latitude, longitude, address, remarks,
                        auto_marked, auto_marked_reason, auto_marked_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    _record_params(record),
                )
                attendance_id = int(cur.lastrowid)
        return replace(record, attendance_id=attendance_id)

    def list_for_teacher(
        self,
        teacher_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        sql = f"SELECT {_COLUMNS} FROM teacher_attendance WHERE teacher_id=%s"
        params: list = [int(teacher_id)]
        if start:
            sql += " AND attendance_date >= %s"
            params.append(start)
        if end:
            sql += " AND attendance_date <= %s"
            params.append(end)
        sql += " ORDER BY attendance_date DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_day(self, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teacher_attendance WHERE attendance_date=%s ORDER BY teacher_id ASC",
                (day,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_range(self, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM teacher_attendance
                WHERE attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date DESC, teacher_id ASC
                """,
                (start, end),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def update_status(
        self,
        attendance_id: int,
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        sql = "UPDATE teacher_attendance SET status=%s"
        params: list = [status.value]
        if remarks is not None:
            sql += ", remarks=%s"
            params.append(remarks)
        sql += " WHERE attendance_id=%s"
        params.append(int(attendance_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            # rowcount is 0 for an unchanged row, so existence comes from the re-read.
            cur.execute(f"SELECT {_COLUMNS} FROM teacher_attendance WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def count_for_teacher_in_year(self, teacher_id: int, year: int, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt FROM teacher_attendance
                WHERE teacher_id=%s AND YEAR(attendance_date)=%s AND status=%s
                """,
                (int(teacher_id), int(year), status.value),
            )
            r = fetchone(cur)
            return int(r["cnt"]) if r else 0

    def admin_upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teacher_attendance(
                    teacher_id, attendance_date, status, marked_by, check_in_time,
                    latitude, longitude, address, remarks,
                    auto_marked, auto_marked_reason, auto_marked_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), marked_by=VALUES(marked_by),
                    check_in_time=VALUES(check_in_time), latitude=VALUES(latitude),
                    longitude=VALUES(longitude), address=VALUES(address), remarks=VALUES(remarks),
                    auto_marked=VALUES(auto_marked), auto_marked_reason=VALUES(auto_marked_reason),
                    auto_marked_at=VALUES(auto_marked_at)
                """,
                _record_params(record),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM teacher_attendance WHERE teacher_id=%s AND attendance_date=%s",
                (record.teacher_id, record.day),
            )
            return _row_to_record(fetchone(cur))

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teacher_attendance WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
