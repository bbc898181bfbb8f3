from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def find_for_teacher_and_day(self, teacher_id: int, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert a new record and return it with its id.

        Raises DuplicateKeyError when (teacher_id, day) is already taken.
        """

        raise NotImplementedError

    def list_for_teacher(
        self,
        teacher_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def list_for_day(self, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_range(self, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Inclusive range, newest day first."""

        raise NotImplementedError

    def update_status(
        self,
        attendance_id: int,
        status: AttendanceStatus,
        remarks: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Change status (and remarks when given); None if the id is unknown."""

        raise NotImplementedError

    def count_for_teacher_in_year(self, teacher_id: int, year: int, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def admin_upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Admin-only write that may overwrite the day's record."""

        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
