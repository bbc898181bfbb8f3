from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, MarkedBy
from ..teachers.model import Teacher


@dataclass(frozen=True)
class GeoLocation:
    latitude: Optional[float]
    longitude: Optional[float]
    address: Optional[str] = None

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude, "address": self.address}


@dataclass(frozen=True)
class AttendanceRecord:
    """One ledger row: a teacher's status for one day.

    Created exactly once by whichever writer wins the (teacher_id, day) slot.
    """

    teacher_id: int
    day: date
    status: AttendanceStatus
    marked_by: MarkedBy = MarkedBy.SELF
    check_in_time: Optional[str] = None
    location: Optional[GeoLocation] = None
    remarks: str = ""
    auto_marked: bool = False
    auto_marked_reason: Optional[str] = None
    auto_marked_at: Optional[datetime] = None
    attendance_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "teacherId": self.teacher_id,
            "date": self.day.isoformat(),
            "status": self.status.value,
            "markedBy": self.marked_by.value,
            "checkInTime": self.check_in_time,
            "location": self.location.to_dict() if self.location else None,
            "remarks": self.remarks,
            "autoMarked": self.auto_marked,
            "autoMarkedReason": self.auto_marked_reason,
            "autoMarkedAt": self.auto_marked_at.isoformat() if self.auto_marked_at else None,
        }


@dataclass(frozen=True)
class TodayStatus:
    marked: bool
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        return {"marked": self.marked, "attendance": self.record.to_dict() if self.record else None}


@dataclass(frozen=True)
class AttendanceStats:
    present: int = 0
    absent: int = 0
    half_day: int = 0
    leaves: int = 0
    total: int = 0
    percentage: float = 0.0
    leaves_taken_yearly: int = 0
    yearly_leave_limit: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "present": self.present,
            "absent": self.absent,
            "halfDay": self.half_day,
            "leaves": self.leaves,
            "total": self.total,
            "percentage": self.percentage,
        }
        if self.yearly_leave_limit is not None:
            data["leavesTakenYearly"] = self.leaves_taken_yearly
            data["yearlyLeaveLimit"] = self.yearly_leave_limit
        return data


@dataclass(frozen=True)
class AttendanceHistory:
    records: tuple[AttendanceRecord, ...]
    stats: AttendanceStats

    def to_dict(self) -> dict:
        return {"attendance": [r.to_dict() for r in self.records], "stats": self.stats.to_dict()}


@dataclass(frozen=True)
class DailySummary:
    """Admin view of one day across all active teachers."""

    day: date
    total: int
    present: int
    absent: int
    half_day: int
    leave: int
    not_marked: int
    records: tuple[AttendanceRecord, ...] = field(default_factory=tuple)
    unmarked_teachers: tuple[Teacher, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "halfDay": self.half_day,
            "leave": self.leave,
            "notMarked": self.not_marked,
            "attendance": [r.to_dict() for r in self.records],
            "absentTeachers": [t.to_dict() for t in self.unmarked_teachers],
        }


@dataclass(frozen=True)
class AttendanceListing:
    """Ledger rows in a date range with the teacher each belongs to."""

    start: date
    end: date
    entries: tuple[tuple[AttendanceRecord, Optional[Teacher]], ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        rows = []
        for record, teacher in self.entries:
            row = record.to_dict()
            row["teacherName"] = teacher.name if teacher else "Unknown"
            row["employeeId"] = teacher.employee_id if teacher else None
            rows.append(row)
        return {"start": self.start.isoformat(), "end": self.end.isoformat(), "attendance": rows}
