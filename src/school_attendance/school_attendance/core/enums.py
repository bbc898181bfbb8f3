from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles stored on directory entries."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Terminal attendance states stored in the ledger."""

    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half-Day"
    LEAVE = "Leave"


class MarkedBy(str, Enum):
    """Who wrote a ledger record."""

    SELF = "self"
    ADMIN = "admin"
    SYSTEM = "system"


class SweepOutcome(str, Enum):
    COMPLETED = "COMPLETED"
    DISABLED = "DISABLED"
    BEFORE_DEADLINE = "BEFORE_DEADLINE"
    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"
    NO_TEACHERS = "NO_TEACHERS"
    FAILED = "FAILED"
