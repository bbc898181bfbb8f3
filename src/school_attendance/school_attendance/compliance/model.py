from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import SweepOutcome
from ..teachers.model import Teacher


@dataclass(frozen=True)
class SweepFailure:
    teacher_id: int
    name: str
    message: str

    def to_dict(self) -> dict:
        return {"teacherId": self.teacher_id, "name": self.name, "error": self.message}


@dataclass(frozen=True)
class SweepReport:
    """Summary of one sweep run, consumed by administrators."""

    outcome: SweepOutcome
    message: str
    day: Optional[date] = None
    total_teachers: int = 0
    already_marked_count: int = 0
    marked_count: int = 0
    skipped_count: int = 0
    notified_count: int = 0
    marked_teachers: tuple[Teacher, ...] = field(default_factory=tuple)
    errors: tuple[SweepFailure, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "message": self.message,
            "date": self.day.isoformat() if self.day else None,
            "totalTeachers": self.total_teachers,
            "alreadyMarkedCount": self.already_marked_count,
            "markedCount": self.marked_count,
            "skippedCount": self.skipped_count,
            "notifiedCount": self.notified_count,
            "markedTeachers": [t.to_dict() for t in self.marked_teachers],
            "errors": [e.to_dict() for e in self.errors],
        }
