from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SubjectMark:
    name: str
    marks: float
    max_marks: float


@dataclass(frozen=True)
class ResultDocument:
    """Read-model of an uploaded result, consumed by performance scoring."""

    result_id: int
    uploaded_by: int
    student_name: str
    gr_number: str
    standard: str
    created_at: datetime
    academic_year: Optional[str] = None
    subjects: tuple[SubjectMark, ...] = field(default_factory=tuple)
