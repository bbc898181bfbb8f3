from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TopScorer:
    student_name: str
    gr_number: str
    percentage: float


@dataclass(frozen=True)
class SubjectAverage:
    subject: str
    average_percentage: float
    total_students: int


@dataclass(frozen=True)
class ScoreComponent:
    score: float
    weight: int
    actual_value: float


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Derived per-teacher scorecard. Never persisted."""

    teacher_id: int
    teacher_name: str
    employee_id: Optional[str]
    academic_year: str
    total_results_uploaded: int
    recent_uploads: int
    total_students_taught: int
    class_average_percentage: float
    pass_percentage: float
    attendance_rate: float
    total_present: int
    total_days: int
    classes_handled: int
    overall_score: float
    performance_grade: str
    top_scorer: Optional[TopScorer] = None
    subject_wise: tuple[SubjectAverage, ...] = field(default_factory=tuple)
    breakdown: dict[str, ScoreComponent] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "employeeId": self.employee_id,
            "academicYear": self.academic_year,
            "totalResultsUploaded": self.total_results_uploaded,
            "recentUploads": self.recent_uploads,
            "totalStudentsTaught": self.total_students_taught,
            "classAveragePercentage": self.class_average_percentage,
            "passPercentage": self.pass_percentage,
            "topScorer": (
                {
                    "studentName": self.top_scorer.student_name,
                    "grNumber": self.top_scorer.gr_number,
                    "percentage": self.top_scorer.percentage,
                }
                if self.top_scorer
                else None
            ),
            "subjectWisePerformance": [
                {"subject": s.subject, "averagePercentage": s.average_percentage, "totalStudents": s.total_students}
                for s in self.subject_wise
            ],
            "classesHandled": self.classes_handled,
            "attendanceRate": self.attendance_rate,
            "totalPresent": self.total_present,
            "totalDays": self.total_days,
            "overallScore": self.overall_score,
            "performanceGrade": self.performance_grade,
            "performanceBreakdown": {
                name: {"score": c.score, "weight": c.weight, "actualValue": c.actual_value}
                for name, c in self.breakdown.items()
            },
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    snapshot: PerformanceSnapshot

    def to_dict(self) -> dict:
        return {"rank": self.rank, **self.snapshot.to_dict()}
