"""Teacher performance scoring.

Pure functions over already-loaded data; no I/O.

Overall score (out of 100):
    min(uploads / 50 * 25, 25)
    + class average * 0.30
    + attendance rate * 0.25
    + pass percentage * 0.20
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import academic_year_label
from ..core.constants import (
    ACADEMIC_YEAR_START_MONTH,
    PASS_PERCENTAGE,
    RECENT_UPLOAD_DAYS,
    UPLOADS_FOR_FULL_CREDIT,
)
from ..core.enums import AttendanceStatus
from ..results.model import ResultDocument
from ..teachers.model import Teacher
from .model import PerformanceSnapshot, ScoreComponent, SubjectAverage, TopScorer

WEIGHT_RESULTS_UPLOADED = 25
WEIGHT_STUDENT_PERFORMANCE = 30
WEIGHT_ATTENDANCE = 25
WEIGHT_PASS_RATE = 20

GRADE_THRESHOLDS = ((90, "A+"), (80, "A"), (70, "B+"), (60, "B"), (50, "C"))


def percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole else 0.0


def grade_for(score: float) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "D"


def result_percentage(result: ResultDocument) -> float:
    total = sum(s.marks for s in result.subjects)
    max_total = sum(s.max_marks for s in result.subjects)
    return percent(total, max_total)


def _label(result: ResultDocument) -> str:
    if result.academic_year:
        return result.academic_year
    return academic_year_label(result.created_at.date(), start_month=ACADEMIC_YEAR_START_MONTH)


def select_academic_results(results: Sequence[ResultDocument], today: date) -> list[ResultDocument]:
    """Results of the current and preceding academic year, else all of them."""
    current = academic_year_label(today, start_month=ACADEMIC_YEAR_START_MONTH)
    start_year = int(current[:4])
    previous = f"{start_year - 1}-{str(start_year)[-2:]}"

    selected = [r for r in results if _label(r) in (current, previous)]
    return selected or list(results)


def compute_performance(
    teacher: Teacher,
    results: Sequence[ResultDocument],
    attendance: Sequence[AttendanceRecord],
    today: date,
) -> PerformanceSnapshot:
    scoped = select_academic_results(results, today)

    total_marks = 0.0
    total_max = 0.0
    best_by_student: dict[str, float] = {}
    subject_totals: dict[str, list[float]] = {}
    subject_students: dict[str, set[str]] = {}

    for r in scoped:
        if not r.gr_number:
            continue
        for s in r.subjects:
            total_marks += s.marks
            total_max += s.max_marks
            acc = subject_totals.setdefault(s.name, [0.0, 0.0])
            acc[0] += s.marks
            acc[1] += s.max_marks
            subject_students.setdefault(s.name, set()).add(r.gr_number)

        pct = result_percentage(r)
        if r.gr_number not in best_by_student or best_by_student[r.gr_number] < pct:
            best_by_student[r.gr_number] = pct

    students = len(best_by_student)
    passed = sum(1 for pct in best_by_student.values() if pct >= PASS_PERCENTAGE)

    class_average = round(percent(total_marks, total_max), 2)
    pass_percentage = round(percent(passed, students), 2)

    subject_wise = tuple(
        SubjectAverage(
            subject=name,
            average_percentage=round(percent(marks, max_marks), 2),
            total_students=len(subject_students[name]),
        )
        for name, (marks, max_marks) in subject_totals.items()
    )

    total_present = sum(1 for a in attendance if a.status == AttendanceStatus.PRESENT)
    total_days = len(attendance)
    attendance_rate = round(percent(total_present, total_days), 2)

    uploaded = len(results)
    since = today - timedelta(days=RECENT_UPLOAD_DAYS)
    recent = sum(1 for r in results if r.created_at.date() >= since)

    results_score = min(uploaded / UPLOADS_FOR_FULL_CREDIT * WEIGHT_RESULTS_UPLOADED, WEIGHT_RESULTS_UPLOADED)
    performance_score = class_average / 100 * WEIGHT_STUDENT_PERFORMANCE
    attendance_score = attendance_rate / 100 * WEIGHT_ATTENDANCE
    pass_score = pass_percentage / 100 * WEIGHT_PASS_RATE
    overall = round(results_score + performance_score + attendance_score + pass_score, 2)

    top: Optional[TopScorer] = None
    top_pct = 0.0
    for r in scoped:
        pct = result_percentage(r)
        if pct > top_pct:
            top_pct = pct
            top = TopScorer(student_name=r.student_name, gr_number=r.gr_number, percentage=round(pct, 2))

    return PerformanceSnapshot(
        teacher_id=teacher.teacher_id,
        teacher_name=teacher.name,
        employee_id=teacher.employee_id,
        academic_year=academic_year_label(today, start_month=ACADEMIC_YEAR_START_MONTH),
        total_results_uploaded=uploaded,
        recent_uploads=recent,
        total_students_taught=students,
        class_average_percentage=class_average,
        pass_percentage=pass_percentage,
        attendance_rate=attendance_rate,
        total_present=total_present,
        total_days=total_days,
        classes_handled=len({r.standard for r in scoped}),
        overall_score=overall,
        performance_grade=grade_for(overall),
        top_scorer=top,
        subject_wise=subject_wise,
        breakdown={
            "resultsUploaded": ScoreComponent(round(results_score, 2), WEIGHT_RESULTS_UPLOADED, uploaded),
            "studentPerformance": ScoreComponent(
                round(performance_score, 2), WEIGHT_STUDENT_PERFORMANCE, class_average
            ),
            "attendance": ScoreComponent(round(attendance_score, 2), WEIGHT_ATTENDANCE, attendance_rate),
            "passRate": ScoreComponent(round(pass_score, 2), WEIGHT_PASS_RATE, pass_percentage),
        },
    )
