from datetime import date, datetime

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.performance.scorer import (
    compute_performance,
    grade_for,
    select_academic_results,
)
from tests.fakes import make_result, make_teacher

TODAY = date(2025, 1, 15)
TEACHER = make_teacher(1, "Asha Patel")


def _attendance(*statuses):
    return [
        AttendanceRecord(teacher_id=1, day=date(2025, 1, i + 1), status=s) for i, s in enumerate(statuses)
    ]


def test_teacher_with_nothing_scores_zero():
    snap = compute_performance(TEACHER, [], [], TODAY)

    assert snap.overall_score == 0
    assert snap.performance_grade == "D"
    assert snap.class_average_percentage == 0.0
    assert snap.pass_percentage == 0.0
    assert snap.attendance_rate == 0.0
    assert snap.top_scorer is None
    assert snap.academic_year == "2024-25"


def test_weighted_score_and_breakdown():
    results = [make_result(1, marks=((60, 100),))]
    attendance = _attendance(AttendanceStatus.PRESENT, AttendanceStatus.PRESENT, AttendanceStatus.LEAVE)

    snap = compute_performance(TEACHER, results, attendance, TODAY)

    assert snap.attendance_rate == 66.67
    assert snap.total_present == 2
    assert snap.total_days == 3
    assert snap.overall_score == pytest.approx(55.17, abs=0.01)
    assert snap.performance_grade == "C"
    breakdown = snap.to_dict()["performanceBreakdown"]
    assert breakdown["resultsUploaded"] == {"score": 0.5, "weight": 25, "actualValue": 1}
    assert breakdown["passRate"]["actualValue"] == 100.0


def test_perfect_teacher_and_upload_cap():
    results = [make_result(i, gr_number=f"GR{i}", marks=((100, 100),)) for i in range(60)]

    snap = compute_performance(TEACHER, results, _attendance(AttendanceStatus.PRESENT), TODAY)

    assert snap.breakdown["resultsUploaded"].score == 25
    assert snap.overall_score == 100
    assert snap.performance_grade == "A+"


def test_pass_mark_is_inclusive_at_33():
    results = [
        make_result(1, gr_number="GR1", marks=((33, 100),)),
        make_result(2, gr_number="GR2", marks=((32.99, 100),)),
    ]

    snap = compute_performance(TEACHER, results, [], TODAY)

    assert snap.total_students_taught == 2
    assert snap.pass_percentage == 50.0


def test_best_result_per_student_counts_once():
    results = [
        make_result(1, gr_number="GR1", marks=((20, 100),)),
        make_result(2, gr_number="GR1", marks=((80, 100),)),
    ]

    snap = compute_performance(TEACHER, results, [], TODAY)

    assert snap.total_students_taught == 1
    assert snap.pass_percentage == 100.0
    assert snap.class_average_percentage == 50.0
    assert snap.top_scorer.percentage == 80.0


def test_results_without_gr_number_do_not_count_as_students():
    results = [make_result(1, gr_number="", marks=((90, 100),)), make_result(2, gr_number="GR2", marks=((40, 100),))]

    snap = compute_performance(TEACHER, results, [], TODAY)

    assert snap.total_students_taught == 1
    assert snap.class_average_percentage == 40.0
    assert snap.total_results_uploaded == 2


def test_subject_averages():
    results = [
        make_result(1, gr_number="GR1", marks=((40, 50), (30, 50))),
        make_result(2, gr_number="GR2", marks=((20, 50), (50, 50))),
    ]

    snap = compute_performance(TEACHER, results, [], TODAY)

    by_name = {s.subject: s for s in snap.subject_wise}
    assert by_name["Subject 0"].average_percentage == 60.0
    assert by_name["Subject 1"].average_percentage == 80.0
    assert by_name["Subject 1"].total_students == 2


def test_recent_uploads_window():
    results = [
        make_result(1, created_at=datetime(2025, 1, 1, 10, 0)),
        make_result(2, created_at=datetime(2024, 12, 1, 10, 0)),
    ]

    assert compute_performance(TEACHER, results, [], TODAY).recent_uploads == 1


def test_academic_year_scope_and_fallback():
    current = make_result(1, academic_year="2024-25", standard="5")
    previous = make_result(2, academic_year="2023-24", standard="6")
    old = make_result(3, academic_year="2019-20", standard="7")

    assert select_academic_results([current, previous, old], TODAY) == [current, previous]
    assert select_academic_results([old], TODAY) == [old]

    snap = compute_performance(TEACHER, [current, previous, old], [], TODAY)
    assert snap.classes_handled == 2
    assert snap.total_results_uploaded == 3


def test_academic_year_derived_from_upload_date_when_missing():
    undated = make_result(1, academic_year=None, created_at=datetime(2024, 5, 1, 9, 0))

    assert select_academic_results([undated, make_result(2, academic_year="2010-11")], TODAY) == [undated]


@pytest.mark.parametrize(
    "score, grade",
    [(100, "A+"), (90, "A+"), (89.99, "A"), (80, "A"), (70, "B+"), (60, "B"), (50, "C"), (49.99, "D"), (0, "D")],
)
def test_grade_bands(score, grade):
    assert grade_for(score) == grade
