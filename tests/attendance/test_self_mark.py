from datetime import date, datetime

import pytest

from src.school_attendance.school_attendance.attendance.model import AttendanceRecord, GeoLocation
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, MarkedBy, Role
from src.school_attendance.school_attendance.core.exceptions import (
    AlreadyMarkedError,
    ForbiddenError,
    LeaveLimitExceededError,
    LocationOutOfRangeError,
    LocationRequiredError,
    ValidationError,
    WindowClosedError,
)
from src.school_attendance.school_attendance.geo.verifier import Geofence
from src.school_attendance.school_attendance.policy.model import PolicySettings
from src.school_attendance.school_attendance.policy.service import PolicyService
from tests.fakes import SCHOOL_LAT, SCHOOL_LON, FakeAttendanceRepo, FakePolicyRepo, FakeTeacherDirectory, make_teacher

NEAR = GeoLocation(latitude=SCHOOL_LAT + 0.001, longitude=SCHOOL_LON)
FAR = GeoLocation(latitude=SCHOOL_LAT + 0.1, longitude=SCHOOL_LON)


def _service(*, repo=None, settings=None, teachers=None, geofence=None):
    repo = repo or FakeAttendanceRepo()
    teachers = teachers or [make_teacher(1), make_teacher(9, role=Role.ADMIN)]
    service = AttendanceService(
        repo,
        FakeTeacherDirectory(teachers),
        PolicyService(FakePolicyRepo(settings or PolicySettings())),
        geofence or Geofence(SCHOOL_LAT, SCHOOL_LON, 3.0),
    )
    return service, repo


def test_present_before_cutoff_is_recorded(fixed_now):
    service, repo = _service()

    record = service.self_mark(1, "Present", location=NEAR, now=datetime(2025, 1, 15, 10, 59))

    assert record.status == AttendanceStatus.PRESENT
    assert record.marked_by == MarkedBy.SELF
    assert record.check_in_time == "10:59:00"
    assert record.day == date(2025, 1, 15)
    assert record.attendance_id is not None
    assert record.location.address == "0.11 km"
    assert record.auto_marked is False
    assert repo.rows[(1, date(2025, 1, 15))] == record


def test_present_after_cutoff_is_rejected():
    service, repo = _service()

    with pytest.raises(WindowClosedError, match="before 11:00 AM"):
        service.self_mark(1, AttendanceStatus.PRESENT, location=NEAR, now=datetime(2025, 1, 15, 11, 1))

    assert repo.rows == {}


def test_half_day_window_closes_at_half_past_two():
    service, _ = _service()

    record = service.self_mark(1, "Half-Day", location=NEAR, now=datetime(2025, 1, 15, 14, 29))
    assert record.status == AttendanceStatus.HALF_DAY

    service, _ = _service()
    with pytest.raises(WindowClosedError):
        service.self_mark(1, "Half-Day", location=NEAR, now=datetime(2025, 1, 15, 14, 30))


def test_half_day_rejected_when_disabled(fixed_now):
    service, _ = _service(settings=PolicySettings(enable_half_day=False))

    with pytest.raises(ValidationError, match="disabled"):
        service.self_mark(1, "Half-Day", location=NEAR, now=fixed_now)


def test_present_after_half_day_threshold_is_downgraded():
    service, _ = _service(settings=PolicySettings(half_day_threshold="10:00"))

    record = service.self_mark(1, "Present", location=NEAR, now=datetime(2025, 1, 15, 10, 15))

    assert record.status == AttendanceStatus.HALF_DAY
    assert "10:00" in record.remarks


def test_leave_and_absent_have_no_window():
    late = datetime(2025, 1, 15, 20, 0)

    service, _ = _service()
    assert service.self_mark(1, "Leave", now=late).status == AttendanceStatus.LEAVE

    service, _ = _service()
    assert service.self_mark(1, "Absent", location=NEAR, now=late).status == AttendanceStatus.ABSENT


def test_location_required_for_non_leave(fixed_now):
    service, _ = _service()

    with pytest.raises(LocationRequiredError):
        service.self_mark(1, "Present", now=fixed_now)
    with pytest.raises(LocationRequiredError):
        service.self_mark(1, "Absent", location=GeoLocation(None, SCHOOL_LON), now=fixed_now)


def test_location_out_of_range_reports_distance(fixed_now):
    service, repo = _service()

    with pytest.raises(LocationOutOfRangeError) as exc:
        service.self_mark(1, "Present", location=FAR, now=fixed_now)

    assert exc.value.distance_km == pytest.approx(11.12, abs=0.01)
    assert repo.rows == {}


def test_unconfigured_geofence_rejects(fixed_now):
    service, _ = _service(geofence=Geofence(None, None, None))

    with pytest.raises(ValidationError, match="configuration is missing"):
        service.self_mark(1, "Present", location=NEAR, now=fixed_now)


def test_leave_skips_location(fixed_now):
    service, _ = _service()

    record = service.self_mark(1, "Leave", location=FAR, remarks=" family event ", now=fixed_now)

    assert record.location is None
    assert record.remarks == "family event"


def test_second_mark_same_day_returns_existing(fixed_now):
    service, _ = _service()
    first = service.self_mark(1, "Present", location=NEAR, now=fixed_now)

    with pytest.raises(AlreadyMarkedError) as exc:
        service.self_mark(1, "Leave", now=fixed_now)

    assert exc.value.record == first


def test_lost_race_is_reported_as_already_marked(fixed_now):
    service, repo = _service()
    day = fixed_now.date()
    winner = AttendanceRecord(teacher_id=1, day=day, status=AttendanceStatus.LEAVE, marked_by=MarkedBy.SYSTEM)
    repo.preempt[(1, day)] = winner

    with pytest.raises(AlreadyMarkedError) as exc:
        service.self_mark(1, "Present", location=NEAR, now=fixed_now)

    assert exc.value.record.marked_by == MarkedBy.SYSTEM
    assert len(repo.rows) == 1


@pytest.mark.parametrize(
    "teacher",
    [
        None,
        make_teacher(1, active=False),
        make_teacher(1, role=Role.STUDENT),
    ],
)
def test_only_active_teachers_may_mark(teacher, fixed_now):
    service, _ = _service(teachers=[teacher] if teacher else [make_teacher(2)])

    with pytest.raises(ForbiddenError):
        service.self_mark(1, "Present", location=NEAR, now=fixed_now)


def test_admin_may_self_mark(fixed_now):
    service, _ = _service()

    assert service.self_mark(9, "Present", location=NEAR, now=fixed_now).teacher_id == 9


def test_yearly_leave_limit(fixed_now):
    repo = FakeAttendanceRepo()
    for d in (2, 3):
        repo.add(AttendanceRecord(teacher_id=1, day=date(2025, 1, d), status=AttendanceStatus.LEAVE))
    repo.add(AttendanceRecord(teacher_id=1, day=date(2024, 12, 30), status=AttendanceStatus.LEAVE))
    service, _ = _service(repo=repo, settings=PolicySettings(yearly_leave_limit=2))

    with pytest.raises(LeaveLimitExceededError, match=r"\(2/2\)"):
        service.self_mark(1, "Leave", now=fixed_now)

    service, _ = _service(repo=repo, settings=PolicySettings(yearly_leave_limit=3))
    assert service.self_mark(1, "Leave", now=fixed_now).status == AttendanceStatus.LEAVE


def test_unknown_status_is_a_validation_error(fixed_now):
    service, _ = _service()

    with pytest.raises(ValidationError, match="Invalid status"):
        service.self_mark(1, "Late", location=NEAR, now=fixed_now)
