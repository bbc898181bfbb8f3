from datetime import date, datetime

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from flask import Flask

from src.school_attendance.school_attendance.attendance import service as attendance_service_module
from src.school_attendance.school_attendance.attendance.model import AttendanceRecord
from src.school_attendance.school_attendance.attendance.service import AttendanceService
from src.school_attendance.school_attendance.compliance import sweeper as sweeper_module
from src.school_attendance.school_attendance.compliance.scheduler import SweepScheduler
from src.school_attendance.school_attendance.compliance.sweeper import ComplianceSweeper
from src.school_attendance.school_attendance.container import Container
from src.school_attendance.school_attendance.core.enums import AttendanceStatus, Role
from src.school_attendance.school_attendance.geo.verifier import Geofence
from src.school_attendance.school_attendance.holidays import controller as holidays_controller_module
from src.school_attendance.school_attendance.holidays.model import Holiday
from src.school_attendance.school_attendance.holidays.service import HolidayService
from src.school_attendance.school_attendance.main import register_all
from src.school_attendance.school_attendance.notifications.dispatcher import NotificationDispatcher
from src.school_attendance.school_attendance.performance.service import PerformanceService
from src.school_attendance.school_attendance.policy.service import PolicyService
from tests.fakes import (
    SCHOOL_LAT,
    SCHOOL_LON,
    FakeAttendanceRepo,
    FakeHolidayRepo,
    FakePolicyRepo,
    FakeResultRepo,
    FakeTeacherDirectory,
    RecordingSink,
    make_result,
    make_teacher,
)

NOW = datetime(2025, 1, 15, 10, 30)


@pytest.fixture
def container(monkeypatch):
    for module in (attendance_service_module, sweeper_module, holidays_controller_module):
        monkeypatch.setattr(module, "now_local", lambda tz: NOW)

    teachers = FakeTeacherDirectory(
        [make_teacher(1, "Asha"), make_teacher(2, "Ravi"), make_teacher(3, "Meena"), make_teacher(9, "Principal", role=Role.ADMIN)]
    )
    repo = FakeAttendanceRepo()
    repo.add(AttendanceRecord(teacher_id=2, day=NOW.date(), status=AttendanceStatus.LEAVE))
    policy = PolicyService(FakePolicyRepo())
    holidays = HolidayService(FakeHolidayRepo([Holiday(1, date(2020, 1, 26), "Republic Day", is_recurring=True)]))
    sweeper = ComplianceSweeper(repo, teachers, policy, holidays, NotificationDispatcher(RecordingSink()))
    scheduler = BackgroundScheduler()

    yield Container(
        conn=None,
        teachers=teachers,
        attendance_repo=repo,
        policy_service=policy,
        holiday_service=holidays,
        attendance_service=AttendanceService(repo, teachers, policy, Geofence(SCHOOL_LAT, SCHOOL_LON, 3.0)),
        sweeper=sweeper,
        sweep_scheduler=SweepScheduler(sweeper, scheduler=scheduler),
        performance_service=PerformanceService(
            teachers, FakeResultRepo([make_result(1, uploaded_by=1, marks=((70, 100),))]), repo
        ),
    )

    if scheduler.running:
        scheduler.shutdown(wait=False)


@pytest.fixture
def app(container):
    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TESTING"] = True
    register_all(app, container)
    return app


def _login(client, user_id, role):
    with client.session_transaction() as s:
        s["user_id"] = user_id
        s["role"] = role
    return client


@pytest.fixture
def teacher_client(app):
    return _login(app.test_client(), 1, "teacher")


@pytest.fixture
def admin_client(app):
    return _login(app.test_client(), 9, "admin")
