from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import MarkStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .compliance.scheduler import SweepScheduler
from .compliance.sweeper import ComplianceSweeper
from .core.constants import (
    DEFAULT_SWEEP_BASE_TIMEOUT_SECONDS,
    DEFAULT_SWEEP_PER_TEACHER_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
    DEFAULT_WEEKLY_OFF_DAY,
)
from .database.connection import DBConfig, DatabaseConnection
from .geo.verifier import Geofence
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .notifications.dispatcher import NotificationDispatcher
from .notifications.smtp_sink import SmtpNotificationSink, SmtpSettings
from .performance.service import PerformanceService
from .policy.mysql_policy_repository import MySQLPolicyRepository
from .policy.service import PolicyService
from .results.mysql_result_repository import MySQLResultRepository
from .teachers.mysql_teacher_directory import MySQLTeacherDirectory
from .teachers.repository import TeacherDirectory


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    teachers: TeacherDirectory
    attendance_repo: AttendanceRepository

    policy_service: PolicyService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    sweeper: ComplianceSweeper
    sweep_scheduler: SweepScheduler
    performance_service: PerformanceService


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    weekly_off_day: int = DEFAULT_WEEKLY_OFF_DAY,
    geofence: Geofence | None = None,
    smtp: SmtpSettings | None = None,
    sweep_base_timeout_seconds: float = DEFAULT_SWEEP_BASE_TIMEOUT_SECONDS,
    sweep_per_teacher_timeout_seconds: float = DEFAULT_SWEEP_PER_TEACHER_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    teachers = MySQLTeacherDirectory(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    results_repo = MySQLResultRepository(conn)

    policy_service = PolicyService(MySQLPolicyRepository(conn))
    holiday_service = HolidayService(MySQLHolidayRepository(conn))
    attendance_service = AttendanceService(
        attendance_repo,
        teachers,
        policy_service,
        geofence or Geofence(latitude=None, longitude=None, radius_km=None),
        strategy_factory=MarkStrategyFactory(),
        timezone=timezone,
    )
    dispatcher = NotificationDispatcher(SmtpNotificationSink(smtp or SmtpSettings(host=None)))
    sweeper = ComplianceSweeper(
        attendance_repo,
        teachers,
        policy_service,
        holiday_service,
        dispatcher,
        timezone=timezone,
        weekly_off_day=weekly_off_day,
        base_timeout_seconds=sweep_base_timeout_seconds,
        per_teacher_timeout_seconds=sweep_per_teacher_timeout_seconds,
    )
    performance_service = PerformanceService(teachers, results_repo, attendance_repo, timezone=timezone)

    return Container(
        conn=conn,
        teachers=teachers,
        attendance_repo=attendance_repo,
        policy_service=policy_service,
        holiday_service=holiday_service,
        attendance_service=attendance_service,
        sweeper=sweeper,
        sweep_scheduler=SweepScheduler(sweeper),
        performance_service=performance_service,
    )
