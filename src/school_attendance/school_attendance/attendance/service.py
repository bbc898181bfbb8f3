from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_TIMEZONE, MAX_LISTING_DAYS
from ..core.enums import AttendanceStatus, MarkedBy, Role
from ..core.exceptions import (
    AlreadyMarkedError,
    DuplicateKeyError,
    ForbiddenError,
    LeaveLimitExceededError,
    LocationOutOfRangeError,
    LocationRequiredError,
    NotFoundError,
    ValidationError,
)
from ..geo.verifier import Geofence, verify_location
from ..policy.service import PolicyService
from ..teachers.repository import TeacherDirectory
from .factory import MarkStrategyFactory
from .model import (
    AttendanceHistory,
    AttendanceListing,
    AttendanceRecord,
    AttendanceStats,
    DailySummary,
    GeoLocation,
    TodayStatus,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_SELF_MARK_ROLES = {Role.TEACHER, Role.ADMIN}
ADMIN_CHECK_IN_TIME = "09:00:00"
ADMIN_REMARK = "Marked by Admin"


def parse_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status. Allowed: {allowed}") from None


def summarize(records: Sequence[AttendanceRecord]) -> AttendanceStats:
    counts = {s: 0 for s in AttendanceStatus}
    for r in records:
        counts[r.status] += 1
    total = len(records)
    present = counts[AttendanceStatus.PRESENT]
    return AttendanceStats(
        present=present,
        absent=counts[AttendanceStatus.ABSENT],
        half_day=counts[AttendanceStatus.HALF_DAY],
        leaves=counts[AttendanceStatus.LEAVE],
        total=total,
        percentage=round(present / total * 100, 2) if total else 0.0,
    )


class AttendanceService:
    """Teacher self-marking plus the admin read/edit paths over the ledger.

    All "today" decisions use wall-clock time in the operational timezone.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        teachers: TeacherDirectory,
        policy: PolicyService,
        geofence: Geofence,
        *,
        strategy_factory: MarkStrategyFactory | None = None,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self._attendance = attendance
        self._teachers = teachers
        self._policy = policy
        self._geofence = geofence
        self._factory = strategy_factory or MarkStrategyFactory()
        self._timezone = timezone

    def _now(self, now: datetime | None) -> datetime:
        return now or now_local(self._timezone)

    def self_mark(
        self,
        teacher_id: int,
        status,
        location: Optional[GeoLocation] = None,
        remarks: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = self._now(now)
        today = now.date()
        status = parse_status(status)

        teacher = self._teachers.get(teacher_id)
        if not teacher or not teacher.is_active or teacher.role not in _SELF_MARK_ROLES:
            raise ForbiddenError("Only active teachers can mark attendance")

        existing = self._attendance.find_for_teacher_and_day(teacher_id, today)
        if existing:
            raise AlreadyMarkedError("Attendance already marked for today", existing)

        policy = self._policy.get()
        strategy = self._factory.for_status(status)
        decision = strategy.decide(now=now, policy=policy)

        verified_location = None
        if strategy.requires_location:
            verified_location = self._verify(location)

        if decision.status == AttendanceStatus.LEAVE:
            taken = self._attendance.count_for_teacher_in_year(teacher_id, today.year, AttendanceStatus.LEAVE)
            if taken >= policy.yearly_leave_limit:
                raise LeaveLimitExceededError(f"Leave limit exceeded ({taken}/{policy.yearly_leave_limit}).")

        record = AttendanceRecord(
            teacher_id=teacher_id,
            day=today,
            status=decision.status,
            marked_by=MarkedBy.SELF,
            check_in_time=now.strftime("%H:%M:%S"),
            location=verified_location,
            remarks=(remarks or "").strip() or (decision.note or ""),
        )

        try:
            created = self._attendance.create(record)
        except DuplicateKeyError:
            winner = self._attendance.find_for_teacher_and_day(teacher_id, today)
            logger.info("Self-mark lost race teacher_id=%s day=%s", teacher_id, today)
            raise AlreadyMarkedError("Attendance already marked for today", winner) from None

        logger.info(
            "Attendance marked teacher_id=%s day=%s status=%s",
            teacher_id,
            today,
            created.status.value,
        )
        return created

    def _verify(self, location: Optional[GeoLocation]) -> GeoLocation:
        if location is None or location.latitude is None or location.longitude is None:
            raise LocationRequiredError("Location is required")

        result = verify_location(location.latitude, location.longitude, self._geofence)
        if not self._geofence.is_configured:
            raise ValidationError(result.message)
        if not result.accepted:
            raise LocationOutOfRangeError(
                f"Out of range. Dist: {result.distance_km:.2f}km",
                distance_km=result.distance_km,
            )

        return GeoLocation(
            latitude=location.latitude,
            longitude=location.longitude,
            address=location.address or f"{result.distance_km:.2f} km",
        )

    def get_today_status(self, teacher_id: int, *, now: datetime | None = None) -> TodayStatus:
        today = self._now(now).date()
        record = self._attendance.find_for_teacher_and_day(teacher_id, today)
        return TodayStatus(marked=record is not None, record=record)

    def get_history(self, teacher_id: int, *, now: datetime | None = None) -> AttendanceHistory:
        today = self._now(now).date()
        records = tuple(self._attendance.list_for_teacher(teacher_id))
        stats = summarize(records)
        leaves_this_year = sum(
            1 for r in records if r.status == AttendanceStatus.LEAVE and r.day.year == today.year
        )
        stats = replace(
            stats,
            leaves_taken_yearly=leaves_this_year,
            yearly_leave_limit=self._policy.get().yearly_leave_limit,
        )
        return AttendanceHistory(records=records, stats=stats)

    def get_teacher_history(self, teacher_id: int) -> AttendanceHistory:
        """Admin view of one teacher; no leave-limit fields."""
        if not self._teachers.get(teacher_id):
            raise NotFoundError("Teacher not found")
        records = tuple(self._attendance.list_for_teacher(teacher_id))
        return AttendanceHistory(records=records, stats=summarize(records))

    def get_today_summary(self, *, now: datetime | None = None) -> DailySummary:
        today = self._now(now).date()
        teachers = self._teachers.list_active()
        active_ids = {t.teacher_id for t in teachers}
        # Admins may self-mark too; they are not part of the roster.
        records = tuple(r for r in self._attendance.list_for_day(today) if r.teacher_id in active_ids)
        marked_ids = {r.teacher_id for r in records}
        unmarked = tuple(t for t in teachers if t.teacher_id not in marked_ids)
        stats = summarize(records)
        return DailySummary(
            day=today,
            total=len(teachers),
            present=stats.present,
            absent=stats.absent,
            half_day=stats.half_day,
            leave=stats.leaves,
            not_marked=len(unmarked),
            records=records,
            unmarked_teachers=unmarked,
        )

    def admin_mark(
        self,
        teacher_id: int,
        day: date,
        status=AttendanceStatus.PRESENT,
        remarks: Optional[str] = None,
    ) -> AttendanceRecord:
        if not self._teachers.get(teacher_id):
            raise NotFoundError("Teacher not found")

        record = AttendanceRecord(
            teacher_id=teacher_id,
            day=day,
            status=parse_status(status),
            marked_by=MarkedBy.ADMIN,
            check_in_time=ADMIN_CHECK_IN_TIME,
            location=GeoLocation(latitude=None, longitude=None, address=ADMIN_REMARK),
            remarks=(remarks or "").strip() or ADMIN_REMARK,
        )
        saved = self._attendance.admin_upsert(record)
        logger.info("Admin marked teacher_id=%s day=%s status=%s", teacher_id, day, saved.status.value)
        return saved

    def list_attendance(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceListing:
        """Every ledger row between start and end inclusive; today by default."""
        if start is None and end is None:
            start = end = self._now(now).date()
        elif start is None or end is None:
            raise ValidationError("start and end must be given together")
        if end < start:
            raise ValidationError("end must not be before start")
        if (end - start).days >= MAX_LISTING_DAYS:
            raise ValidationError(f"Range is limited to {MAX_LISTING_DAYS} days")

        teachers: dict = {}
        entries = []
        for record in self._attendance.list_for_range(start, end):
            if record.teacher_id not in teachers:
                teachers[record.teacher_id] = self._teachers.get(record.teacher_id)
            entries.append((record, teachers[record.teacher_id]))
        return AttendanceListing(start=start, end=end, entries=tuple(entries))

    def admin_update(self, attendance_id: int, status, remarks: Optional[str] = None) -> AttendanceRecord:
        status = parse_status(status)
        remarks = (remarks or "").strip() or None
        updated = self._attendance.update_status(int(attendance_id), status, remarks)
        if updated is None:
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record updated id=%s status=%s", attendance_id, status.value)
        return updated

    def admin_delete(self, attendance_id: int) -> None:
        if not self._attendance.delete(int(attendance_id)):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record deleted id=%s", attendance_id)
