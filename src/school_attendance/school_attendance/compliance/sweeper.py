from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, parse_hhmm
from ..core.constants import (
    DEFAULT_SWEEP_BASE_TIMEOUT_SECONDS,
    DEFAULT_SWEEP_PER_TEACHER_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
    DEFAULT_WEEKLY_OFF_DAY,
)
from ..core.enums import AttendanceStatus, MarkedBy, SweepOutcome
from ..core.exceptions import DuplicateKeyError
from ..holidays.service import HolidayService
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.model import Notification, auto_mark_message
from ..policy.service import PolicyService
from ..teachers.repository import TeacherDirectory
from .model import SweepFailure, SweepReport

logger = logging.getLogger(__name__)


class ComplianceSweeper:
    """Auto-marks teachers who have not recorded attendance by the deadline.

    Each run passes through the policy, deadline, weekend and holiday gates
    (all bypassed by ``force``), then inserts a system Leave record for every
    active teacher without one. The ledger's unique (teacher, day) key makes
    reruns and races with self-marking harmless: a rejected insert counts as
    already marked.

    Per-teacher failures are collected into the report. The fan-out stops once
    the soft time budget is spent; the remaining teachers are reported as
    errors.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        teachers: TeacherDirectory,
        policy: PolicyService,
        holidays: HolidayService,
        dispatcher: NotificationDispatcher,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        weekly_off_day: int = DEFAULT_WEEKLY_OFF_DAY,
        base_timeout_seconds: float = DEFAULT_SWEEP_BASE_TIMEOUT_SECONDS,
        per_teacher_timeout_seconds: float = DEFAULT_SWEEP_PER_TEACHER_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._attendance = attendance
        self._teachers = teachers
        self._policy = policy
        self._holidays = holidays
        self._dispatcher = dispatcher
        self._timezone = timezone
        self._weekly_off_day = int(weekly_off_day)
        self._base_timeout = float(base_timeout_seconds)
        self._per_teacher_timeout = float(per_teacher_timeout_seconds)
        self._clock = clock

    @property
    def timezone(self) -> str:
        return self._timezone

    def run(self, force: bool = False, *, now: datetime | None = None) -> SweepReport:
        """Run one sweep. Storage failures come back as a FAILED report."""
        now = now or now_local(self._timezone)
        try:
            return self._run(force, now)
        except Exception as e:
            logger.exception("Sweep failed for %s", now.date())
            return SweepReport(outcome=SweepOutcome.FAILED, message=str(e) or "Sweep failed", day=now.date())

    def _run(self, force: bool, now: datetime) -> SweepReport:
        settings = self._policy.get()
        if not settings.enabled and not force:
            logger.info("Sweep skipped: automation disabled")
            return SweepReport(outcome=SweepOutcome.DISABLED, message="Automation disabled")

        today = now.date()
        if force:
            logger.warning("Sweep forced for %s, ignoring time and day gates", today)

        if not force and now.time() < parse_hhmm(settings.deadline_time):
            logger.info("Sweep skipped: %s is before deadline %s", now.strftime("%H:%M"), settings.deadline_time)
            return SweepReport(outcome=SweepOutcome.BEFORE_DEADLINE, message="Before deadline time", day=today)

        if not force and settings.exclude_weekends and today.weekday() == self._weekly_off_day:
            logger.info("Sweep skipped: %s is the weekly off day", today)
            return SweepReport(outcome=SweepOutcome.WEEKEND, message="Weekly off day", day=today)

        check = self._holidays.is_holiday(today)
        if not force and check.is_holiday:
            logger.info("Sweep skipped: public holiday %r", check.holiday.name)
            return SweepReport(
                outcome=SweepOutcome.HOLIDAY,
                message=f"Public Holiday - {check.holiday.name}",
                day=today,
            )

        teachers = list(self._teachers.list_active())
        if not teachers:
            logger.info("Sweep skipped: no active teachers")
            return SweepReport(outcome=SweepOutcome.NO_TEACHERS, message="No teachers to process", day=today)

        reason = f"Not marked by deadline ({settings.deadline_time})"
        budget = self._base_timeout + self._per_teacher_timeout * len(teachers)
        started = self._clock()

        already_marked = 0
        skipped = 0
        marked = []
        errors = []
        queued = []

        for index, teacher in enumerate(teachers):
            if self._clock() - started > budget:
                remaining = teachers[index:]
                logger.error("Sweep time budget of %.1fs exceeded, %d teachers not processed", budget, len(remaining))
                errors.extend(
                    SweepFailure(teacher_id=t.teacher_id, name=t.name, message="Sweep time budget exceeded")
                    for t in remaining
                )
                break

            try:
                if self._attendance.find_for_teacher_and_day(teacher.teacher_id, today):
                    already_marked += 1
                    continue

                if not settings.auto_mark_as_leave:
                    skipped += 1
                    continue

                record = AttendanceRecord(
                    teacher_id=teacher.teacher_id,
                    day=today,
                    status=AttendanceStatus.LEAVE,
                    marked_by=MarkedBy.SYSTEM,
                    auto_marked=True,
                    auto_marked_reason=reason,
                    auto_marked_at=now,
                )
                try:
                    self._attendance.create(record)
                except DuplicateKeyError:
                    already_marked += 1
                    continue
            except Exception as e:
                logger.exception("Sweep failed for teacher_id=%s", teacher.teacher_id)
                errors.append(SweepFailure(teacher_id=teacher.teacher_id, name=teacher.name, message=str(e)))
                continue

            logger.info("Auto-marked teacher_id=%s as Leave for %s", teacher.teacher_id, today)
            marked.append(teacher)
            if settings.notify_teachers and teacher.email:
                queued.append(
                    Notification(
                        email=teacher.email,
                        name=teacher.name,
                        status=AttendanceStatus.LEAVE,
                        message=auto_mark_message(settings.deadline_time),
                    )
                )

        notified = self._dispatcher.dispatch(queued) if queued else 0

        logger.info(
            "Sweep finished day=%s total=%d already_marked=%d marked=%d skipped=%d notified=%d errors=%d",
            today,
            len(teachers),
            already_marked,
            len(marked),
            skipped,
            notified,
            len(errors),
        )
        return SweepReport(
            outcome=SweepOutcome.COMPLETED,
            message=f"Auto-marked {len(marked)} teacher(s) as Leave",
            day=today,
            total_teachers=len(teachers),
            already_marked_count=already_marked,
            marked_count=len(marked),
            skipped_count=skipped,
            notified_count=notified,
            marked_teachers=tuple(marked),
            errors=tuple(errors),
        )
