from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytz
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..common.datetime_utils import add_minutes, now_local
from ..core.constants import SWEEP_DELAY_MINUTES
from ..core.enums import SweepOutcome
from .model import SweepReport
from .sweeper import ComplianceSweeper

logger = logging.getLogger(__name__)

JOB_ID = "teacher_attendance_sweep"


@dataclass(frozen=True)
class SchedulerStatus:
    is_running: bool
    deadline_time: Optional[str]
    last_run: Optional[datetime]
    last_outcome: Optional[str]
    next_run: Optional[datetime]
    timezone: str

    def to_dict(self) -> dict:
        return {
            "isRunning": self.is_running,
            "deadlineTime": self.deadline_time,
            "lastRun": self.last_run.isoformat() if self.last_run else None,
            "lastOutcome": self.last_outcome,
            "nextScheduledRun": self.next_run.isoformat() if self.next_run else None,
            "timezone": self.timezone,
        }


class SweepScheduler:
    """Runs the sweep once a day, a few minutes after the policy deadline."""

    def __init__(self, sweeper: ComplianceSweeper, *, scheduler: BackgroundScheduler | None = None):
        self._sweeper = sweeper
        self._timezone = sweeper.timezone
        self._scheduler = scheduler or BackgroundScheduler(timezone=pytz.timezone(self._timezone))
        self._deadline: Optional[str] = None
        self._last_run: Optional[datetime] = None
        self._last_outcome: Optional[str] = None
        self._lock = threading.Lock()

    def _trigger_for(self, deadline: str) -> CronTrigger:
        hour, minute = add_minutes(deadline, SWEEP_DELAY_MINUTES)
        return CronTrigger(hour=hour, minute=minute, timezone=pytz.timezone(self._timezone))

    def start(self, deadline: str) -> None:
        self.reschedule(deadline)
        if not self._scheduler.running:
            self._scheduler.start()
        logger.info("Sweep scheduler started (deadline %s, timezone %s)", deadline, self._timezone)

    def reschedule(self, deadline: str) -> None:
        self._scheduler.add_job(
            func=self.trigger,
            trigger=self._trigger_for(deadline),
            id=JOB_ID,
            name="Auto-mark teachers missing attendance",
            replace_existing=True,
        )
        self._deadline = deadline
        logger.info("Sweep scheduled daily at deadline %s + %d minutes", deadline, SWEEP_DELAY_MINUTES)

    def trigger(self, force: bool = False) -> SweepReport:
        """Run the sweep now and remember when and how it finished."""
        try:
            report = self._sweeper.run(force=force)
        except Exception as e:
            logger.exception("Sweep raised")
            report = SweepReport(outcome=SweepOutcome.FAILED, message=str(e) or "Sweep failed")
        with self._lock:
            self._last_run = now_local(self._timezone)
            self._last_outcome = report.outcome.value
        return report

    def status(self) -> SchedulerStatus:
        job = self._scheduler.get_job(JOB_ID)
        with self._lock:
            last_run, last_outcome = self._last_run, self._last_outcome
        return SchedulerStatus(
            is_running=bool(self._scheduler.running),
            deadline_time=self._deadline,
            last_run=last_run,
            last_outcome=last_outcome,
            next_run=getattr(job, "next_run_time", None) if job else None,
            timezone=self._timezone,
        )

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Sweep scheduler stopped")
