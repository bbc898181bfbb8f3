from datetime import date

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from src.school_attendance.school_attendance.compliance.model import SweepReport
from src.school_attendance.school_attendance.compliance.scheduler import JOB_ID, SweepScheduler
from src.school_attendance.school_attendance.core.enums import SweepOutcome


class StubSweeper:
    timezone = "Asia/Kolkata"

    def __init__(self, outcome=SweepOutcome.COMPLETED):
        self.calls = []
        self._outcome = outcome

    def run(self, force=False, *, now=None):
        self.calls.append(force)
        return SweepReport(outcome=self._outcome, message="ok", day=date(2025, 1, 15))


@pytest.fixture
def scheduler():
    s = BackgroundScheduler()
    yield s
    if s.running:
        s.shutdown(wait=False)


def test_job_fires_five_minutes_after_deadline(scheduler):
    sweep_scheduler = SweepScheduler(StubSweeper(), scheduler=scheduler)

    sweep_scheduler.reschedule("18:00")

    trigger = str(scheduler.get_job(JOB_ID).trigger)
    assert "hour='18'" in trigger
    assert "minute='5'" in trigger


def test_reschedule_replaces_the_single_job(scheduler):
    sweep_scheduler = SweepScheduler(StubSweeper(), scheduler=scheduler)
    sweep_scheduler.start("18:00")

    sweep_scheduler.reschedule("23:58")

    assert len(scheduler.get_jobs()) == 1
    trigger = str(scheduler.get_job(JOB_ID).trigger)
    assert "hour='0'" in trigger
    assert "minute='3'" in trigger
    status = sweep_scheduler.status()
    assert status.deadline_time == "23:58"
    assert (status.next_run.hour, status.next_run.minute) == (0, 3)


def test_trigger_records_last_outcome(scheduler):
    sweeper = StubSweeper(outcome=SweepOutcome.HOLIDAY)
    sweep_scheduler = SweepScheduler(sweeper, scheduler=scheduler)
    assert sweep_scheduler.status().last_run is None

    report = sweep_scheduler.trigger(force=True)

    assert sweeper.calls == [True]
    status = sweep_scheduler.status()
    assert report.outcome == SweepOutcome.HOLIDAY
    assert status.last_outcome == "HOLIDAY"
    assert status.last_run is not None
    assert status.to_dict()["timezone"] == "Asia/Kolkata"


def test_status_before_start(scheduler):
    status = SweepScheduler(StubSweeper(), scheduler=scheduler).status()

    assert status.is_running is False
    assert status.next_run is None
    assert status.to_dict()["nextScheduledRun"] is None


def test_start_and_shutdown(scheduler):
    sweep_scheduler = SweepScheduler(StubSweeper(), scheduler=scheduler)

    sweep_scheduler.start("18:00")
    status = sweep_scheduler.status()
    sweep_scheduler.shutdown()

    assert status.is_running is True
    assert status.next_run is not None
    assert (status.next_run.hour, status.next_run.minute) == (18, 5)
    assert scheduler.running is False


class ExplodingSweeper(StubSweeper):
    def run(self, force=False, *, now=None):
        self.calls.append(force)
        raise RuntimeError("db down")


def test_trigger_records_a_sweep_that_raised(scheduler):
    sweep_scheduler = SweepScheduler(ExplodingSweeper(), scheduler=scheduler)

    report = sweep_scheduler.trigger(force=True)

    assert report.outcome == SweepOutcome.FAILED
    assert report.message == "db down"
    status = sweep_scheduler.status()
    assert status.last_outcome == "FAILED"
    assert status.last_run is not None
