from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LEADERBOARD_LIMIT, DEFAULT_TIMEZONE
from ..core.enums import Role
from ..results.repository import ResultRepository
from ..teachers.model import Teacher
from ..teachers.repository import TeacherDirectory
from .model import LeaderboardEntry, PerformanceSnapshot
from .scorer import compute_performance

logger = logging.getLogger(__name__)


class PerformanceService:
    def __init__(
        self,
        teachers: TeacherDirectory,
        results: ResultRepository,
        attendance: AttendanceRepository,
        *,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self._teachers = teachers
        self._results = results
        self._attendance = attendance
        self._timezone = timezone

    def _today(self, today: date | None) -> date:
        return today or now_local(self._timezone).date()

    def _score(self, teacher: Teacher, today: date) -> PerformanceSnapshot:
        results = self._results.find_by_uploader(teacher.teacher_id)
        attendance = self._attendance.list_for_teacher(teacher.teacher_id)
        return compute_performance(teacher, results, attendance, today)

    def get_performance(self, teacher_id: int, *, today: date | None = None) -> Optional[PerformanceSnapshot]:
        """None when the id is unknown or not a teacher."""
        teacher = self._teachers.get(teacher_id)
        if not teacher or teacher.role != Role.TEACHER:
            return None
        return self._score(teacher, self._today(today))

    def get_all(self, *, today: date | None = None) -> list[PerformanceSnapshot]:
        today = self._today(today)
        snapshots = [self._score(t, today) for t in self._teachers.list_active()]
        snapshots.sort(key=lambda s: s.overall_score, reverse=True)
        logger.debug("Scored %d teachers for %s", len(snapshots), today)
        return snapshots

    def get_leaderboard(
        self, limit: int = DEFAULT_LEADERBOARD_LIMIT, *, today: date | None = None
    ) -> list[LeaderboardEntry]:
        ranked = self.get_all(today=today)[: max(int(limit), 0)]
        return [LeaderboardEntry(rank=i + 1, snapshot=s) for i, s in enumerate(ranked)]
