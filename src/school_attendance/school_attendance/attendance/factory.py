from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .strategies.base import MarkStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.open_strategy import OpenStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class MarkStrategyFactory:
    """Factory Pattern: choose the rules for the status a teacher submits."""

    def for_status(self, status: AttendanceStatus) -> MarkStrategy:
        if status == AttendanceStatus.PRESENT:
            return PresentStrategy()
        if status == AttendanceStatus.HALF_DAY:
            return HalfDayStrategy()
        if status == AttendanceStatus.LEAVE:
            return OpenStrategy(AttendanceStatus.LEAVE, requires_location=False)
        return OpenStrategy(AttendanceStatus.ABSENT, requires_location=True)
