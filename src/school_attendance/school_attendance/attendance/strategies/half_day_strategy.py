from __future__ import annotations

from datetime import datetime

from ...core.constants import HALF_DAY_CUTOFF
from ...core.enums import AttendanceStatus
from ...core.exceptions import ValidationError
from ...policy.model import PolicySettings
from .base import MarkStrategy, StatusDecision


class HalfDayStrategy(MarkStrategy):
    cutoff = HALF_DAY_CUTOFF
    cutoff_label = "2:30 PM"
    label = "Half-Day"

    def decide(self, *, now: datetime, policy: PolicySettings) -> StatusDecision:
        self.check_window(now)
        if not policy.enable_half_day:
            raise ValidationError("Half-Day attendance is disabled")
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
