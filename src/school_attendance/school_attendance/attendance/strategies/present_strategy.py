from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import parse_hhmm
from ...core.constants import PRESENT_CUTOFF
from ...core.enums import AttendanceStatus
from ...policy.model import PolicySettings
from .base import MarkStrategy, StatusDecision


class PresentStrategy(MarkStrategy):
    """Present before the morning cutoff; late arrivals past the threshold become half days."""

    cutoff = PRESENT_CUTOFF
    cutoff_label = "11:00 AM"
    label = "Present"

    def decide(self, *, now: datetime, policy: PolicySettings) -> StatusDecision:
        self.check_window(now)

        if policy.enable_half_day and now.time() >= parse_hhmm(policy.half_day_threshold):
            return StatusDecision(
                status=AttendanceStatus.HALF_DAY,
                note=f"Marked after half-day threshold ({policy.half_day_threshold})",
            )
        return StatusDecision(status=AttendanceStatus.PRESENT)
