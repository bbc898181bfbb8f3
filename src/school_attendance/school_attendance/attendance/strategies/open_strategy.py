from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...policy.model import PolicySettings
from .base import MarkStrategy, StatusDecision


class OpenStrategy(MarkStrategy):
    """Statuses with no time window (Leave, Absent)."""

    def __init__(self, status: AttendanceStatus, *, requires_location: bool):
        self._status = status
        self.requires_location = requires_location

    def decide(self, *, now: datetime, policy: PolicySettings) -> StatusDecision:
        return StatusDecision(status=self._status)
