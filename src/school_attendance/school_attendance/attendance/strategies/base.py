from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus
from ...core.exceptions import WindowClosedError
from ...policy.model import PolicySettings


@dataclass(frozen=True)
class StatusDecision:
    """What gets written; `note` ends up in remarks when the teacher gave none."""

    status: AttendanceStatus
    note: Optional[str] = None


class MarkStrategy(ABC):
    """Strategy Pattern: the rules for one self-marked status."""

    requires_location: bool = True
    # Self-marks at or after this local time are refused; None means no window.
    cutoff: Optional[time] = None
    cutoff_label: str = ""
    label: str = ""

    def check_window(self, now: datetime) -> None:
        if self.cutoff is not None and now.time() >= self.cutoff:
            raise WindowClosedError(f"{self.label} attendance must be marked before {self.cutoff_label}")

    @abstractmethod
    def decide(self, *, now: datetime, policy: PolicySettings) -> StatusDecision:
        """Return the status to record, or raise when the mark is not allowed."""

        raise NotImplementedError
