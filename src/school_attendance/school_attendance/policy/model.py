from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_YEARLY_LEAVE_LIMIT


@dataclass(frozen=True)
class PolicySettings:
    """Administrator-tunable automation behavior (one row per deployment)."""

    enabled: bool = True
    deadline_time: str = "18:00"
    half_day_threshold: str = "12:00"
    enable_half_day: bool = True
    auto_mark_as_leave: bool = True
    exclude_weekends: bool = True
    notify_teachers: bool = True
    yearly_leave_limit: int = DEFAULT_YEARLY_LEAVE_LIMIT

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "deadlineTime": self.deadline_time,
            "halfDayThreshold": self.half_day_threshold,
            "enableHalfDay": self.enable_half_day,
            "autoMarkAsLeave": self.auto_mark_as_leave,
            "excludeWeekends": self.exclude_weekends,
            "notifyTeachers": self.notify_teachers,
            "yearlyLeaveLimit": self.yearly_leave_limit,
        }


@dataclass(frozen=True)
class PolicyUpdate:
    settings: PolicySettings
    deadline_changed: bool
