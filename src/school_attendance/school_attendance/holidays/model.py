from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    """A public holiday. Recurring ones match on month/day in every year."""

    holiday_id: int
    holiday_date: date
    name: str
    description: str = ""
    is_recurring: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.holiday_id,
            "date": self.holiday_date.isoformat(),
            "name": self.name,
            "description": self.description,
            "isRecurring": self.is_recurring,
        }


@dataclass(frozen=True)
class HolidayCheck:
    is_holiday: bool
    holiday: Optional[Holiday] = None
