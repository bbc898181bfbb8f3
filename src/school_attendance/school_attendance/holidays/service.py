from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_UPCOMING_HOLIDAYS
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday, HolidayCheck
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    """Answers "is this a non-working day" and manages the holiday list.

    Weekends are not handled here; the sweeper applies them from policy.
    """

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def is_holiday(self, day: date) -> HolidayCheck:
        exact = self._holidays.find_by_date(day)
        if exact:
            return HolidayCheck(is_holiday=True, holiday=exact)

        # Known limitation: several recurring holidays on one month/day are
        # not disambiguated; the repository returns the lowest id.
        recurring = self._holidays.find_recurring(month=day.month, day=day.day)
        if recurring:
            return HolidayCheck(is_holiday=True, holiday=recurring)

        return HolidayCheck(is_holiday=False)

    def get(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get_by_id(int(holiday_id))
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def list_all(self) -> Sequence[Holiday]:
        return self._holidays.list_all()

    def list_for_year(self, year: int) -> Sequence[Holiday]:
        return self._holidays.list_for_year(int(year))

    def list_upcoming(self, *, today: date, limit: int = DEFAULT_UPCOMING_HOLIDAYS) -> Sequence[Holiday]:
        return self._holidays.list_upcoming(from_date=today, limit=int(limit))

    def create(
        self,
        *,
        holiday_date: date,
        name: str,
        description: str = "",
        is_recurring: bool = False,
        created_by: Optional[int] = None,
    ) -> Holiday:
        name = require_non_empty(name, "Holiday name")
        if self._holidays.find_by_date(holiday_date):
            raise ValidationError("A holiday already exists for this date")

        holiday_id = self._holidays.create(
            holiday_date=holiday_date,
            name=name,
            description=(description or "").strip(),
            is_recurring=bool(is_recurring),
            created_by=created_by,
        )
        logger.info("Holiday created id=%s date=%s name=%r", holiday_id, holiday_date, name)
        return Holiday(
            holiday_id=holiday_id,
            holiday_date=holiday_date,
            name=name,
            description=(description or "").strip(),
            is_recurring=bool(is_recurring),
        )

    def update(
        self,
        holiday_id: int,
        *,
        holiday_date: Optional[date] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_recurring: Optional[bool] = None,
    ) -> Holiday:
        holiday = self.get(holiday_id)

        changes: dict = {}
        if holiday_date is not None and holiday_date != holiday.holiday_date:
            clash = self._holidays.find_by_date(holiday_date)
            if clash and clash.holiday_id != holiday.holiday_id:
                raise ValidationError("A holiday already exists for this date")
            changes["holiday_date"] = holiday_date
        if name is not None:
            changes["name"] = require_non_empty(name, "Holiday name")
        if description is not None:
            changes["description"] = description.strip()
        if is_recurring is not None:
            changes["is_recurring"] = bool(is_recurring)

        updated = replace(holiday, **changes)
        self._holidays.update(updated)
        return updated

    def delete(self, holiday_id: int) -> None:
        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError("Holiday not found")
        logger.info("Holiday deleted id=%s", holiday_id)
