from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        raise NotImplementedError

    def find_by_date(self, day: date) -> Optional[Holiday]:
        raise NotImplementedError

    def find_recurring(self, *, month: int, day: int) -> Optional[Holiday]:
        """First recurring holiday (lowest id) on this month/day."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Holiday]:
        raise NotImplementedError

    def list_for_year(self, year: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def list_upcoming(self, *, from_date: date, limit: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def create(
        self,
        *,
        holiday_date: date,
        name: str,
        description: str,
        is_recurring: bool,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, holiday: Holiday) -> bool:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError
