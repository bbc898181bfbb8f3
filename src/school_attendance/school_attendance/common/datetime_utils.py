from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytz


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse an already validated HH:MM string."""
    return datetime.strptime(value, "%H:%M").time()


def now_local(timezone: str) -> datetime:
    """Current wall-clock time in the operational timezone.

    Returned naive so it compares directly with DATE/TIME values from MySQL.
    Wrapped so tests can patch it.
    """
    return datetime.now(pytz.timezone(timezone)).replace(tzinfo=None)


def add_minutes(hhmm: str, minutes: int) -> tuple[int, int]:
    """Shift an HH:MM string by `minutes`, wrapping past midnight."""
    shifted = datetime.combine(date(2000, 1, 1), parse_hhmm(hhmm)) + timedelta(minutes=minutes)
    return shifted.hour, shifted.minute


def academic_year_label(day: date, *, start_month: int = 4) -> str:
    """Academic year such as '2024-25' for a date (years start in April)."""
    start = day.year if day.month >= start_month else day.year - 1
    return f"{start}-{str(start + 1)[-2:]}"
