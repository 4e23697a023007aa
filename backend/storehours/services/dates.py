"""Anchor weekday names to calendar dates of the current (Monday-based) week."""
from datetime import date, datetime, timedelta
from typing import Optional

from storehours.services.day_names import day_index


def _today(now: Optional[datetime]) -> date:
    now = now or datetime.now()
    return now.date() if isinstance(now, datetime) else now


def monday_of_current_week(now: Optional[datetime] = None) -> date:
    """Monday of the week containing `now` (wall-clock time by default)."""
    today = _today(now)
    return today - timedelta(days=today.weekday())


def date_for_weekday(day_name: str, now: Optional[datetime] = None) -> Optional[date]:
    """
    Calendar date of `day_name` in the current week.

    Accepts any spelling known to day_names ("Utorak", "uto:", "UT").
    Returns None for unknown names.
    """
    index = day_index(day_name)
    if index is None:
        return None
    return offset_days(monday_of_current_week(now), index)


def offset_days(start: date, days: int) -> date:
    return start + timedelta(days=days)


def week_dates(now: Optional[datetime] = None) -> list[date]:
    """The seven dates Monday..Sunday of the current week."""
    monday = monday_of_current_week(now)
    return [offset_days(monday, i) for i in range(7)]
