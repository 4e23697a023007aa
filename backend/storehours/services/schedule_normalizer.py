"""
Schedule Normalizer

Turns retailer-specific opening hours into a full week of work hours.

Retailers publish schedules in four shapes:
- day -> hours maps with explicit day names ("Ponedjeljak": "07-21")
- day ranges in the same maps ("Pon-Pet": "08-20")
- weekday / Saturday / Sunday schedules
- consecutive rows whose day labels are unreliable, starting on any weekday

Whatever the shape, the result is always seven WorkHourEntry objects ordered
Monday to Sunday, each dated to the current week. Days the source does not
mention are kept with empty hours.
"""
import re
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Optional

from storehours.services.dates import date_for_weekday, offset_days, week_dates
from storehours.services.day_names import (
    WEEK_DAYS,
    canonical_day,
    day_index,
    translate_to_en,
)

logger = logging.getLogger(__name__)

SUNDAY = WEEK_DAYS[6]

# Hyphen, en dash or em dash, retailer dependent
_RANGE_SEPARATOR = re.compile(r"\s*[-–—]\s*")

# 7 | 07 | 07:00 | 07.00 | 07:00:00 | 7h | 07:00 h
_TIME_PATTERN = re.compile(r"^(\d{1,2})(?:[:.](\d{2}))?(?::(\d{2}))?\s*h?$", re.IGNORECASE)

Hours = tuple[Optional[time], Optional[time]]
CLOSED: Hours = (None, None)


@dataclass
class WorkHourEntry:
    """One day of a location's week."""
    day: str  # canonical Croatian name
    day_en: str
    date: date
    from_hour: Optional[time] = None
    to_hour: Optional[time] = None

    @property
    def is_open(self) -> bool:
        return self.from_hour is not None and self.to_hour is not None


@dataclass
class LocationWithWorkHours:
    """Normalized location as produced by a retailer scraper."""
    name: str
    address: str
    phone_number: Optional[str] = None
    description: Optional[str] = None
    work_hours: list[WorkHourEntry] = field(default_factory=list)

    @property
    def open_this_sunday(self) -> bool:
        return open_this_sunday(self.work_hours)


def open_this_sunday(entries: Iterable[WorkHourEntry]) -> bool:
    """True only if the Sunday entry has both an opening and a closing hour."""
    return any(entry.day == SUNDAY and entry.is_open for entry in entries)


def _local_time(value: datetime) -> time:
    """Wall-clock time of `value`; aware datetimes are converted to local time first."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.time()


def parse_time(value: Any) -> Optional[time]:
    """Parse a single time of day, returning None for anything unrecognised."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _local_time(value)
    if isinstance(value, time):
        return value

    text = str(value).strip()
    if not text:
        return None

    # ISO datetimes from JSON APIs
    if "T" in text:
        try:
            return _local_time(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None

    match = _TIME_PATTERN.match(text)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    second = int(match.group(3) or 0)
    if hour == 24 and minute == 0:
        return time(23, 59)
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour, minute, second)


def parse_hours(text: Optional[str]) -> Hours:
    """
    Split an hours string like "07:00 - 21:00" into (from_hour, to_hour).

    Strings without a separator ("Zatvoreno", "") and ranges with an
    unparseable side both give (None, None).
    """
    if not text:
        return CLOSED

    parts = _RANGE_SEPARATOR.split(str(text).strip(), maxsplit=1)
    if len(parts) != 2:
        return CLOSED

    from_hour, to_hour = parse_time(parts[0]), parse_time(parts[1])
    if from_hour is None or to_hour is None:
        return CLOSED
    return from_hour, to_hour


def expand_day_range(expression: str) -> list[str]:
    """
    Expand "Pon-Pet", "uto–čet" or a single day into canonical day names.

    A reversed range ("sub-pon") wraps around Sunday. Unknown days give [].
    """
    if not expression:
        return []

    parts = _RANGE_SEPARATOR.split(expression.strip(), maxsplit=1)
    if len(parts) == 1:
        day = canonical_day(parts[0])
        return [day] if day else []

    start, end = day_index(parts[0]), day_index(parts[1])
    if start is None or end is None:
        return []
    if end < start:
        end += 7
    return [WEEK_DAYS[i % 7] for i in range(start, end + 1)]


def _hours_value(value: Any) -> Hours:
    """Hours from either a range string or a (from, to) pair."""
    if value is None:
        return CLOSED
    if isinstance(value, str):
        return parse_hours(value)
    if isinstance(value, Mapping):
        value = (value.get("start") or value.get("from"), value.get("end") or value.get("to"))
    if isinstance(value, Sequence) and len(value) == 2:
        from_hour, to_hour = parse_time(value[0]), parse_time(value[1])
        if from_hour is None or to_hour is None:
            return CLOSED
        return from_hour, to_hour
    return CLOSED


def build_week(
    hours_by_day: Mapping[int, Hours],
    now: Optional[datetime] = None,
    dates: Optional[Mapping[int, date]] = None,
) -> list[WorkHourEntry]:
    """Seven entries Monday..Sunday; days missing from `hours_by_day` are closed."""
    current = week_dates(now)
    dates = dates or {}

    entries = []
    for index, day in enumerate(WEEK_DAYS):
        from_hour, to_hour = hours_by_day.get(index, CLOSED)
        entries.append(WorkHourEntry(
            day=day,
            day_en=translate_to_en(day),
            date=dates.get(index, current[index]),
            from_hour=from_hour,
            to_hour=to_hour,
        ))
    return entries


def normalize_day_map(
    schedule: Mapping[str, Any] | Iterable[tuple[str, Any]],
    now: Optional[datetime] = None,
) -> list[WorkHourEntry]:
    """
    Normalize a day -> hours schedule.

    Keys may be single days or day ranges; values may be range strings or
    (from, to) pairs. Later keys override earlier ones for the same day.
    """
    items = schedule.items() if isinstance(schedule, Mapping) else schedule

    hours_by_day: dict[int, Hours] = {}
    for key, value in items:
        days = expand_day_range(key)
        if not days:
            logger.debug(f"Ignoring unknown day label: {key!r}")
            continue
        hours = _hours_value(value)
        for day in days:
            hours_by_day[WEEK_DAYS.index(day)] = hours

    return build_week(hours_by_day, now)


def normalize_three_schedules(
    workweek: Any,
    saturday: Any,
    sunday: Any,
    now: Optional[datetime] = None,
) -> list[WorkHourEntry]:
    """Apply a weekday schedule to Monday..Friday, plus Saturday and Sunday schedules."""
    weekday_hours = _hours_value(workweek)
    hours_by_day = {index: weekday_hours for index in range(5)}
    hours_by_day[5] = _hours_value(saturday)
    hours_by_day[6] = _hours_value(sunday)
    return build_week(hours_by_day, now)


def normalize_sequential(
    rows: Sequence[tuple[str, Any]],
    now: Optional[datetime] = None,
) -> list[WorkHourEntry]:
    """
    Normalize consecutive (day label, hours) rows.

    Only the first recognisable label is used: it anchors its row to a date of
    the current week and every other row is the next calendar day, whatever
    its label says. Rows beyond a week are ignored.
    """
    rows = list(rows)[:7]

    anchor = None
    for position, (label, _) in enumerate(rows):
        index = day_index(label)
        if index is not None:
            start_index = index - position
            anchor = offset_days(date_for_weekday(label, now), -position)
            break

    if anchor is None:
        if rows:
            logger.debug(f"No recognisable day in {len(rows)} schedule rows")
        return build_week({}, now)

    hours_by_day: dict[int, Hours] = {}
    dates: dict[int, date] = {}
    for position, (_, value) in enumerate(rows):
        index = (start_index + position) % 7
        hours_by_day[index] = _hours_value(value)
        dates[index] = offset_days(anchor, position)

    return build_week(hours_by_day, now, dates)
