from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import Any

from django.conf import settings
from django.utils import timezone

WEEKDAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)


def parse_ymd(date_str: str | None, default: date | None = None) -> date:
    """
    Parse YYYY-MM-DD into a date. Returns default (or today) if missing/invalid.

    A full ISO datetime is accepted too; only its local date is kept.
    """
    if default is None:
        default = timezone.localdate()

    if not date_str:
        return default

    try:
        y, m, d = map(int, date_str[:10].split("-"))
        return date(y, m, d)
    except ValueError:
        return default


def weekday_number(value: Any) -> int | None:
    """
    Turn a weekday identifier into 0..6 (Monday=0, like date.weekday()).

    Accepts ints (calendar.MONDAY etc.), full names and three letter
    abbreviations in any case. Returns None when it can't be recognized.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= 6 else None
    if not isinstance(value, str):
        return None

    key = value.strip().lower()
    for i, name in enumerate(WEEKDAY_NAMES):
        if key == name or (len(key) == 3 and name.startswith(key)):
            return i
    return None


def weekday_name(wday: int) -> str:
    return WEEKDAY_NAMES[wday % 7]


def week_length(week_start: int, week_end: int) -> int:
    """Number of days from week_start to week_end inclusive; wraps past Sunday."""
    span = (week_end - week_start) % 7
    # a week that ends on the weekday it starts on covers all seven days
    return span + 1 if span else 7


def configured_weekdays(week_start: int, week_end: int) -> list[int]:
    return [(week_start + i) % 7 for i in range(week_length(week_start, week_end))]


def beginning_of_week(day: date, week_start: int) -> date:
    """Most recent week_start weekday on or before day."""
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def days_in_month(day: date) -> int:
    return monthrange(day.year, day.month)[1]


def add_month(year: int, month: int, delta: int) -> tuple[int, int]:
    # delta may be any integer, not just +/- 1
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


# ---- Navigation (previous / next reference day for each scope) ----
def previous_day(day: date) -> date:
    return day - timedelta(days=1)


def next_day(day: date) -> date:
    return day + timedelta(days=1)


def previous_week(day: date, week_start: int) -> date:
    return beginning_of_week(day, week_start) - timedelta(days=7)


def next_week(day: date, week_start: int) -> date:
    return beginning_of_week(day, week_start) + timedelta(days=7)


def previous_month(day: date) -> date:
    y, m = add_month(day.year, day.month, -1)
    return date(y, m, 1)


def next_month(day: date) -> date:
    y, m = add_month(day.year, day.month, +1)
    return date(y, m, 1)


# ---- Aware ranges used to select events for a view ----
def start_of_day(day: date) -> datetime:
    dt = datetime.combine(day, time.min)
    if timezone.is_naive(dt) and _use_tz():
        dt = timezone.make_aware(dt)
    return dt


def aware_range(start_d: date, end_d: date) -> tuple[datetime, datetime]:
    """
    Inclusive date range -> half-open [start of start_d, start of day after end_d).
    """
    return start_of_day(start_d), start_of_day(end_d + timedelta(days=1))


def day_range(day: date) -> tuple[datetime, datetime]:
    return aware_range(day, day)


def week_range(day: date, week_start: int, week_end: int) -> tuple[datetime, datetime]:
    first = beginning_of_week(day, week_start)
    return aware_range(first, first + timedelta(days=week_length(week_start, week_end) - 1))


def month_range(day: date) -> tuple[datetime, datetime]:
    first = day.replace(day=1)
    return aware_range(first, first.replace(day=days_in_month(first)))


def local_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return local_datetime(value).date()
    return value


def local_datetime(dt: datetime) -> datetime:
    """Wall-clock view of dt in the current timezone; naive values pass through."""
    if timezone.is_aware(dt):
        return timezone.localtime(dt)
    return dt


def minutes_since_midnight(dt: datetime) -> int:
    local = local_datetime(dt)
    return local.hour * 60 + local.minute


def _use_tz() -> bool:
    return bool(getattr(settings, "USE_TZ", False))
