from __future__ import annotations

from datetime import date
from typing import Any

from django.utils import timezone

from .conf import ConfigurationError
from .dates import day_range, month_range, week_range, weekday_number


def events_starting_between(queryset, lower, upper, field: str = "start_dt"):
    """
    Events whose start falls in [lower, upper), oldest first.
    """
    return (
        queryset
        .filter(**{f"{field}__gte": lower, f"{field}__lt": upper})
        .order_by(field)
    )


def for_day(queryset, day: date | None = None, field: str = "start_dt"):
    lower, upper = day_range(day or timezone.localdate())
    return events_starting_between(queryset, lower, upper, field)


def for_week(queryset, day: date | None = None, week_start: Any = "monday",
             week_end: Any = "sunday", field: str = "start_dt"):
    ws, we = weekday_number(week_start), weekday_number(week_end)
    if ws is None or we is None:
        raise ConfigurationError(f"unrecognized week bounds: {week_start!r}..{week_end!r}")
    lower, upper = week_range(day or timezone.localdate(), ws, we)
    return events_starting_between(queryset, lower, upper, field)


def for_month(queryset, day: date | None = None, field: str = "start_dt"):
    lower, upper = month_range(day or timezone.localdate())
    return events_starting_between(queryset, lower, upper, field)
