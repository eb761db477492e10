from datetime import date

import pytest

from calendarize import ConfigurationError
from calendarize.queries import for_day, for_month, for_week

from .conftest import at


class RecordingQuerySet:
    """Stands in for a QuerySet; remembers the filter and ordering applied."""

    def __init__(self):
        self.filters = {}
        self.ordering = ()

    def filter(self, **kwargs):
        self.filters.update(kwargs)
        return self

    def order_by(self, *fields):
        self.ordering = fields
        return self


def test_for_day():
    qs = for_day(RecordingQuerySet(), date(2024, 5, 15))

    assert qs.filters == {"start_dt__gte": at(2024, 5, 15), "start_dt__lt": at(2024, 5, 16)}
    assert qs.ordering == ("start_dt",)


def test_for_week_uses_configured_bounds():
    qs = for_week(RecordingQuerySet(), date(2024, 5, 15), week_start="sunday", week_end="saturday",
                  field="start_time")

    assert qs.filters == {"start_time__gte": at(2024, 5, 12), "start_time__lt": at(2024, 5, 19)}


def test_for_week_rejects_unknown_weekday():
    with pytest.raises(ConfigurationError):
        for_week(RecordingQuerySet(), date(2024, 5, 15), week_start="someday")


def test_for_month():
    qs = for_month(RecordingQuerySet(), date(2024, 2, 10))
    assert qs.filters == {"start_dt__gte": at(2024, 2, 1), "start_dt__lt": at(2024, 3, 1)}
