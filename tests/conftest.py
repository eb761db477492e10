"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import django
import pytest
from django.conf import settings

TZ = ZoneInfo("America/New_York")

if not settings.configured:
    settings.configure(
        USE_TZ=True,
        TIME_ZONE="America/New_York",
        INSTALLED_APPS=["calendarize"],
    )
    django.setup()


def at(year, month, day, hour=0, minute=0):
    """Aware datetime in the test timezone."""
    return datetime(year, month, day, hour, minute, tzinfo=TZ)


@pytest.fixture
def make_event():
    """Factory for dict events shaped like the calendar model (start_dt/end_dt/status)."""
    def _make(start, end, status="confirmed", **extra):
        return {"start_dt": start, "end_dt": end, "status": status, **extra}
    return _make


@pytest.fixture
def make_record():
    """Factory for attribute-style events (start_time/end_time/status)."""
    def _make(start, end, status="confirmed", **extra):
        return SimpleNamespace(start_time=start, end_time=end, status=status, **extra)
    return _make
