from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from calendarize import Event, MalformedEventError, as_event
from calendarize.events import adapt_events, sort_events

from .conftest import at


@pytest.mark.parametrize("start_key, end_key", [
    ("start", "end"),
    ("start_time", "end_time"),
    ("start_dt", "end_dt"),
])
def test_mapping_field_names(start_key, end_key):
    raw = {start_key: at(2024, 5, 15, 9), end_key: at(2024, 5, 15, 10), "status": "confirmed"}
    event = as_event(raw)

    assert event.start == at(2024, 5, 15, 9)
    assert event.end == at(2024, 5, 15, 10)
    assert event.status == "confirmed"
    assert event.source is raw


def test_object_without_status():
    obj = SimpleNamespace(start_dt=at(2024, 5, 15, 9), end_dt=at(2024, 5, 15, 10))
    event = as_event(obj)
    assert event.status == ""
    assert event.source is obj


def test_dates_become_aware_midnight():
    event = as_event({"start": date(2024, 5, 15), "end": date(2024, 5, 16)})
    assert event.start == at(2024, 5, 15)
    assert event.end == at(2024, 5, 16)
    assert event.start.tzinfo is not None


def test_event_instances_pass_through():
    event = Event(start=at(2024, 5, 15, 9), end=at(2024, 5, 15, 9))
    assert as_event(event) is event


@pytest.mark.parametrize("raw", [
    {"start": at(2024, 5, 15, 9)},
    {"end": at(2024, 5, 15, 9)},
    {"start": "09:00", "end": "10:00"},
    {"start": at(2024, 5, 15, 10), "end": at(2024, 5, 15, 9)},
    {"start": datetime(2024, 5, 15, 9), "end": at(2024, 5, 15, 10)},
    object(),
])
def test_unusable_events_raise(raw):
    with pytest.raises(MalformedEventError) as exc:
        as_event(raw)
    assert exc.value.source is raw


def test_adapt_events_splits_rejects():
    good = {"start": at(2024, 5, 15, 9), "end": at(2024, 5, 15, 10)}
    bad = {"start": at(2024, 5, 15, 9), "end": at(2024, 5, 15, 8)}

    events, rejected = adapt_events([bad, good])

    assert [e.source for e in events] == [good]
    assert [r.source for r in rejected] == [bad]
    assert adapt_events(None) == ([], [])


def test_sort_is_by_start_then_end():
    a = Event(start=at(2024, 5, 15, 9), end=at(2024, 5, 15, 11))
    b = Event(start=at(2024, 5, 15, 9), end=at(2024, 5, 15, 10))
    c = Event(start=at(2024, 5, 15, 8), end=at(2024, 5, 15, 12))
    assert sort_events([a, b, c]) == [c, b, a]


def test_last_instant():
    assert Event(start=at(2024, 5, 15, 9), end=at(2024, 5, 15, 10)).last_instant == at(2024, 5, 15, 9, 59) + timedelta(seconds=59)
    assert Event(start=at(2024, 5, 15, 9), end=at(2024, 5, 15, 9)).last_instant == at(2024, 5, 15, 9)
