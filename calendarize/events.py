from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable

from .dates import local_datetime, start_of_day

START_FIELDS = ("start", "start_time", "start_dt")
END_FIELDS = ("end", "end_time", "end_dt")

ONE_SECOND = timedelta(seconds=1)


class MalformedEventError(ValueError):
    """
    An input event that can't be placed (missing times, or end before start).

    Raised by as_event. The layouts catch it per event and report it in
    the result's ``rejected`` tuple instead of failing the whole calendar.
    """

    def __init__(self, message: str, source: Any = None):
        super().__init__(message)
        self.source = source


@dataclass(frozen=True)
class Event:
    """
    The minimal event contract the layouts work with.

    ``source`` is whatever the caller handed in (a model instance, a dict...)
    so renderers get their own object back on each placement.
    """
    start: datetime
    end: datetime
    status: str = ""
    source: Any = None

    @property
    def local_start(self) -> datetime:
        return local_datetime(self.start)

    @property
    def local_end(self) -> datetime:
        return local_datetime(self.end)

    @property
    def last_instant(self) -> datetime:
        """Last wall-clock instant the event occupies (end is exclusive)."""
        if self.end > self.start:
            return self.local_end - ONE_SECOND
        return self.local_start

    def sort_key(self) -> tuple[datetime, datetime]:
        # starts tie -> shorter event first
        return (self.start, self.end)


def _lookup(obj: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return None


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return start_of_day(value)
    return None


def as_event(obj: Any) -> Event:
    """
    Adapt a host-application event (object or mapping) to ``Event``.

    Start is read from start / start_time / start_dt, end from
    end / end_time / end_dt and status from status. Raises
    MalformedEventError when a time is missing or end precedes start.
    """
    if isinstance(obj, Event):
        event = obj
    else:
        start = _as_datetime(_lookup(obj, START_FIELDS))
        end = _as_datetime(_lookup(obj, END_FIELDS))
        if start is None or end is None:
            raise MalformedEventError("event has no usable start/end time", source=obj)

        status = _lookup(obj, ("status",))
        event = Event(start=start, end=end, status="" if status is None else str(status), source=obj)

    try:
        backwards = event.end < event.start
    except TypeError:
        raise MalformedEventError(
            "event mixes naive and timezone-aware times", source=event.source
        ) from None

    if backwards:
        raise MalformedEventError(
            f"event ends ({event.end.isoformat()}) before it starts ({event.start.isoformat()})",
            source=event.source,
        )
    return event


def adapt_events(items: Iterable[Any] | None) -> tuple[list[Event], list[MalformedEventError]]:
    """
    Adapt a collection of events, splitting off the ones that can't be used.
    """
    events: list[Event] = []
    rejected: list[MalformedEventError] = []

    for item in items or ():
        try:
            events.append(as_event(item))
        except MalformedEventError as e:
            rejected.append(e)

    return events, rejected


def sort_events(events: Iterable[Event]) -> list[Event]:
    return sorted(events, key=Event.sort_key)
