from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from .conf import ConfigurationError, LayoutOptions, Scopes, get_options
from .dates import local_date, next_day, next_month, next_week, previous_day, previous_month, previous_week
from .events import Event, MalformedEventError, adapt_events, sort_events
from .geometry import MonthGrid, WeekWindow, month_grid, week_window
from .grid import TimeGrid, grid_for
from .packing import (
    CellPlacement,
    SpanPlacement,
    max_columns,
    occupied_rows,
    pack_intervals,
    row_depths,
    span_rows,
    stack_cells,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyLayout:
    """
    A computed day view.

    placements are the timed events packed into lanes, all_day_events the
    ones ending after the day (listed separately, never packed) and
    visible_row_indexes the positions in grid.rows a renderer should draw.
    """
    day: date
    grid: TimeGrid
    placements: tuple[SpanPlacement, ...]
    all_day_events: tuple[Event, ...]
    visible_row_indexes: tuple[int, ...]
    columns: int
    rejected: tuple[MalformedEventError, ...]
    options: LayoutOptions
    dom_id: str
    previous: date
    next: date

    scope = Scopes.DAILY

    def visible_rows(self) -> list[tuple[int, datetime]]:
        return [(self.grid.rows[i], self.grid.row_times[i]) for i in self.visible_row_indexes]


@dataclass(frozen=True)
class WeeklyLayout:
    """
    A computed week view: one grid row per time unit, one column per shown day.
    """
    day: date
    grid: TimeGrid
    week: WeekWindow
    days: tuple[date, ...]
    placements: tuple[CellPlacement, ...]
    visible_row_indexes: tuple[int, ...]
    row_depths: Mapping[int, int]
    rejected: tuple[MalformedEventError, ...]
    options: LayoutOptions
    dom_id: str
    previous: date
    next: date

    scope = Scopes.WEEKLY

    @property
    def weekdays(self) -> list[int]:
        return self.week.weekdays

    def visible_rows(self) -> list[tuple[int, datetime]]:
        return [(self.grid.rows[i], self.grid.row_times[i]) for i in self.visible_row_indexes]


@dataclass(frozen=True)
class MonthlyLayout:
    """
    A computed month view: one row per calendar week, one column per configured weekday.
    """
    day: date
    month: MonthGrid
    placements: tuple[CellPlacement, ...]
    visible_row_indexes: tuple[int, ...]
    row_depths: Mapping[int, int]
    rejected: tuple[MalformedEventError, ...]
    options: LayoutOptions
    dom_id: str
    previous: date
    next: date

    scope = Scopes.MONTHLY

    @property
    def weekdays(self) -> list[int]:
        return self.month.weekdays


def _dom_id(scope: str, options: LayoutOptions) -> str:
    token = options.calendar_id or uuid.uuid4().hex[:8]
    return f"{scope}_calendar_{token}"


def _prepare(events: Iterable[Any] | None, scope: str) -> tuple[list[Event], tuple[MalformedEventError, ...]]:
    adapted, rejected = adapt_events(events)
    for err in rejected:
        logger.warning("%s calendar: skipping event %r: %s", scope, err.source, err)
    return sort_events(adapted), tuple(rejected)


def _in_rows(grid: TimeGrid) -> Callable[[Event], bool]:
    """
    Keep events whose first and last rows both fall inside the grid.

    Events poking out of the window are dropped, not clipped.
    """
    def check(e: Event) -> bool:
        start_row, end_row = span_rows(e, grid.row_of)
        return start_row in grid and (end_row - 1) in grid

    return check


def _visible(verbose: bool, all_rows: Iterable[int], used_rows: Iterable[int]) -> tuple[int, ...]:
    return tuple(all_rows) if verbose else tuple(used_rows)


def daily_layout(
    day: date | datetime,
    events: Iterable[Any] | None = None,
    options: LayoutOptions | None = None,
    **overrides: Any,
) -> DailyLayout:
    """
    Lay out one day.

    Events ending on a later date than ``day`` are all-day events. The rest
    must start on ``day`` and fit inside [day_start, day_end) to be packed.
    """
    opts = get_options(options, **overrides)
    day = local_date(day)
    grid = grid_for(day, opts)

    events, rejected = _prepare(events, Scopes.DAILY)

    all_day: list[Event] = []
    timed: list[Event] = []
    for e in events:
        start_d, end_d = e.local_start.date(), e.local_end.date()
        if end_d > day and start_d <= day:
            all_day.append(e)
        elif start_d == day:
            timed.append(e)

    fits = _in_rows(grid)
    placements = pack_intervals([e for e in timed if fits(e)], grid.row_of)

    visible = _visible(
        opts.verbose,
        range(len(grid)),
        (grid.index_of(r) for r in occupied_rows(placements)),
    )

    logger.debug(
        "daily calendar %s: %d placed, %d all-day, %d outside window, %d rejected",
        day, len(placements), len(all_day), len(events) - len(placements) - len(all_day), len(rejected),
    )

    return DailyLayout(
        day=day,
        grid=grid,
        placements=tuple(placements),
        all_day_events=tuple(all_day),
        visible_row_indexes=visible,
        columns=max_columns(placements),
        rejected=rejected,
        options=opts,
        dom_id=_dom_id(Scopes.DAILY, opts),
        previous=previous_day(day),
        next=next_day(day),
    )


def weekly_layout(
    day: date | datetime,
    events: Iterable[Any] | None = None,
    options: LayoutOptions | None = None,
    **overrides: Any,
) -> WeeklyLayout:
    """
    Lay out the week containing ``day``.

    Each event lands in the cell of the row it starts in and the column of
    its start date; events sharing a cell are stacked.
    """
    opts = get_options(options, **overrides)
    day = local_date(day)
    grid = grid_for(day, opts)
    week = week_window(day, opts.week_start, opts.week_end)

    events, rejected = _prepare(events, Scopes.WEEKLY)

    fits = _in_rows(grid)
    kept = [e for e in events if e.local_start.date() in week and fits(e)]

    placements = stack_cells(kept, lambda e: (grid.row_of(e.local_start), week.day_column(e.local_start)))

    visible = _visible(
        opts.verbose,
        range(len(grid)),
        (grid.index_of(r) for r in occupied_rows(placements)),
    )

    logger.debug(
        "weekly calendar %s..%s: %d placed, %d outside window, %d rejected",
        week.first_day, week.last_day, len(placements), len(events) - len(placements), len(rejected),
    )

    return WeeklyLayout(
        day=day,
        grid=grid,
        week=week,
        days=tuple(week.days),
        placements=tuple(placements),
        visible_row_indexes=visible,
        row_depths=MappingProxyType(row_depths(placements)),
        rejected=rejected,
        options=opts,
        dom_id=_dom_id(Scopes.WEEKLY, opts),
        previous=previous_week(day, week.week_start),
        next=next_week(day, week.week_start),
    )


def monthly_layout(
    day: date | datetime,
    events: Iterable[Any] | None = None,
    options: LayoutOptions | None = None,
    **overrides: Any,
) -> MonthlyLayout:
    """
    Lay out the month containing ``day``, one cell per day.

    Events are placed on the day they start; days falling on weekdays
    outside week_start..week_end have no cell and their events are dropped.
    """
    opts = get_options(options, **overrides)
    day = local_date(day)
    month = month_grid(day, opts.week_start, opts.week_end)

    events, rejected = _prepare(events, Scopes.MONTHLY)

    kept = [e for e in events if month.shows(e.local_start)]
    placements = stack_cells(kept, lambda e: month.day_to_cell(e.local_start.day))

    visible = _visible(opts.verbose, range(month.row_count), occupied_rows(placements))

    logger.debug(
        "monthly calendar %s: %d placed, %d outside window, %d rejected",
        month.first_day.strftime("%Y-%m"), len(placements), len(events) - len(placements), len(rejected),
    )

    return MonthlyLayout(
        day=day,
        month=month,
        placements=tuple(placements),
        visible_row_indexes=visible,
        row_depths=MappingProxyType(row_depths(placements)),
        rejected=rejected,
        options=opts,
        dom_id=_dom_id(Scopes.MONTHLY, opts),
        previous=previous_month(day),
        next=next_month(day),
    )


LAYOUTS = {
    Scopes.DAILY: daily_layout,
    Scopes.WEEKLY: weekly_layout,
    Scopes.MONTHLY: monthly_layout,
}


def build_layout(scope: str, day: date | datetime, events: Iterable[Any] | None = None, **options: Any):
    """Dispatch to the layout for ``scope`` (see Scopes)."""
    try:
        layout = LAYOUTS[scope]
    except KeyError:
        raise ConfigurationError(f"unknown calendar scope: {scope!r}") from None
    return layout(day, events, **options)
