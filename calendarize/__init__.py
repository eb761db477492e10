"""
Calendar layout for Django: places events on daily, weekly and monthly grids.

Rendering is left to templates; this package computes where every event goes.
"""

from .conf import ConfigurationError, LayoutOptions, Scopes, get_options
from .events import Event, MalformedEventError, as_event
from .geometry import MonthGrid, WeekWindow, month_grid, week_window
from .grid import TimeGrid, build_time_grid
from .layout import (
    DailyLayout,
    MonthlyLayout,
    WeeklyLayout,
    build_layout,
    daily_layout,
    monthly_layout,
    weekly_layout,
)
from .packing import CellPlacement, SpanPlacement, pack_intervals, stack_cells
from .params import CalendarParams, calendar_params

__all__ = [
    "CalendarParams",
    "CellPlacement",
    "ConfigurationError",
    "DailyLayout",
    "Event",
    "LayoutOptions",
    "MalformedEventError",
    "MonthGrid",
    "MonthlyLayout",
    "Scopes",
    "SpanPlacement",
    "TimeGrid",
    "WeekWindow",
    "WeeklyLayout",
    "as_event",
    "build_layout",
    "build_time_grid",
    "calendar_params",
    "daily_layout",
    "get_options",
    "month_grid",
    "monthly_layout",
    "pack_intervals",
    "stack_cells",
    "week_window",
    "weekly_layout",
]
