from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .conf import ConfigurationError
from .dates import (
    beginning_of_week,
    configured_weekdays,
    days_in_month,
    local_date,
    week_length,
    weekday_number,
)


def _weekday(value, name: str) -> int:
    wday = weekday_number(value)
    if wday is None:
        raise ConfigurationError(f"unrecognized weekday for {name}: {value!r}")
    return wday


@dataclass(frozen=True)
class WeekWindow:
    """
    The days a weekly calendar shows, first_day..last_day inclusive.

    Weeks may wrap past Sunday (wednesday..tuesday) or be partial
    (monday..friday).
    """
    first_day: date
    last_day: date
    week_start: int
    week_end: int

    @property
    def days(self) -> list[date]:
        return [self.first_day + timedelta(days=i) for i in range((self.last_day - self.first_day).days + 1)]

    @property
    def weekdays(self) -> list[int]:
        return configured_weekdays(self.week_start, self.week_end)

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.first_day <= local_date(day) <= self.last_day

    def day_column(self, day: date | datetime) -> int:
        """0-based column of a date, counted from week_start."""
        return (local_date(day).weekday() - self.week_start + 7) % 7


def week_window(day: date | datetime, week_start="monday", week_end="sunday") -> WeekWindow:
    ws = _weekday(week_start, "week_start")
    we = _weekday(week_end, "week_end")

    first_day = beginning_of_week(local_date(day), ws)
    last_day = first_day + timedelta(days=week_length(ws, we) - 1)

    return WeekWindow(first_day=first_day, last_day=last_day, week_start=ws, week_end=we)


@dataclass(frozen=True)
class MonthGrid:
    """
    Calendar-geometry of one month: which (row, column) cell each day sits in.

    Columns follow the configured week starting at week_start. Rows advance
    every seven calendar days, so a partial week (monday..friday) keeps
    each day under its own weekday and simply has no cell for the days it
    leaves out.
    """
    first_day: date
    days_in_month: int
    week_start: int
    week_end: int

    @property
    def weekdays(self) -> list[int]:
        return configured_weekdays(self.week_start, self.week_end)

    @property
    def columns(self) -> int:
        return len(self.weekdays)

    @property
    def last_day(self) -> date:
        return self.first_day.replace(day=self.days_in_month)

    @property
    def starting_offset(self) -> int:
        """
        Position of day 1 inside its week (0 = week_start).

        Negative when day 1 falls on a weekday the configured week leaves
        out, so the first row starts with the first shown day.
        """
        offset = (self.first_day.weekday() - self.week_start) % 7
        if offset >= self.columns:
            offset -= 7
        return offset

    @property
    def row_count(self) -> int:
        # ceil((days + offset) / 7)
        return -(-(self.days_in_month + self.starting_offset) // 7)

    def shows(self, day: date | datetime) -> bool:
        """True when a date is in this month and on a configured weekday."""
        d = local_date(day)
        return (
            (d.year, d.month) == (self.first_day.year, self.first_day.month)
            and d.weekday() in self.weekdays
        )

    def day_to_cell(self, month_day: int) -> tuple[int, int] | None:
        """(row, column) for a day of the month; None if it has no cell."""
        if not 1 <= month_day <= self.days_in_month:
            return None
        base = month_day + self.starting_offset - 1
        row, column = divmod(base, 7)
        if column >= self.columns:
            return None
        return row, column

    def cell_to_day(self, row: int, column: int) -> int | None:
        """Day of the month in a cell; None for the leading/trailing blanks."""
        if row < 0 or not 0 <= column < self.columns:
            return None
        month_day = row * 7 + column - self.starting_offset + 1
        if month_day < 1 or month_day > self.days_in_month:
            return None
        return month_day

    def cell_date(self, row: int, column: int) -> date | None:
        month_day = self.cell_to_day(row, column)
        return None if month_day is None else self.first_day.replace(day=month_day)

    def weeks(self) -> list[list[date | None]]:
        """Rows of dates for the month, None where a cell is blank."""
        return [
            [self.cell_date(row, col) for col in range(self.columns)]
            for row in range(self.row_count)
        ]


def month_grid(day: date | datetime, week_start="monday", week_end="sunday") -> MonthGrid:
    ws = _weekday(week_start, "week_start")
    we = _weekday(week_end, "week_end")

    first_day = local_date(day).replace(day=1)
    return MonthGrid(
        first_day=first_day,
        days_in_month=days_in_month(first_day),
        week_start=ws,
        week_end=we,
    )
