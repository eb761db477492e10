from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .conf import LayoutOptions
from .dates import local_date, minutes_since_midnight, start_of_day


@dataclass(frozen=True)
class TimeGrid:
    """
    The rows of a day between day_start and day_end.

    rows[i] is a row index in ``unit`` sized slots counted from midnight,
    row_times[i] the wall-clock instant that row starts at on ``day``.
    """
    day: date
    unit: int
    rows: tuple[int, ...]
    row_times: tuple[datetime, ...]

    @property
    def starting_row(self) -> int:
        return self.rows[0] if self.rows else 0

    @property
    def ending_row(self) -> int:
        return self.rows[-1] + 1 if self.rows else 0

    def __len__(self) -> int:
        return len(self.rows)

    def __contains__(self, row: object) -> bool:
        return isinstance(row, int) and self.starting_row <= row < self.ending_row

    def index_of(self, row: int) -> int:
        """Position of a row index inside ``rows``."""
        return row - self.starting_row

    def row_of(self, dt: datetime) -> int:
        """Row index (not clamped to the grid) a wall-clock instant falls in."""
        return minutes_since_midnight(dt) // self.unit

    def labels(self, fmt: str = "%H:%M") -> list[str]:
        return [t.strftime(fmt) for t in self.row_times]


def build_time_grid(day: date | datetime, unit: int, day_start: int, day_end: int) -> TimeGrid:
    """
    Rows [day_start // unit, day_end // unit) for ``day``.

    Raises ConfigurationError for a non-positive unit or bad bounds.
    """
    LayoutOptions(unit=unit, day_start=day_start, day_end=day_end).validate()

    day = local_date(day)
    rows = tuple(range(day_start // unit, day_end // unit))
    midnight = start_of_day(day)
    row_times = tuple(midnight + timedelta(minutes=r * unit) for r in rows)

    return TimeGrid(day=day, unit=unit, rows=rows, row_times=row_times)


def grid_for(day: date | datetime, options: LayoutOptions) -> TimeGrid:
    return build_time_grid(day, options.unit, options.day_start, options.day_end)
