from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Hashable, Iterable

from .events import Event, sort_events


@dataclass(frozen=True)
class SpanPlacement:
    """
    A timed event on the day grid.

    Occupies rows [row_start, row_end) in lane ``column`` (0 = leftmost).
    """
    row_start: int
    row_end: int
    column: int
    event: Event

    @property
    def rows(self) -> range:
        return range(self.row_start, self.row_end)

    def overlaps(self, other: "SpanPlacement") -> bool:
        return not (self.row_end <= other.row_start or other.row_end <= self.row_start)


@dataclass(frozen=True)
class CellPlacement:
    """
    An event stacked in a (row, column) cell; ``index`` is its position in the stack.
    """
    row: int
    column: int
    index: int
    event: Event


def span_rows(event: Event, row_of: Callable[[datetime], int]) -> tuple[int, int]:
    """
    Half-open row span of an event.

    The end is rounded down into the grid from the event's last instant,
    so an event ending on a row boundary doesn't spill into the next row
    and a zero-length event still covers its starting row.
    """
    start_row = row_of(event.local_start)
    end_row = row_of(event.last_instant) + 1
    return start_row, max(end_row, start_row + 1)


def pack_intervals(events: Iterable[Event], row_of: Callable[[datetime], int]) -> list[SpanPlacement]:
    """
    First-fit column packing of timed events.

    Events are bucketed by the row they start in and buckets are walked in
    ascending row order, each sorted by (start, end). An event goes in the
    lowest column whose last event ends at or before the event's start row;
    when none qualifies a new column is opened. Column state carries across
    buckets so the whole day shares one set of lanes.
    """
    buckets: dict[int, list[tuple[Event, int, int]]] = defaultdict(list)
    for e in events:
        start_row, end_row = span_rows(e, row_of)
        buckets[start_row].append((e, start_row, end_row))

    # column index -> end row (exclusive) of the last event put in it
    column_ends: list[int] = []
    placed: list[SpanPlacement] = []

    for row in sorted(buckets):
        for e, start_row, end_row in sorted(buckets[row], key=lambda item: item[0].sort_key()):
            for col_idx, col_end in enumerate(column_ends):
                if col_end <= start_row:
                    column_ends[col_idx] = end_row
                    break
            else:
                col_idx = len(column_ends)
                column_ends.append(end_row)

            placed.append(SpanPlacement(row_start=start_row, row_end=end_row, column=col_idx, event=e))

    return placed


def stack_cells(events: Iterable[Event], cell_of: Callable[[Event], Hashable]) -> list[CellPlacement]:
    """
    Group events by cell and number them 0, 1, 2... in (start, end) order.

    ``cell_of`` returns a (row, column) pair. No overlap detection happens:
    a cell is already the finest unit the view shows. The result is ordered
    by row, then start time, matching the order rows are drawn in.
    """
    counters: dict[Hashable, int] = defaultdict(int)
    placed: list[CellPlacement] = []

    for e in sort_events(events):
        row, column = cell_of(e)
        placed.append(CellPlacement(row=row, column=column, index=counters[(row, column)], event=e))
        counters[(row, column)] += 1

    placed.sort(key=lambda p: (p.row, p.event.sort_key()))
    return placed


def max_columns(placements: Iterable[SpanPlacement]) -> int:
    return max((p.column + 1 for p in placements), default=0)


def occupied_rows(placements: Iterable[SpanPlacement | CellPlacement]) -> list[int]:
    rows: set[int] = set()
    for p in placements:
        if isinstance(p, SpanPlacement):
            rows.update(p.rows)
        else:
            rows.add(p.row)
    return sorted(rows)


def row_depths(placements: Iterable[CellPlacement]) -> dict[int, int]:
    """Deepest stack of any cell in each occupied row."""
    depths: dict[int, int] = {}
    for p in placements:
        depths[p.row] = max(depths.get(p.row, 0), p.index + 1)
    return dict(sorted(depths.items()))
