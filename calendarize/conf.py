from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from django.conf import settings

from .dates import weekday_number

MINUTES_PER_DAY = 1440

# Django setting name -> (LayoutOptions field, fallback)
DEFAULTS = {
    "CALENDARIZE_UNIT": ("unit", 60),
    "CALENDARIZE_DAY_START": ("day_start", 0),
    "CALENDARIZE_DAY_END": ("day_end", MINUTES_PER_DAY),
    "CALENDARIZE_VERBOSE": ("verbose", True),
    "CALENDARIZE_WEEK_START": ("week_start", "monday"),
    "CALENDARIZE_WEEK_END": ("week_end", "sunday"),
}


class ConfigurationError(ValueError):
    """Layout options that cannot produce a calendar."""


@dataclass(frozen=True)
class LayoutOptions:
    """
    Options shared by the daily, weekly and monthly layouts.

    unit:       minutes per grid row, > 0
    day_start:  first minute shown (from midnight)
    day_end:    minute where the grid stops (exclusive), <= 1440
    verbose:    show every row, or only rows holding events
    week_start / week_end: weekday identifiers bounding the displayed week
    calendar_id: token used for the rendering id; random when omitted
    """
    unit: int = 60
    day_start: int = 0
    day_end: int = MINUTES_PER_DAY
    verbose: bool = True
    week_start: Any = "monday"
    week_end: Any = "sunday"
    calendar_id: str | None = None

    def validate(self) -> "LayoutOptions":
        if not _is_int(self.unit) or self.unit <= 0:
            raise ConfigurationError(f"unit must be a positive integer, got {self.unit!r}")

        for name in ("day_start", "day_end"):
            value = getattr(self, name)
            if not _is_int(value) or not 0 <= value <= MINUTES_PER_DAY:
                raise ConfigurationError(
                    f"{name} must be an integer between 0 and {MINUTES_PER_DAY}, got {value!r}"
                )

        if self.day_start >= self.day_end:
            raise ConfigurationError(
                f"day_start ({self.day_start}) must be before day_end ({self.day_end})"
            )

        for name in ("week_start", "week_end"):
            if weekday_number(getattr(self, name)) is None:
                raise ConfigurationError(f"unrecognized weekday for {name}: {getattr(self, name)!r}")

        return self

    @property
    def first_weekday(self) -> int:
        return weekday_number(self.week_start)

    @property
    def last_weekday(self) -> int:
        return weekday_number(self.week_end)

    @property
    def starting_row(self) -> int:
        return self.day_start // self.unit

    @property
    def ending_row(self) -> int:
        return self.day_end // self.unit


def default_options() -> LayoutOptions:
    """LayoutOptions built from CALENDARIZE_* settings (unvalidated)."""
    values = {field: getattr(settings, name, fallback) for name, (field, fallback) in DEFAULTS.items()}
    return LayoutOptions(**values)


def get_options(options: LayoutOptions | None = None, **overrides: Any) -> LayoutOptions:
    """
    Merge overrides over the given options (or the settings defaults) and validate.

    Raises ConfigurationError for unknown option names or invalid values.
    """
    base = options if options is not None else default_options()

    known = {f.name for f in fields(LayoutOptions)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"unknown layout option(s): {', '.join(unknown)}")

    if overrides:
        base = replace(base, **overrides)
    return base.validate()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Scopes:
    """The calendar views a page can ask for."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    ALL = (DAILY, WEEKLY, MONTHLY)
