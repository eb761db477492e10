from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from django.utils import timezone

from .conf import Scopes
from .dates import parse_ymd


@dataclass(frozen=True)
class CalendarParams:
    """Which calendar a page is looking at, carried between requests."""
    date: date
    verbose: bool = True
    scope: str = Scopes.DAILY

    def as_query(self, **changes: Any) -> dict[str, str]:
        """Plain values for a querystring; changes override the current state."""
        values = {"date": self.date, "verbose": self.verbose, "scope": self.scope, **changes}
        out = {}
        for key, value in values.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, date):
                value = value.strftime("%Y-%m-%d")
            out[key] = str(value)
        return out


def calendar_params(query: Mapping[str, Any] | None, prefix: str = "") -> CalendarParams:
    """
    Read the calendar state from request.GET (or any mapping).

    Rules:
      - date=YYYY-MM-DD (an ISO datetime works too); defaults to today
      - verbose is True unless given and not "true"
      - scope is daily / weekly / monthly; anything else falls back to daily
    """
    query = query or {}
    today = timezone.localdate()

    day = parse_ymd(query.get(f"{prefix}date"), default=today)

    raw_verbose = query.get(f"{prefix}verbose")
    verbose = True if raw_verbose is None else str(raw_verbose).lower() == "true"

    scope = query.get(f"{prefix}scope") or Scopes.DAILY
    if scope not in Scopes.ALL:
        scope = Scopes.DAILY

    return CalendarParams(date=day, verbose=verbose, scope=scope)
