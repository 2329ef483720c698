"""Date windows for order filtering.

All windows compare at calendar-day granularity and are inclusive on both
ends, so an order at 23:59 on the end date is inside a window ending that day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pandas as pd

WINDOW_KINDS = ("all", "today", "this_week", "this_month", "custom")

DateLike = Union[str, date, datetime]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.to_datetime(value).date()


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing ``day``."""
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return first, next_month - timedelta(days=1)


@dataclass(frozen=True)
class TimeWindow:
    """A reporting window.

    Attributes:
        kind: One of "all", "today", "this_week", "this_month", "custom".
        start: First day (custom windows only).
        end: Last day (custom windows only).

    Examples:
        >>> TimeWindow.custom("2025-01-01", "2025-01-31").bounds()
        (datetime.date(2025, 1, 1), datetime.date(2025, 1, 31))
        >>> TimeWindow.all().bounds() is None
        True
    """

    kind: str = "all"
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.kind not in WINDOW_KINDS:
            raise ValueError(
                f"Invalid window '{self.kind}'. Must be one of {', '.join(WINDOW_KINDS)}."
            )
        if self.kind == "custom":
            if self.start is None or self.end is None:
                raise ValueError("Custom windows need both start and end dates.")
            if self.start > self.end:
                raise ValueError(f"Window start {self.start} is after end {self.end}.")

    @classmethod
    def all(cls) -> TimeWindow:
        return cls("all")

    @classmethod
    def today(cls) -> TimeWindow:
        return cls("today")

    @classmethod
    def this_week(cls) -> TimeWindow:
        return cls("this_week")

    @classmethod
    def this_month(cls) -> TimeWindow:
        return cls("this_month")

    @classmethod
    def custom(cls, start: DateLike, end: DateLike) -> TimeWindow:
        return cls("custom", _to_date(start), _to_date(end))

    def bounds(self, now: Optional[datetime] = None) -> Optional[tuple[date, date]]:
        """Inclusive (first_day, last_day) of the window, or None for "all".

        Args:
            now: Reference time for relative windows (defaults to the current time).
        """
        if self.kind == "all":
            return None
        if self.kind == "custom":
            assert self.start is not None and self.end is not None
            return self.start, self.end

        today = (now or datetime.now()).date()
        if self.kind == "today":
            return today, today
        if self.kind == "this_week":
            return week_bounds(today)
        return month_bounds(today)

    def contains(self, moment: datetime, now: Optional[datetime] = None) -> bool:
        """True when ``moment``'s calendar day falls inside the window."""
        bounds = self.bounds(now)
        if bounds is None:
            return True
        first, last = bounds
        return first <= moment.date() <= last

    def __str__(self) -> str:
        if self.kind == "custom":
            return f"{self.start}..{self.end}"
        return self.kind
