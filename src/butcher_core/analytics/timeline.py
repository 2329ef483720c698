"""Time-based views: hour of day, daily trends and calendar breakdowns."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pandas as pd

from butcher_core.analytics.lines import OrdersOrFrame, as_order_facts
from butcher_core.orders.window import month_bounds, week_bounds

logger = logging.getLogger(__name__)

HOURS_IN_DAY = 24

# Statuses that count as finished work for completion-time figures
COMPLETED_STATUSES = ("completed", "prepared", "ready to pick up")

# Narrower set used by the weekly and monthly reports
REPORT_COMPLETED_STATUSES = ("completed", "prepared")

PEAK_HOURS_COLUMNS = ["hour", "count"]
REVENUE_TREND_COLUMNS = ["date", "revenue"]
COMPLETION_TREND_COLUMNS = ["date", "average_minutes", "count"]
DAILY_COLUMNS = ["date", "day", "orders", "completed_orders", "revenue", "weight"]
WEEKLY_COLUMNS = ["week", "start", "end", "orders", "completed_orders", "revenue", "weight"]

DayLike = Union[str, date, datetime]


def _as_date(value: Optional[DayLike]) -> date:
    if value is None:
        return datetime.now().date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.to_datetime(value).date()


def peak_hours(data: OrdersOrFrame) -> pd.DataFrame:
    """Order count per hour of day.

    Always 24 rows (hours 0-23), zero-filled.

    Examples:
        >>> len(peak_hours([]))
        24
    """
    facts = as_order_facts(data)
    counts = facts["hour"].value_counts().reindex(range(HOURS_IN_DAY), fill_value=0)
    return pd.DataFrame({"hour": list(range(HOURS_IN_DAY)), "count": counts.astype(int).values})


def revenue_trend(data: OrdersOrFrame) -> pd.DataFrame:
    """Order revenue summed per calendar day, oldest first."""
    facts = as_order_facts(data)
    if facts.empty:
        return pd.DataFrame(columns=REVENUE_TREND_COLUMNS)
    trend = facts.groupby("date", sort=True)["revenue"].sum().reset_index()
    return trend[REVENUE_TREND_COLUMNS]


def completion_time_trend(data: OrdersOrFrame) -> pd.DataFrame:
    """Average completion time per calendar day, oldest first.

    Only finished orders (COMPLETED_STATUSES) with a known completion time
    are counted.
    """
    facts = as_order_facts(data)
    done = facts[facts["status"].isin(COMPLETED_STATUSES) & facts["completion_minutes"].notna()]
    if done.empty:
        return pd.DataFrame(columns=COMPLETION_TREND_COLUMNS)

    trend = done.groupby("date", sort=True).agg(
        average_minutes=("completion_minutes", "mean"),
        count=("completion_minutes", "size"),
    )
    return trend.reset_index()[COMPLETION_TREND_COLUMNS]


def _bucket(facts: pd.DataFrame, first: date, last: date) -> dict[str, float]:
    """Orders, completed orders, revenue and prepared weight for a day range."""
    in_range = facts[(facts["date"] >= first) & (facts["date"] <= last)]
    completed = in_range[in_range["status"].isin(REPORT_COMPLETED_STATUSES)]
    return {
        "orders": len(in_range),
        "completed_orders": len(completed),
        "revenue": float(completed["revenue"].sum()),
        "weight": float(completed["preparing_weight"].sum()),
    }


def daily_breakdown(data: OrdersOrFrame, week_of: Optional[DayLike] = None) -> pd.DataFrame:
    """One row per day, Monday to Sunday, of the week containing ``week_of``.

    Revenue and weight only count completed or prepared orders; ``orders``
    counts every order of the day.

    Args:
        data: Reconciled orders or their order fact table.
        week_of: Any day of the wanted week. Defaults to today.
    """
    facts = as_order_facts(data)
    monday, _ = week_bounds(_as_date(week_of))
    rows = []
    for offset in range(7):
        day = monday + timedelta(days=offset)
        rows.append({"date": day, "day": day.strftime("%a"), **_bucket(facts, day, day)})
    return pd.DataFrame(rows, columns=DAILY_COLUMNS)


def weekly_breakdown(data: OrdersOrFrame, month_of: Optional[DayLike] = None) -> pd.DataFrame:
    """Seven-day buckets of the month containing ``month_of``.

    Buckets start on the first of the month; the last one is cut at month
    end, so a 31-day month yields five buckets (the fifth covering 3 days).
    """
    facts = as_order_facts(data)
    first, last = month_bounds(_as_date(month_of))
    rows = []
    start = first
    week_number = 1
    while start <= last:
        end = min(start + timedelta(days=6), last)
        rows.append(
            {"week": f"Week {week_number}", "start": start, "end": end, **_bucket(facts, start, end)}
        )
        start += timedelta(days=7)
        week_number += 1
    return pd.DataFrame(rows, columns=WEEKLY_COLUMNS)
