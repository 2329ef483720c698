"""Analytics over reconciled butcher orders.

Every view is a pure function of the reconciled orders (or the fact tables
built from them) and returns a DataFrame with fixed columns, empty when there
is nothing to report.

Example:
    >>> from butcher_core import AnalyticsConfig, TimeWindow, load_orders
    >>> from butcher_core.analytics import run_analytics
    >>>
    >>> orders = load_orders("orders.json")  # doctest: +SKIP
    >>> config = AnalyticsConfig(vendor="kak", window=TimeWindow.this_month())
    >>> result = run_analytics(orders, config)  # doctest: +SKIP
    >>> result.most_sold  # doctest: +SKIP

"""

from butcher_core.analytics.api import AnalyticsConfig, AnalyticsResult, run_analytics
from butcher_core.analytics.categories import revenue_by_category
from butcher_core.analytics.console import format_analytics_for_console
from butcher_core.analytics.items import (
    cut_type_breakdown,
    item_revenue_contribution,
    most_sold_items,
    price_comparison,
)
from butcher_core.analytics.lines import build_item_lines, build_order_facts
from butcher_core.analytics.status import (
    RejectionPolicy,
    RejectionStats,
    SummaryStats,
    rejection_stats,
    status_badge,
    status_breakdown,
    summary_stats,
)
from butcher_core.analytics.timeline import (
    completion_time_trend,
    daily_breakdown,
    peak_hours,
    revenue_trend,
    weekly_breakdown,
)

__all__ = [
    "AnalyticsConfig",
    "AnalyticsResult",
    "RejectionPolicy",
    "RejectionStats",
    "SummaryStats",
    "build_item_lines",
    "build_order_facts",
    "completion_time_trend",
    "cut_type_breakdown",
    "daily_breakdown",
    "format_analytics_for_console",
    "item_revenue_contribution",
    "most_sold_items",
    "peak_hours",
    "price_comparison",
    "rejection_stats",
    "revenue_by_category",
    "revenue_trend",
    "run_analytics",
    "status_badge",
    "status_breakdown",
    "summary_stats",
    "weekly_breakdown",
]
