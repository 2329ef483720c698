"""Public API for order analytics.

This module provides the main entry point: reconcile a batch of orders once,
build the fact tables once, and compute every view from them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

import pandas as pd

from butcher_core.analytics.categories import revenue_by_category
from butcher_core.analytics.items import (
    DEFAULT_TOP_N,
    cut_type_breakdown,
    item_revenue_contribution,
    most_sold_items,
    price_comparison,
)
from butcher_core.analytics.lines import build_item_lines, build_order_facts
from butcher_core.analytics.status import (
    DEFAULT_TOP_REASONS,
    RejectionPolicy,
    RejectionStats,
    SummaryStats,
    rejection_stats,
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
from butcher_core.config import DEFAULT_REGISTRY, ButcherRegistry
from butcher_core.models import Order
from butcher_core.orders.reconcile import ALL_VENDORS, reconcile
from butcher_core.orders.window import TimeWindow
from butcher_core.rates import RateResolver

logger = logging.getLogger(__name__)

RATE_COLUMNS = ["butcher_id", "category", "commission_rate", "markup_rate"]


@dataclass
class AnalyticsConfig:
    """Filters and limits for one analytics run.

    Attributes:
        vendor: Butcher id to report on; None or "all" for every butcher.
        window: Date window, inclusive, at day granularity.
        rejection_policy: Which statuses count as rejections.
        top_n: Row limit for the ranked item views.
        top_reasons: Number of rejection reasons to keep.
    """

    vendor: Optional[str] = None
    window: TimeWindow = field(default_factory=TimeWindow.all)
    rejection_policy: RejectionPolicy = RejectionPolicy.REJECTED_ONLY
    top_n: int = DEFAULT_TOP_N
    top_reasons: int = DEFAULT_TOP_REASONS

    def __post_init__(self) -> None:
        self.rejection_policy = RejectionPolicy(self.rejection_policy)
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")
        if self.top_reasons < 1:
            raise ValueError(f"top_reasons must be at least 1, got {self.top_reasons}")


@dataclass
class AnalyticsResult:
    """Every view computed for one reconciled set of orders."""

    orders: list[Order]
    item_lines: pd.DataFrame
    order_facts: pd.DataFrame
    summary: SummaryStats
    most_sold: pd.DataFrame
    price_comparison: pd.DataFrame
    item_contribution: pd.DataFrame
    revenue_by_category: pd.DataFrame
    peak_hours: pd.DataFrame
    status_breakdown: pd.DataFrame
    revenue_trend: pd.DataFrame
    completion_trend: pd.DataFrame
    rejections: RejectionStats
    cut_types: pd.DataFrame
    daily: pd.DataFrame
    weekly: pd.DataFrame
    rates: pd.DataFrame
    metadata: dict[str, Any] = field(default_factory=dict)


def resolve_rates(item_lines: pd.DataFrame, resolver: RateResolver) -> pd.DataFrame:
    """Commission and markup rates for every butcher present in ``item_lines``.

    Configured butchers are resolved for each of their categories; butchers
    missing from the registry are resolved for the categories seen on their
    items, which records the misses on ``resolver.diagnostics``.
    """
    if item_lines.empty:
        return pd.DataFrame(columns=RATE_COLUMNS)

    rows = []
    for butcher_id, group in item_lines.groupby("butcher_id", sort=True):
        categories = resolver.categories(butcher_id) or list(group["category"].unique())
        for category in categories:
            rows.append(
                {
                    "butcher_id": butcher_id,
                    "category": category,
                    "commission_rate": resolver.commission_rate(butcher_id, category),
                    "markup_rate": resolver.markup_rate(butcher_id, category),
                }
            )
    return pd.DataFrame(rows, columns=RATE_COLUMNS)


def run_analytics(
    orders: Iterable[Order],
    config: Optional[AnalyticsConfig] = None,
    registry: ButcherRegistry = DEFAULT_REGISTRY,
    *,
    now: Optional[datetime] = None,
) -> AnalyticsResult:
    """Reconcile orders and compute every analytics view.

    Args:
        orders: Raw orders in arrival order (duplicates allowed).
        config: Filters and limits. Defaults to all vendors, all time.
        registry: Butcher configuration used for vendor types and rates.
        now: Reference time for relative windows and the calendar
            breakdowns. Defaults to the current time.

    Returns:
        AnalyticsResult with the reconciled orders, the fact tables, every
        view and a metadata dict (vendor, window, order count, rate
        diagnostics).

    Examples:
        >>> from butcher_core import load_orders, run_analytics
        >>> result = run_analytics(load_orders("orders.json"))  # doctest: +SKIP
        >>> result.most_sold.head()  # doctest: +SKIP

    """
    config = config or AnalyticsConfig()
    now = now or datetime.now()

    reconciled = reconcile(orders, config.vendor, config.window, now=now)
    item_lines = build_item_lines(reconciled)
    order_facts = build_order_facts(reconciled)
    resolver = RateResolver(registry)

    result = AnalyticsResult(
        orders=reconciled,
        item_lines=item_lines,
        order_facts=order_facts,
        summary=summary_stats(order_facts),
        most_sold=most_sold_items(item_lines, config.top_n),
        price_comparison=price_comparison(item_lines, config.top_n),
        item_contribution=item_revenue_contribution(item_lines, config.top_n),
        revenue_by_category=revenue_by_category(item_lines),
        peak_hours=peak_hours(order_facts),
        status_breakdown=status_breakdown(order_facts),
        revenue_trend=revenue_trend(order_facts),
        completion_trend=completion_time_trend(order_facts),
        rejections=rejection_stats(order_facts, config.rejection_policy, config.top_reasons),
        cut_types=cut_type_breakdown(item_lines, config.vendor, registry),
        daily=daily_breakdown(order_facts, now),
        weekly=weekly_breakdown(order_facts, now),
        rates=resolve_rates(item_lines, resolver),
    )
    result.metadata = {
        "vendor": config.vendor or ALL_VENDORS,
        "vendor_name": registry.butcher_name(config.vendor),
        "window": str(config.window),
        "window_bounds": config.window.bounds(now),
        "rejection_policy": config.rejection_policy.value,
        "order_count": len(reconciled),
        "item_line_count": len(item_lines),
        "generated_at": now,
        "rate_diagnostics": [asdict(d) for d in resolver.diagnostics],
    }

    logger.info(
        "Analytics for vendor=%s window=%s: %d order(s), %d item line(s), %d rate diagnostic(s)",
        result.metadata["vendor"],
        result.metadata["window"],
        len(reconciled),
        len(item_lines),
        len(resolver.diagnostics),
    )
    return result
