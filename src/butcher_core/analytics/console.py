"""Plain-text rendering of an AnalyticsResult."""

from __future__ import annotations

import pandas as pd

from butcher_core.analytics.api import AnalyticsResult
from butcher_core.rates import format_rate

RULE = "-" * 60


def _section(title: str, df: pd.DataFrame, empty: str = "(no data)") -> list[str]:
    lines = ["", title, RULE]
    if df.empty:
        lines.append(empty)
    else:
        lines.append(df.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))
    return lines


def format_analytics_for_console(result: AnalyticsResult) -> str:
    """Render the headline numbers and every view as a text report."""
    meta = result.metadata
    summary = result.summary
    vendor = meta.get("vendor", "all")
    if meta.get("vendor_name"):
        vendor = f"{vendor} ({meta['vendor_name']})"

    avg_minutes = summary.average_completion_minutes
    lines = [
        "Butcher order analytics",
        RULE,
        f"  vendor            : {vendor}",
        f"  window            : {meta.get('window', 'all')}",
        f"  orders            : {summary.total_orders}",
        f"  completed         : {summary.completed_orders}",
        f"  rejected/declined : {summary.rejected_orders}",
        f"  preparing         : {summary.preparing_orders}",
        f"  new               : {summary.new_orders}",
        f"  revenue           : {summary.total_revenue:,.2f}",
        f"  completed revenue : {summary.completed_revenue:,.2f}",
        f"  avg order value   : {summary.average_order_value:,.2f}",
        f"  kilograms         : {summary.total_kilograms:,.2f}",
        "  avg completion    : "
        + ("n/a" if avg_minutes is None else f"{avg_minutes:.1f} min"),
        f"  rejection rate    : {result.rejections.rate:.1f}% "
        f"({result.rejections.rejected}/{result.rejections.total})",
    ]

    lines += _section("Most sold items", result.most_sold)
    lines += _section("Price per kg", result.price_comparison)
    lines += _section("Revenue by item", result.item_contribution)
    lines += _section("Revenue by category", result.revenue_by_category)
    lines += _section("Status breakdown", result.status_breakdown)
    lines += _section("Rejection reasons", result.rejections.reasons)
    lines += _section("Revenue trend", result.revenue_trend)
    lines += _section("Completion time trend", result.completion_trend)
    busy = result.peak_hours[result.peak_hours["count"] > 0]
    lines += _section("Peak hours", busy)
    if not result.cut_types.empty:
        lines += _section("Cut types", result.cut_types)
    lines += _section("This week", result.daily)
    lines += _section("This month", result.weekly)

    if not result.rates.empty:
        rates = result.rates.assign(
            commission_rate=result.rates["commission_rate"].map(format_rate),
            markup_rate=result.rates["markup_rate"].map(format_rate),
        )
        lines += _section("Rates", rates)

    diagnostics = meta.get("rate_diagnostics") or []
    if diagnostics:
        lines += ["", f"Rate configuration gaps: {len(diagnostics)}", RULE]
        for d in diagnostics:
            lines.append(
                f"[WARN ] {d['kind']} rate for butcher={d['butcher_id']} "
                f"category={d['category']!r} ({d['reason']}), using {format_rate(d['value'])}"
            )

    return "\n".join(lines)
