"""Item-level views: best sellers, realized prices, revenue share, cut types."""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from butcher_core.analytics.lines import OrdersOrFrame, as_item_lines
from butcher_core.config import DEFAULT_REGISTRY, ButcherRegistry
from butcher_core.orders.reconcile import is_all_vendors

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10

MOST_SOLD_COLUMNS = ["item_name", "total_quantity", "total_weight", "total_revenue", "order_count"]
PRICE_COMPARISON_COLUMNS = [
    "item_name",
    "average_price",
    "total_revenue",
    "total_weight",
    "order_count",
]
CONTRIBUTION_COLUMNS = ["item_name", "revenue", "percentage"]
CUT_TYPE_COLUMNS = ["cut_type", "quantity", "revenue"]


def _empty(columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame(columns=columns)


def _top(df: pd.DataFrame, by: str, top_n: Optional[int]) -> pd.DataFrame:
    # Stable sort keeps first-seen order among ties
    df = df.sort_values(by, ascending=False, kind="stable").reset_index(drop=True)
    if top_n is not None:
        df = df.head(top_n)
    return df


def most_sold_items(data: OrdersOrFrame, top_n: Optional[int] = DEFAULT_TOP_N) -> pd.DataFrame:
    """Best-selling items by weight.

    Args:
        data: Reconciled orders or their item-line table.
        top_n: Number of rows to keep; None keeps all.

    Returns:
        DataFrame with MOST_SOLD_COLUMNS, one row per canonical item name,
        sorted by ``total_weight`` descending. ``order_count`` counts distinct
        orders containing the item.
    """
    lines = as_item_lines(data)
    if lines.empty:
        return _empty(MOST_SOLD_COLUMNS)

    grouped = lines.groupby("canonical_name", sort=False).agg(
        total_quantity=("quantity", "sum"),
        total_weight=("weight_kg", "sum"),
        total_revenue=("revenue", "sum"),
        order_count=("order_key", "nunique"),
    )
    grouped = grouped.reset_index().rename(columns={"canonical_name": "item_name"})
    return _top(grouped[MOST_SOLD_COLUMNS], "total_weight", top_n)


def price_comparison(data: OrdersOrFrame, top_n: Optional[int] = DEFAULT_TOP_N) -> pd.DataFrame:
    """Realized price per kilogram for each item.

    ``average_price`` is total revenue over total weight. Items with no weight
    (or no positive average) are left out. ``order_count`` is the number of
    item lines. Sorted by ``total_revenue`` descending.
    """
    lines = as_item_lines(data)
    if lines.empty:
        return _empty(PRICE_COMPARISON_COLUMNS)

    grouped = lines.groupby("canonical_name", sort=False).agg(
        total_revenue=("revenue", "sum"),
        total_weight=("weight_kg", "sum"),
        order_count=("order_key", "size"),
    )
    grouped = grouped[grouped["total_weight"] > 0].copy()
    grouped["average_price"] = grouped["total_revenue"] / grouped["total_weight"]
    grouped = grouped[grouped["average_price"] > 0]
    if grouped.empty:
        return _empty(PRICE_COMPARISON_COLUMNS)

    grouped = grouped.reset_index().rename(columns={"canonical_name": "item_name"})
    return _top(grouped[PRICE_COMPARISON_COLUMNS], "total_revenue", top_n)


def item_revenue_contribution(
    data: OrdersOrFrame, top_n: Optional[int] = DEFAULT_TOP_N
) -> pd.DataFrame:
    """Revenue per item and its share of all item revenue, in percent.

    Percentages are computed against the total over every item, before the
    ``top_n`` cut; they are 0 when the total is 0.
    """
    lines = as_item_lines(data)
    if lines.empty:
        return _empty(CONTRIBUTION_COLUMNS)

    grouped = lines.groupby("canonical_name", sort=False)["revenue"].sum().reset_index()
    grouped = grouped.rename(columns={"canonical_name": "item_name"})
    total = grouped["revenue"].sum()
    grouped["percentage"] = grouped["revenue"] / total * 100 if total > 0 else 0.0
    return _top(grouped[CONTRIBUTION_COLUMNS], "revenue", top_n)


def cut_type_breakdown(
    data: OrdersOrFrame,
    vendor: Optional[str],
    registry: ButcherRegistry = DEFAULT_REGISTRY,
) -> pd.DataFrame:
    """Quantity and revenue per requested cut type.

    Only meaningful for a single meat butcher: for no vendor, "all", an
    unknown vendor or a non-meat vendor the result is empty.

    Returns:
        DataFrame with CUT_TYPE_COLUMNS sorted by ``quantity`` descending.
    """
    if is_all_vendors(vendor) or registry.butcher_type(vendor) != "meat":
        return _empty(CUT_TYPE_COLUMNS)

    lines = as_item_lines(data)
    if lines.empty:
        return _empty(CUT_TYPE_COLUMNS)

    with_cut = lines[lines["cut_type"].notna() & (lines["cut_type"] != "")]
    if with_cut.empty:
        return _empty(CUT_TYPE_COLUMNS)

    grouped = with_cut.groupby("cut_type", sort=False).agg(
        quantity=("quantity", "sum"),
        revenue=("revenue", "sum"),
    )
    return _top(grouped.reset_index()[CUT_TYPE_COLUMNS], "quantity", None)
