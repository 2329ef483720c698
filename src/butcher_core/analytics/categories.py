"""Revenue by product category."""

from __future__ import annotations

import pandas as pd

from butcher_core.analytics.lines import OrdersOrFrame, as_item_lines

CATEGORY_COLUMNS = ["category", "revenue", "percentage"]


def revenue_by_category(data: OrdersOrFrame) -> pd.DataFrame:
    """Sum item revenue per category.

    Items carry their recorded category, or one inferred from keywords in the
    item name. The revenue column sums to the total item revenue of the input.

    Args:
        data: Reconciled orders or their item-line table.

    Returns:
        DataFrame with CATEGORY_COLUMNS sorted by revenue descending;
        ``percentage`` is 0 for every row when total revenue is 0.

    Examples:
        >>> revenue_by_category([]).columns.tolist()
        ['category', 'revenue', 'percentage']
    """
    lines = as_item_lines(data)
    if lines.empty:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    grouped = lines.groupby("category", sort=False)["revenue"].sum().reset_index()
    total = grouped["revenue"].sum()
    grouped["percentage"] = grouped["revenue"] / total * 100 if total > 0 else 0.0
    grouped = grouped.sort_values("revenue", ascending=False, kind="stable")
    return grouped[CATEGORY_COLUMNS].reset_index(drop=True)
