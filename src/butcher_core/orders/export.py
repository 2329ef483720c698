"""CSV export of reconciled orders.

One row per order, every field double-quoted. The export only renders text;
writing it somewhere is the caller's business.
"""

from __future__ import annotations

import csv
import logging
from typing import Any, Iterable, Optional

import pandas as pd

from butcher_core.config import DEFAULT_REGISTRY, ButcherRegistry
from butcher_core.items.names import canonical_name
from butcher_core.models import Order

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Order ID",
    "Butcher",
    "Customer",
    "Items",
    "Status",
    "Order Time",
    "Prep Time (min)",
    "Weight/Quantity",
    "Revenue",
    "Address",
]

ORDER_TIME_FORMAT = "%d/%m/%Y %H:%M"
ORDER_ID_PREFIX = "ORD-"


def format_number(value: Optional[float]) -> str:
    """Render a number the way the dashboards print it: 2.0 -> "2", 2.5 -> "2.5"."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def export_order_id(order: Order) -> str:
    """Export identifier: the order id without its "ORD-" prefix, then the butcher id."""
    return f"{order.order_id.replace(ORDER_ID_PREFIX, '', 1)}-{order.butcher_id or ''}"


def describe_items(order: Order) -> str:
    """Items as "Mackerel (1.5kg); Chicken Leg (2kg)"."""
    return "; ".join(
        f"{canonical_name(item.name)} ({format_number(item.quantity)}{item.unit})"
        for item in order.items
    )


def _export_row(order: Order, registry: ButcherRegistry) -> dict[str, Any]:
    return {
        "Order ID": export_order_id(order),
        "Butcher": order.butcher_name or registry.butcher_name(order.butcher_id) or "",
        "Customer": order.customer_name or "",
        "Items": describe_items(order),
        "Status": order.status,
        "Order Time": order.order_time.strftime(ORDER_TIME_FORMAT),
        "Prep Time (min)": format_number(order.completion_time or None),
        "Weight/Quantity": (
            f"{format_number(order.picked_weight)} kg" if order.picked_weight else ""
        ),
        "Revenue": format_number(order.revenue or None),
        "Address": order.address or "",
    }


def orders_to_frame(
    orders: Iterable[Order], registry: ButcherRegistry = DEFAULT_REGISTRY
) -> pd.DataFrame:
    """Build the export table, all values rendered as strings.

    Args:
        orders: Orders in the order they should appear (normally reconciled).
        registry: Used to resolve butcher names missing from the records.

    Returns:
        DataFrame with EXPORT_COLUMNS; empty (with those columns) for no orders.
    """
    rows = [_export_row(order, registry) for order in orders]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS, dtype=object)


def export_orders_csv(
    orders: Iterable[Order], registry: ButcherRegistry = DEFAULT_REGISTRY
) -> str:
    """Render orders as CSV text with every field quoted.

    Examples:
        >>> export_orders_csv([]).splitlines()[0].split(",")[0]
        '"Order ID"'
    """
    df = orders_to_frame(orders, registry)
    logger.info("Exporting %d order(s) to CSV", len(df))
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
