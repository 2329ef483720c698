"""Fact tables for the analytics views.

Two grains:

- **item line** (``build_item_lines``): one row per order item, with the
  item's canonical name, category, resolved weight (kg) and resolved revenue.
- **order** (``build_order_facts``): one row per order, with the order-level
  revenue, recorded kilograms and completion time.

Every view in this package is a fold over one of these tables, so the
per-item resolution logic runs once per reconciliation.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd

from butcher_core.items.names import canonical_name, infer_category
from butcher_core.items.weights import (
    item_weight_kg,
    preparing_weight,
    recorded_order_kilograms,
)
from butcher_core.models import Order
from butcher_core.revenue.resolver import recorded_order_revenue, resolve_item_revenue

logger = logging.getLogger(__name__)

ITEM_LINE_COLUMNS = [
    "order_key",
    "order_id",
    "butcher_id",
    "order_time",
    "status",
    "item_name",
    "canonical_name",
    "category",
    "quantity",
    "unit",
    "size",
    "cut_type",
    "rejected",
    "weight_kg",
    "revenue",
]

ORDER_FACT_COLUMNS = [
    "order_key",
    "order_id",
    "butcher_id",
    "order_time",
    "date",
    "hour",
    "status",
    "revenue",
    "kilograms",
    "preparing_weight",
    "completion_minutes",
    "rejection_reason",
    "item_count",
]


def completion_minutes(order: Order) -> Optional[float]:
    """Minutes an order took to prepare.

    The recorded ``completion_time`` wins; otherwise whole minutes between the
    preparation start and end times (floored); otherwise None.
    """
    if order.completion_time:
        return order.completion_time
    if order.preparation_start_time and order.preparation_end_time:
        delta = order.preparation_end_time - order.preparation_start_time
        return float(math.floor(delta.total_seconds() / 60))
    return None


def build_item_lines(orders: Iterable[Order]) -> pd.DataFrame:
    """Flatten orders into one row per item.

    Args:
        orders: Reconciled orders.

    Returns:
        DataFrame with ITEM_LINE_COLUMNS. ``category`` is the recorded item
        category, else the keyword-inferred one. ``weight_kg`` and ``revenue``
        are always numeric (0 when nothing is recorded).
    """
    rows = []
    for order in orders:
        for item in order.items:
            rows.append(
                {
                    "order_key": order.key,
                    "order_id": order.order_id,
                    "butcher_id": order.butcher_id,
                    "order_time": order.order_time,
                    "status": order.status,
                    "item_name": item.name,
                    "canonical_name": canonical_name(item.name),
                    "category": item.category or infer_category(item.name),
                    "quantity": item.quantity,
                    "unit": item.unit,
                    "size": item.size,
                    "cut_type": item.cut_type,
                    "rejected": item.rejected,
                    "weight_kg": item_weight_kg(order, item),
                    "revenue": resolve_item_revenue(order, item),
                }
            )

    df = pd.DataFrame(rows, columns=ITEM_LINE_COLUMNS)
    for col in ("quantity", "weight_kg", "revenue"):
        df[col] = df[col].astype(float)
    logger.debug("Built %d item line(s)", len(df))
    return df


def build_order_facts(orders: Iterable[Order]) -> pd.DataFrame:
    """One row per order with its order-level measures.

    ``revenue`` is the sum of item revenues when recorded, else the order
    revenue, else 0. ``kilograms`` sums every recorded item weight and
    quantity; ``preparing_weight`` is the weight the stall prepared (see
    ``items.weights.preparing_weight``). ``completion_minutes`` is NaN when
    unknown.
    """
    rows = []
    for order in orders:
        minutes = completion_minutes(order)
        rows.append(
            {
                "order_key": order.key,
                "order_id": order.order_id,
                "butcher_id": order.butcher_id,
                "order_time": order.order_time,
                "date": order.order_time.date(),
                "hour": order.order_time.hour,
                "status": order.status,
                "revenue": recorded_order_revenue(order),
                "kilograms": recorded_order_kilograms(order),
                "preparing_weight": preparing_weight(order),
                "completion_minutes": np.nan if minutes is None else minutes,
                "rejection_reason": order.rejection_reason,
                "item_count": len(order.items),
            }
        )

    df = pd.DataFrame(rows, columns=ORDER_FACT_COLUMNS)
    for col in ("revenue", "kilograms", "preparing_weight", "completion_minutes"):
        df[col] = df[col].astype(float)
    df["hour"] = df["hour"].astype(int)
    df["item_count"] = df["item_count"].astype(int)
    return df


OrdersOrFrame = Union[Iterable[Order], pd.DataFrame]


def as_item_lines(data: OrdersOrFrame) -> pd.DataFrame:
    """Accept either orders or an already built item-line table."""
    if isinstance(data, pd.DataFrame):
        return data
    return build_item_lines(data)


def as_order_facts(data: OrdersOrFrame) -> pd.DataFrame:
    """Accept either orders or an already built order fact table."""
    if isinstance(data, pd.DataFrame):
        return data
    return build_order_facts(data)
