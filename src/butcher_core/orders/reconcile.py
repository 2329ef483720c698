"""Order filtering and deduplication.

Orders are aggregated from several stall sheets, and the same submission can
appear more than once. Reconciliation narrows the set to one vendor and one
date window, keeps the first copy of every ``(butcher_id, order_id)`` pair and
returns the survivors newest first.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from butcher_core.models import Order
from butcher_core.orders.window import TimeWindow

logger = logging.getLogger(__name__)

ALL_VENDORS = "all"


def is_all_vendors(vendor: Optional[str]) -> bool:
    """True when ``vendor`` selects every butcher (None, "" or "all")."""
    return not vendor or vendor == ALL_VENDORS


def filter_by_vendor(orders: Iterable[Order], vendor: Optional[str]) -> list[Order]:
    """Keep orders whose ``butcher_id`` equals ``vendor`` exactly."""
    if is_all_vendors(vendor):
        return list(orders)
    return [order for order in orders if order.butcher_id == vendor]


def filter_by_window(
    orders: Iterable[Order], window: TimeWindow, now: Optional[datetime] = None
) -> list[Order]:
    """Keep orders placed on a day inside ``window``."""
    bounds = window.bounds(now)
    if bounds is None:
        return list(orders)
    first, last = bounds
    return [order for order in orders if first <= order.order_time.date() <= last]


def deduplicate(orders: Iterable[Order]) -> list[Order]:
    """Drop repeated ``(butcher_id, order_id)`` pairs; the first one seen wins."""
    seen: set[str] = set()
    unique: list[Order] = []
    for order in orders:
        if order.key in seen:
            logger.debug("Dropping duplicate order %s", order.key)
            continue
        seen.add(order.key)
        unique.append(order)
    return unique


def reconcile(
    orders: Iterable[Order],
    vendor: Optional[str] = None,
    window: TimeWindow = TimeWindow.all(),
    *,
    now: Optional[datetime] = None,
) -> list[Order]:
    """Filter, deduplicate and sort orders.

    Args:
        orders: Orders in arrival order.
        vendor: Butcher id to keep; None, "" or "all" keeps every butcher.
        window: Date window (inclusive, day granularity).
        now: Reference time for relative windows. Defaults to the current time.

    Returns:
        Unique orders sorted by ``order_time`` descending. Orders with equal
        times keep their relative input order.

    Examples:
        >>> reconcile([])
        []
        >>> reconcile(orders, vendor="kak", window=TimeWindow.this_week())  # doctest: +SKIP
    """
    orders = list(orders)
    filtered = filter_by_window(filter_by_vendor(orders, vendor), window, now)
    unique = deduplicate(filtered)
    result = sorted(unique, key=lambda order: order.order_time, reverse=True)

    logger.info(
        "Reconciled %d order(s) to %d (vendor=%s, window=%s, duplicates=%d)",
        len(orders),
        len(result),
        vendor or ALL_VENDORS,
        window,
        len(filtered) - len(unique),
    )
    return result
