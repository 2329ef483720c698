"""Per-item revenue resolution.

``item_revenues`` is keyed inconsistently upstream: sometimes by canonical
name, sometimes by the raw three-language label, sometimes as
``"{name}_{size}"``. Resolution is an ordered tuple of strategies, each a
pure ``(order, item) -> float | None``; the first non-None answer wins.

Order of precedence:
    1. canonical-name key
    2. raw-name key
    3. any key with the same canonical name
    4. size-qualified key (canonical, then raw)
    5. proportional allocation of the order revenue, only when the order has
       no ``item_revenues`` at all
    6. 0
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from butcher_core.items.names import canonical_name
from butcher_core.models import Order, OrderItem
from butcher_core.revenue.allocation import allocated_revenue

logger = logging.getLogger(__name__)

RevenueStrategy = Callable[[Order, OrderItem], Optional[float]]


def _by_canonical_key(order: Order, item: OrderItem) -> Optional[float]:
    if order.item_revenues is None:
        return None
    return order.item_revenues.get(canonical_name(item.name))


def _by_raw_key(order: Order, item: OrderItem) -> Optional[float]:
    if order.item_revenues is None:
        return None
    return order.item_revenues.get(item.name)


def _by_canonical_scan(order: Order, item: OrderItem) -> Optional[float]:
    if order.item_revenues is None:
        return None
    name = canonical_name(item.name)
    for key, value in order.item_revenues.items():
        if canonical_name(key) == name:
            return value
    return None


def _by_size_key(order: Order, item: OrderItem) -> Optional[float]:
    if order.item_revenues is None or not item.size:
        return None
    for key in (f"{canonical_name(item.name)}_{item.size}", f"{item.name}_{item.size}"):
        if key in order.item_revenues:
            return order.item_revenues[key]
    return None


def _by_allocation(order: Order, item: OrderItem) -> Optional[float]:
    if order.item_revenues is not None:
        return None
    return allocated_revenue(order_revenue(order), order, item)


REVENUE_STRATEGIES: tuple[RevenueStrategy, ...] = (
    _by_canonical_key,
    _by_raw_key,
    _by_canonical_scan,
    _by_size_key,
    _by_allocation,
)


def order_revenue(order: Order) -> float:
    """Order-level revenue: ``revenue``, else the sum of ``item_revenues``, else 0."""
    if order.revenue:
        return order.revenue
    if order.item_revenues:
        return sum(order.item_revenues.values())
    return 0.0


def recorded_order_revenue(order: Order) -> float:
    """Order revenue as the dashboards report it.

    Item revenues are the authoritative breakdown, so their sum wins over the
    order-level figure; orders with neither contribute 0.
    """
    if order.item_revenues:
        return sum(order.item_revenues.values())
    return order.revenue or 0.0


def resolve_item_revenue(order: Order, item: OrderItem) -> float:
    """Revenue attributable to one specific item of ``order``."""
    for strategy in REVENUE_STRATEGIES:
        value = strategy(order, item)
        if value is not None:
            return value
    logger.debug("No revenue recorded for %r in order %s", item.name, order.key)
    return 0.0


def item_revenue(order: Order, item_name: str) -> float:
    """Revenue attributable to the item named ``item_name`` in ``order``.

    Resolves against the first item whose raw name matches; when no item of
    that name exists only the key-based strategies apply.

    Examples:
        >>> from datetime import datetime
        >>> order = Order(
        ...     order_id="A", order_time=datetime(2025, 1, 15, 10), butcher_id="kak",
        ...     items=(OrderItem("Ayala - Mackerel - അയല", 1.0),),
        ...     item_revenues={"Mackerel": 180.0},
        ... )
        >>> item_revenue(order, "Ayala - Mackerel - അയല")
        180.0
    """
    item = order.find_item(item_name)
    if item is None:
        item = OrderItem(name=item_name, quantity=0.0)
    return resolve_item_revenue(order, item)
