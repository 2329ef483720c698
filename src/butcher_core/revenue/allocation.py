"""Proportional allocation of order-level totals across line items.

When a stall records only an order-level revenue or weight, each item gets
a share proportional to its quantity. These functions are pure math; the
async price lookup that sometimes feeds them lives in ``revenue.pricing``.
"""

from __future__ import annotations

from typing import Sequence

from butcher_core.models import Order, OrderItem


def allocation_share(quantity: float, total_quantity: float) -> float:
    """Fraction of an order-level total attributable to one item.

    Returns 0 when the total quantity is not positive.

    Examples:
        >>> allocation_share(2, 4)
        0.5
        >>> allocation_share(3, 0)
        0.0
    """
    if total_quantity <= 0:
        return 0.0
    return quantity / total_quantity


def allocate(total: float, quantities: Sequence[float]) -> list[float]:
    """Split ``total`` across quantities in proportion to each quantity.

    The parts sum to ``total`` (up to floating point) whenever the quantities
    sum to a positive number; otherwise every part is 0.

    Examples:
        >>> allocate(100, [2, 2])
        [50.0, 50.0]
        >>> allocate(100, [0, 0])
        [0.0, 0.0]
    """
    quantity_sum = sum(quantities)
    return [total * allocation_share(q, quantity_sum) for q in quantities]


def item_share(order: Order, item: OrderItem) -> float:
    """Quantity share of ``item`` within ``order``."""
    return allocation_share(item.quantity, order.total_quantity)


def allocated_weight(order_weight: float, order: Order, item: OrderItem) -> float:
    """Portion of the order weight attributable to ``item``."""
    return order_weight * item_share(order, item)


def allocated_revenue(order_revenue: float, order: Order, item: OrderItem) -> float:
    """Portion of the order revenue attributable to ``item``."""
    return order_revenue * item_share(order, item)


def priced_revenue(weight: float, purchase_price: float) -> float:
    """Revenue of an item valued at its purchase price; non-positive prices give 0."""
    if purchase_price <= 0:
        return 0.0
    return weight * purchase_price
