"""Revenue attribution for order line items.

- ``resolver``: synchronous, pure per-item revenue resolution
- ``allocation``: proportional split of order-level totals
- ``pricing``: async purchase-price fallback for orders with no revenue
- ``store``: generation-token result store for async recomputation

Example:
    >>> from butcher_core.revenue import item_revenue
    >>> revenue = item_revenue(order, "chicken leg")  # doctest: +SKIP
"""

from butcher_core.revenue.allocation import allocate, allocation_share
from butcher_core.revenue.pricing import (
    CachedPriceLookup,
    ItemStats,
    PriceLookup,
    PriceQuote,
    compute_item_stats,
)
from butcher_core.revenue.resolver import (
    item_revenue,
    order_revenue,
    recorded_order_revenue,
    resolve_item_revenue,
)
from butcher_core.revenue.store import ItemStatsStore

__all__ = [
    "CachedPriceLookup",
    "ItemStats",
    "ItemStatsStore",
    "PriceLookup",
    "PriceQuote",
    "allocate",
    "allocation_share",
    "compute_item_stats",
    "item_revenue",
    "order_revenue",
    "recorded_order_revenue",
    "resolve_item_revenue",
]
