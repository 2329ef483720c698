"""Purchase-price lookups for orders without any recorded revenue.

When neither ``revenue`` nor ``item_revenues`` is recorded, an order's
revenue is estimated from menu purchase prices: each item's allocated weight
times its purchase price. Prices come from an external, asynchronous price
service. Orders are processed one after another and, within an order, items
one after another; a failed lookup counts as price 0 for that item only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from butcher_core.items.weights import order_weight
from butcher_core.models import Order
from butcher_core.revenue.allocation import allocated_weight, item_share, priced_revenue

logger = logging.getLogger(__name__)

DEFAULT_SIZE = "default"
FALLBACK_BUTCHER = "usaj"


@dataclass(frozen=True)
class PriceQuote:
    """Purchase price of a menu item and the category it was found under."""

    price: float
    category: Optional[str] = None


class PriceLookup(Protocol):
    """Async source of purchase prices (the menu sheet, in production)."""

    async def get_purchase_price(
        self, butcher_id: str, item_name: str, size: str = DEFAULT_SIZE
    ) -> PriceQuote: ...


class CachedPriceLookup:
    """Memoize quotes per ``(butcher_id, item_name, size)``.

    Orders that share items trigger one lookup per distinct key. Failed
    lookups are not cached, so a later recomputation can retry them.
    """

    def __init__(self, inner: PriceLookup) -> None:
        self.inner = inner
        self._cache: dict[tuple[str, str, str], PriceQuote] = {}
        self.hits = 0
        self.misses = 0

    async def get_purchase_price(
        self, butcher_id: str, item_name: str, size: str = DEFAULT_SIZE
    ) -> PriceQuote:
        key = (butcher_id, item_name, size)
        cached = self._cache.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        quote = await self.inner.get_purchase_price(butcher_id, item_name, size)
        self._cache[key] = quote
        return quote

    def clear(self) -> None:
        self._cache.clear()


@dataclass
class ItemStats:
    """Running totals for one item name."""

    total_weight: float = 0.0
    total_revenue: float = 0.0
    count: int = 0


async def fetch_price(lookup: PriceLookup, butcher_id: str, item_name: str, size: str) -> float:
    """Look up one purchase price; service failures are logged and give 0."""
    try:
        quote = await lookup.get_purchase_price(butcher_id, item_name, size)
    except Exception as e:
        logger.warning(
            "Price lookup failed for butcher=%s item=%r size=%s: %s", butcher_id, item_name, size, e
        )
        return 0.0
    return quote.price if quote and quote.price else 0.0


async def estimate_order_revenue(order: Order, lookup: PriceLookup) -> float:
    """Order revenue, falling back to purchase-price valuation.

    Uses ``revenue`` when recorded, else the sum of ``item_revenues``, else
    values each item's allocated share of the order weight at its menu
    purchase price.
    """
    if order.revenue:
        return order.revenue
    if order.item_revenues is not None:
        return sum(order.item_revenues.values())

    weight = order_weight(order)
    butcher_id = order.butcher_id or FALLBACK_BUTCHER
    total = 0.0
    for item in order.items:
        price = await fetch_price(lookup, butcher_id, item.name, item.size or DEFAULT_SIZE)
        total += priced_revenue(allocated_weight(weight, order, item), price)
    return total


async def compute_item_stats(
    orders: Iterable[Order], lookup: PriceLookup
) -> dict[str, ItemStats]:
    """Per-item weight and revenue totals with price-based fallback.

    Each order's revenue (see ``estimate_order_revenue``) and weight are
    split across its items by quantity share.

    Returns:
        Mapping of raw item name to its accumulated ItemStats.
    """
    stats: dict[str, ItemStats] = {}
    processed = 0
    for order in orders:
        revenue = await estimate_order_revenue(order, lookup)
        weight = order_weight(order)
        for item in order.items:
            entry = stats.setdefault(item.name, ItemStats())
            share = item_share(order, item)
            entry.total_weight += weight * share
            entry.total_revenue += revenue * share
            entry.count += 1
        processed += 1
    logger.info("Computed item stats for %d item(s) over %d order(s)", len(stats), processed)
    return stats
