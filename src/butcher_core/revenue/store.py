"""Result store for asynchronous item-stats recomputation.

Every filter change triggers a recomputation, and recomputations suspend on
price lookups, so several can be in flight at once. Each refresh takes a
token from a monotonically increasing counter; a completion is committed only
if its token is still the latest one issued, so a slow, superseded run can
never overwrite a newer result. A refresh for an input that is already being
computed joins the running task instead of starting another; it still takes
its own token, so the shared result is committed if that refresh is the
latest.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from butcher_core.models import Order
from butcher_core.revenue.pricing import ItemStats, PriceLookup, compute_item_stats

logger = logging.getLogger(__name__)

InputKey = tuple[str, ...]


def input_key(orders: Iterable[Order]) -> InputKey:
    """Identity of an order set: the composite keys in order."""
    return tuple(order.key for order in orders)


class ItemStatsStore:
    """Holds the latest committed item stats.

    Example:
        >>> store = ItemStatsStore(lookup)                # doctest: +SKIP
        >>> await store.refresh(todays_orders)            # doctest: +SKIP
        >>> store.stats["chicken leg"].total_revenue      # doctest: +SKIP
        340.0

    """

    def __init__(self, lookup: PriceLookup) -> None:
        self.lookup = lookup
        self.stats: dict[str, ItemStats] = {}
        self.committed_token = 0
        self._latest_token = 0
        self._inflight: dict[InputKey, asyncio.Task[dict[str, ItemStats]]] = {}

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def is_computing(self, orders: Optional[Iterable[Order]] = None) -> bool:
        """True while any refresh (or the refresh for ``orders``) is running."""
        if orders is None:
            return bool(self._inflight)
        return input_key(orders) in self._inflight

    async def refresh(self, orders: Iterable[Order]) -> dict[str, ItemStats]:
        """Recompute stats for ``orders`` and commit them if still current.

        Returns:
            The stats computed for ``orders``, whether or not they were
            committed.
        """
        orders = list(orders)
        key = input_key(orders)
        self._latest_token += 1
        token = self._latest_token

        task = self._inflight.get(key)
        if task is not None:
            logger.debug("Joining in-flight item stats computation (token %d)", token)
            result = await asyncio.shield(task)
        else:
            task = asyncio.ensure_future(self._compute(orders))
            self._inflight[key] = task
            try:
                result = await asyncio.shield(task)
            finally:
                if self._inflight.get(key) is task:
                    del self._inflight[key]

        self._commit(token, result)
        return result

    def _commit(self, token: int, result: dict[str, ItemStats]) -> None:
        if token != self._latest_token:
            logger.debug(
                "Discarded stale item stats (token %d, latest %d)", token, self._latest_token
            )
            return
        self.stats = result
        self.committed_token = token
        logger.debug("Committed item stats (token %d, %d item(s))", token, len(result))

    async def _compute(self, orders: list[Order]) -> dict[str, ItemStats]:
        if not orders:
            return {}
        return await compute_item_stats(orders, self.lookup)
