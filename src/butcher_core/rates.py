"""Commission and markup rate resolution.

Rates are decimals stored per butcher and category display name. Lookups
never fail: an unknown butcher or category resolves to a documented default
and the miss is logged (and kept on ``RateResolver.diagnostics``) so that
misconfigured stalls show up without blocking aggregation.

Defaults:
    - commission: 0 for an unknown butcher or category (logged as an error)
    - markup: 0.05 for an unknown butcher; for an unknown category 0.00 when
      the category mentions beef or mutton, else 0.05
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import pandas as pd

from butcher_core.cleaning import leading_number
from butcher_core.config import DEFAULT_REGISTRY, ButcherRegistry

logger = logging.getLogger(__name__)

DEFAULT_MARKUP_RATE = 0.05
ZERO_MARKUP_KEYWORDS = ("beef", "mutton")


@dataclass(frozen=True)
class RateDiagnostic:
    """A rate lookup that fell back to a default."""

    butcher_id: str
    category: str
    kind: str  # "commission" or "markup"
    reason: str  # "unknown_butcher" or "unknown_category"
    value: float


def _match_rate(rates: Mapping[str, float], category: str) -> Optional[float]:
    """Exact key match first, then case-insensitive."""
    if category in rates:
        return rates[category]
    category_lower = category.lower()
    for key, value in rates.items():
        if key.lower() == category_lower:
            return value
    return None


class RateResolver:
    """Resolve commission and markup rates against a ButcherRegistry.

    Example:
        >>> resolver = RateResolver()
        >>> resolver.commission_rate("kak", "sea water fish")
        0.07
        >>> resolver.markup_rate("usaj", "Beef")
        0.0
        >>> resolver.markup_rate("nobody", "Chicken")
        0.05

    """

    def __init__(self, registry: ButcherRegistry = DEFAULT_REGISTRY) -> None:
        self.registry = registry
        self.diagnostics: list[RateDiagnostic] = []

    def _report(self, diagnostic: RateDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def commission_rate(self, butcher_id: str, category: str) -> float:
        """Commission rate for a butcher and category; 0 when unconfigured."""
        config = self.registry.get(butcher_id)
        if config is None:
            logger.error(
                "Butcher config not found for '%s'. Commission rate set to 0.", butcher_id
            )
            self._report(RateDiagnostic(butcher_id, category, "commission", "unknown_butcher", 0.0))
            return 0.0

        rate = _match_rate(config.commission_rates, category)
        if rate is None:
            logger.error(
                "Commission rate not found for butcher='%s', category='%s'. "
                "Revenue will be 0 until the rate is configured.",
                butcher_id,
                category,
            )
            self._report(RateDiagnostic(butcher_id, category, "commission", "unknown_category", 0.0))
            return 0.0
        return rate

    def markup_rate(self, butcher_id: str, category: str) -> float:
        """Markup rate for a butcher and category, with category-based defaults."""
        config = self.registry.get(butcher_id)
        if config is None:
            self._report(
                RateDiagnostic(butcher_id, category, "markup", "unknown_butcher", DEFAULT_MARKUP_RATE)
            )
            return DEFAULT_MARKUP_RATE

        rate = _match_rate(config.markup_rates, category)
        if rate is not None:
            return rate

        category_lower = category.lower()
        default = 0.0 if any(k in category_lower for k in ZERO_MARKUP_KEYWORDS) else DEFAULT_MARKUP_RATE
        logger.debug(
            "Markup rate not configured for butcher='%s', category='%s'; using %s",
            butcher_id,
            category,
            default,
        )
        self._report(RateDiagnostic(butcher_id, category, "markup", "unknown_category", default))
        return default

    def categories(self, butcher_id: str) -> list[str]:
        """Category display names for a butcher ([] when unknown)."""
        return self.registry.categories(butcher_id)

    def butcher_type(self, butcher_id: str) -> Optional[str]:
        return self.registry.butcher_type(butcher_id)


def commission_rate(
    butcher_id: str, category: str, registry: ButcherRegistry = DEFAULT_REGISTRY
) -> float:
    """Shortcut for ``RateResolver(registry).commission_rate(...)``."""
    return RateResolver(registry).commission_rate(butcher_id, category)


def markup_rate(
    butcher_id: str, category: str, registry: ButcherRegistry = DEFAULT_REGISTRY
) -> float:
    """Shortcut for ``RateResolver(registry).markup_rate(...)``."""
    return RateResolver(registry).markup_rate(butcher_id, category)


def validate_rate(rate: float) -> bool:
    """True when ``rate`` is a valid decimal rate (between 0% and 100%)."""
    return 0 <= rate <= 1


def format_rate(rate: float) -> str:
    """Format a decimal rate for display.

    Examples:
        >>> format_rate(0.07)
        '7.0%'
    """
    return f"{rate * 100:.1f}%"


def parse_rate(text: Any) -> float:
    """Parse a percentage string into a decimal rate; unparsable input gives 0.

    Examples:
        >>> parse_rate("7")
        0.07
        >>> parse_rate("n/a")
        0.0
    """
    value = leading_number(text)
    if value is None:
        return 0.0
    return value / 100


def item_earnings(weight: float, purchase_price: float, commission: float) -> float:
    """Butcher earnings for one item: price x weight less commission, to 2 places."""
    base = weight * purchase_price
    return round(base * (1 - commission), 2)


def selling_price(purchase_price: float, markup: float) -> int:
    """Customer-facing price: purchase price plus markup, rounded to whole units."""
    return round(purchase_price * (1 + markup))


def default_rate_table(registry: ButcherRegistry = DEFAULT_REGISTRY) -> pd.DataFrame:
    """One row per butcher x assigned category with its commission and markup.

    Returns:
        DataFrame with columns: butcher_id, butcher_name, category,
        commission_rate, markup_rate.
    """
    resolver = RateResolver(registry)
    rows = []
    for butcher_id in registry:
        for category in resolver.categories(butcher_id):
            rows.append(
                {
                    "butcher_id": butcher_id,
                    "butcher_name": registry.butcher_name(butcher_id),
                    "category": category,
                    "commission_rate": resolver.commission_rate(butcher_id, category),
                    "markup_rate": resolver.markup_rate(butcher_id, category),
                }
            )
    columns = ["butcher_id", "butcher_name", "category", "commission_rate", "markup_rate"]
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)
