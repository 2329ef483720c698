"""Butcher Core - order reconciliation and revenue attribution for butcher stalls.

This package turns the loosely structured orders recorded by independently
run meat and fish stalls into reconciled, vendor-attributed analytics:

- **Normalization**: canonical item names, kilogram weights, tolerant parsing
- **Attribution**: per-item revenue, commission and markup rates
- **Reconciliation**: vendor/date filtering and duplicate removal
- **Analytics**: aggregate views as pandas DataFrames

Module Structure:
    butcher_core.items: Canonical names, categories and weight parsing
    butcher_core.models: Order and OrderItem records
    butcher_core.config: Butcher registry (types, categories, rates)
    butcher_core.rates: Commission/markup rate resolution
    butcher_core.revenue: Per-item revenue resolution and price-based fallback
    butcher_core.orders: Time windows, reconciliation, CSV export
    butcher_core.analytics: Aggregate views and the run_analytics entry point

Quick Start:
    >>> from butcher_core import AnalyticsConfig, TimeWindow, load_orders, run_analytics
    >>>
    >>> orders = load_orders("orders.json")
    >>> config = AnalyticsConfig(vendor="kak", window=TimeWindow.this_week())
    >>> result = run_analytics(orders, config)
    >>> print(result.most_sold.head())
"""

__version__ = "0.1.0"

from butcher_core.analytics import AnalyticsConfig, AnalyticsResult, RejectionPolicy, run_analytics
from butcher_core.config import DEFAULT_REGISTRY, ButcherConfig, ButcherRegistry
from butcher_core.exceptions import (
    ButcherAPIError,
    ConfigError,
    DataQualityError,
    PriceLookupError,
)
from butcher_core.items import canonical_name, to_kilograms
from butcher_core.models import Order, OrderItem, load_orders, parse_orders
from butcher_core.orders import TimeWindow, export_orders_csv, reconcile
from butcher_core.rates import RateResolver
from butcher_core.revenue import item_revenue

__all__ = [
    "AnalyticsConfig",
    "AnalyticsResult",
    "ButcherAPIError",
    "ButcherConfig",
    "ButcherRegistry",
    "ConfigError",
    "DEFAULT_REGISTRY",
    "DataQualityError",
    "Order",
    "OrderItem",
    "PriceLookupError",
    "RateResolver",
    "RejectionPolicy",
    "TimeWindow",
    "__version__",
    "canonical_name",
    "export_orders_csv",
    "item_revenue",
    "load_orders",
    "parse_orders",
    "reconcile",
    "run_analytics",
    "to_kilograms",
]
