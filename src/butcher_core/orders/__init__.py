"""Order reconciliation: vendor/window filtering, deduplication and export."""

from butcher_core.orders.export import export_orders_csv, orders_to_frame
from butcher_core.orders.reconcile import (
    deduplicate,
    filter_by_vendor,
    filter_by_window,
    is_all_vendors,
    reconcile,
)
from butcher_core.orders.window import TimeWindow

__all__ = [
    "TimeWindow",
    "deduplicate",
    "export_orders_csv",
    "filter_by_vendor",
    "filter_by_window",
    "is_all_vendors",
    "orders_to_frame",
    "reconcile",
]
