"""Order and order-item records.

Orders arrive from the sheet-backed ingestion layer as loosely typed dicts
with camelCase keys and no guarantee that optional fields are present.
``Order.from_record`` turns one of those into a typed, immutable record;
everything downstream works with these dataclasses only.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

from butcher_core.cleaning import is_missing, to_datetime, to_number, to_optional_number
from butcher_core.exceptions import DataQualityError

logger = logging.getLogger(__name__)

UNKNOWN_BUTCHER = "unknown"


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present, non-missing value among ``keys``."""
    for key in keys:
        if key in record and not is_missing(record[key]):
            return record[key]
    return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _text_map(value: Any) -> Optional[dict[str, str]]:
    """Normalize an itemWeights/itemQuantities mapping; empty -> None."""
    if not isinstance(value, Mapping) or not value:
        return None
    return {str(k): "" if is_missing(v) else str(v) for k, v in value.items()}


def _number_map(value: Any) -> Optional[dict[str, float]]:
    """Normalize an itemRevenues mapping; empty -> None, bad numbers -> 0."""
    if not isinstance(value, Mapping) or not value:
        return None
    return {str(k): to_number(v) for k, v in value.items()}


@dataclass(frozen=True)
class OrderItem:
    """One line item of an order.

    Attributes:
        name: Raw item label, possibly a "Local - English - Script" composite.
        quantity: Ordered quantity in ``unit``.
        unit: "kg", "g", or a count unit such as "nos".
        size: Optional size variant ("small", "medium", "big", "default").
        cut_type: Optional cut requested for meat items.
        category: Optional category recorded upstream.
        rejected: True when the stall rejected this single item.
    """

    name: str
    quantity: float = 0.0
    unit: str = "kg"
    size: Optional[str] = None
    cut_type: Optional[str] = None
    category: Optional[str] = None
    rejected: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> OrderItem:
        """Build an OrderItem from an upstream dict (camelCase or snake_case keys)."""
        name = _pick(record, "name", "itemName", "item_name")
        return cls(
            name="" if name is None else str(name),
            quantity=to_number(_pick(record, "quantity", "qty")),
            unit=str(_pick(record, "unit") or "kg").strip().lower(),
            size=_optional_str(_pick(record, "size")),
            cut_type=_optional_str(_pick(record, "cutType", "cut_type")),
            category=_optional_str(_pick(record, "category")),
            rejected=bool(_pick(record, "rejected") or False),
        )


@dataclass(frozen=True)
class Order:
    """A single order placed with one butcher.

    Identity is ``(order_id, butcher_id)``; the same order id may legitimately
    exist at two different stalls.

    Attributes:
        order_id: Order identifier as recorded upstream (e.g. "ORD-2025-01-15-012").
        butcher_id: Vendor id the order is assigned to, if known.
        order_time: When the order was placed (naive local time).
        status: Raw status string ("new", "preparing", "completed", ...).
        items: Ordered line items.
        item_weights: Prepared weight strings per item name (fish stalls).
        item_quantities: Prepared quantity strings per item name (meat stalls).
        item_revenues: Butcher revenue per item name, raw or canonical keys.
        revenue: Order-level revenue, if recorded.
        picked_weight: Total weight picked for the order, in kg.
        completion_time: Preparation time in minutes, if recorded.
        preparation_start_time: When preparation started.
        preparation_end_time: When preparation finished.
        rejection_reason: Free-text reason for rejected orders.
        address: Delivery address.
        customer_name: Customer display name.
        butcher_name: Vendor display name carried on the record.
    """

    order_id: str
    order_time: datetime
    butcher_id: Optional[str] = None
    status: str = "new"
    items: tuple[OrderItem, ...] = ()
    item_weights: Optional[Mapping[str, str]] = None
    item_quantities: Optional[Mapping[str, str]] = None
    item_revenues: Optional[Mapping[str, float]] = None
    revenue: Optional[float] = None
    picked_weight: Optional[float] = None
    completion_time: Optional[float] = None
    preparation_start_time: Optional[datetime] = None
    preparation_end_time: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    address: Optional[str] = None
    customer_name: Optional[str] = None
    butcher_name: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def key(self) -> str:
        """Composite identity used for deduplication: ``"{butcher_id}-{order_id}"``."""
        return f"{self.butcher_id or UNKNOWN_BUTCHER}-{self.order_id}"

    @property
    def total_quantity(self) -> float:
        return sum(item.quantity for item in self.items)

    def find_item(self, item_name: str) -> Optional[OrderItem]:
        """Return the first item whose raw name equals ``item_name``."""
        for item in self.items:
            if item.name == item_name:
                return item
        return None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Order:
        """Build an Order from an upstream record.

        Args:
            record: Dict with camelCase keys as produced by the sheets layer
                (``id``, ``butcherId``, ``orderTime``, ``itemRevenues``, ...) or
                the snake_case field names of this class.

        Returns:
            Parsed Order. Optional fields that are absent, empty or
            unparsable become None.

        Raises:
            DataQualityError: If the record has no id, no parsable order time, or
                items that are not a list of records.
        """
        order_id = _pick(record, "id", "orderId", "order_id")
        if order_id is None or str(order_id).strip() == "":
            raise DataQualityError(f"Order record has no id: {dict(record)!r}")

        order_time = to_datetime(_pick(record, "orderTime", "order_time"))
        if order_time is None:
            raise DataQualityError(f"Order {order_id!r} has no parsable order time")

        raw_items = _pick(record, "items") or []
        if not isinstance(raw_items, (list, tuple)):
            raise DataQualityError(
                f"Order {order_id!r} has items of type {type(raw_items).__name__}, expected a list"
            )
        items = []
        for item in raw_items:
            if isinstance(item, OrderItem):
                items.append(item)
            elif isinstance(item, Mapping):
                items.append(OrderItem.from_record(item))
            else:
                raise DataQualityError(
                    f"Order {order_id!r} has an item that is not a record: {item!r}"
                )

        known = {
            "id", "orderId", "order_id", "butcherId", "butcher_id", "orderTime",
            "order_time", "status", "items", "itemWeights", "item_weights",
            "itemQuantities", "item_quantities", "itemRevenues", "item_revenues",
            "revenue", "pickedWeight", "picked_weight", "completionTime",
            "completion_time", "preparationStartTime", "preparation_start_time",
            "preparationEndTime", "preparation_end_time", "rejectionReason",
            "rejection_reason", "address", "customerName", "customer_name",
            "butcherName", "butcher_name",
        }

        return cls(
            order_id=str(order_id).strip(),
            order_time=order_time,
            butcher_id=_optional_str(_pick(record, "butcherId", "butcher_id")),
            status=str(_pick(record, "status") or "new"),
            items=tuple(items),
            item_weights=_text_map(_pick(record, "itemWeights", "item_weights")),
            item_quantities=_text_map(_pick(record, "itemQuantities", "item_quantities")),
            item_revenues=_number_map(_pick(record, "itemRevenues", "item_revenues")),
            revenue=to_optional_number(_pick(record, "revenue")),
            picked_weight=to_optional_number(_pick(record, "pickedWeight", "picked_weight")),
            completion_time=to_optional_number(_pick(record, "completionTime", "completion_time")),
            preparation_start_time=to_datetime(
                _pick(record, "preparationStartTime", "preparation_start_time")
            ),
            preparation_end_time=to_datetime(
                _pick(record, "preparationEndTime", "preparation_end_time")
            ),
            rejection_reason=_optional_str(_pick(record, "rejectionReason", "rejection_reason")),
            address=_optional_str(_pick(record, "address")),
            customer_name=_optional_str(_pick(record, "customerName", "customer_name")),
            butcher_name=_optional_str(_pick(record, "butcherName", "butcher_name")),
            extra={k: v for k, v in record.items() if k not in known},
        )


def parse_orders(records: list[Mapping[str, Any]], *, strict: bool = False) -> list[Order]:
    """Parse a list of upstream records, skipping the ones that cannot be parsed.

    Args:
        records: Raw order dicts.
        strict: If True, re-raise the first DataQualityError instead of skipping.

    Returns:
        Parsed orders in input order.
    """
    orders: list[Order] = []
    skipped = 0
    for record in records:
        try:
            orders.append(Order.from_record(record))
        except DataQualityError as e:
            if strict:
                raise
            skipped += 1
            logger.warning("Skipping order record: %s", e)
    if skipped:
        logger.info("Parsed %d order(s), skipped %d malformed record(s)", len(orders), skipped)
    return orders


def load_orders(path: str | Path, *, strict: bool = False) -> list[Order]:
    """Load orders from a JSON file containing an array of order records.

    Raises:
        DataQualityError: If the file does not contain a JSON array.
    """
    if isinstance(path, str):
        path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping) and isinstance(data.get("orders"), list):
        data = data["orders"]
    if not isinstance(data, list):
        raise DataQualityError(f"Expected a JSON array of orders in {path}")
    logger.info("Loaded %d order record(s) from %s", len(data), path)
    return parse_orders(data, strict=strict)
