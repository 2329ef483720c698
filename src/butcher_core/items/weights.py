"""Weight parsing and per-item weight resolution.

Stalls record prepared weights as free text: "1.5kg", "500g", "2", "2 kg",
and occasionally "rejected". Everything is converted to kilograms; anything
that is not a number counts as 0.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from butcher_core.cleaning import is_missing, leading_number
from butcher_core.items.names import canonical_name
from butcher_core.models import Order, OrderItem

KILOGRAM_TOKEN = "kg"
GRAM_TOKEN = "g"


def to_kilograms(text: Any) -> float:
    """Convert a weight/quantity string to kilograms.

    Args:
        text: Weight string such as "1.5kg", "500g" or "2". Numbers are
            accepted as-is (kilograms).

    Returns:
        Weight in kilograms; 0.0 for empty, missing or unparsable input.

    Examples:
        >>> to_kilograms("1.5kg")
        1.5
        >>> to_kilograms("500g")
        0.5
        >>> to_kilograms("abc")
        0.0
    """
    if is_missing(text):
        return 0.0
    normalized = str(text).lower().strip()
    if not normalized:
        return 0.0

    if KILOGRAM_TOKEN in normalized:
        value = leading_number(normalized.replace(KILOGRAM_TOKEN, ""))
        return value or 0.0
    if GRAM_TOKEN in normalized:
        value = leading_number(normalized.replace(GRAM_TOKEN, ""))
        return (value or 0.0) / 1000
    return leading_number(normalized) or 0.0


def quantity_to_kilograms(item: OrderItem) -> float:
    """Weight of an item from its ordered quantity alone.

    Quantities in kg are taken as-is; every other unit is read as grams.
    """
    if item.unit == KILOGRAM_TOKEN:
        return item.quantity
    return item.quantity / 1000


WeightStrategy = Callable[[Order, OrderItem], Optional[str]]


def _lookup(mapping: Optional[Mapping[str, str]], key: str) -> Optional[str]:
    if not mapping:
        return None
    value = mapping.get(key)
    return value or None


def _scan(mapping: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    if not mapping:
        return None
    for key, value in mapping.items():
        if value and (canonical_name(key) == name or key == name):
            return value
    return None


def _canonical_weight(order: Order, item: OrderItem) -> Optional[str]:
    return _lookup(order.item_weights, canonical_name(item.name))


def _canonical_quantity(order: Order, item: OrderItem) -> Optional[str]:
    return _lookup(order.item_quantities, canonical_name(item.name))


def _raw_weight(order: Order, item: OrderItem) -> Optional[str]:
    return _lookup(order.item_weights, item.name)


def _raw_quantity(order: Order, item: OrderItem) -> Optional[str]:
    return _lookup(order.item_quantities, item.name)


def _scanned_weight(order: Order, item: OrderItem) -> Optional[str]:
    return _scan(order.item_weights, canonical_name(item.name))


def _scanned_quantity(order: Order, item: OrderItem) -> Optional[str]:
    return _scan(order.item_quantities, canonical_name(item.name))


WEIGHT_STRATEGIES: tuple[WeightStrategy, ...] = (
    _canonical_weight,
    _canonical_quantity,
    _raw_weight,
    _raw_quantity,
    _scanned_weight,
    _scanned_quantity,
)


def recorded_item_weight(order: Order, item: OrderItem) -> Optional[str]:
    """Return the recorded weight string for an item, or None if none is recorded."""
    for strategy in WEIGHT_STRATEGIES:
        value = strategy(order, item)
        if value is not None:
            return value
    return None


def item_weight_kg(order: Order, item: OrderItem) -> float:
    """Resolve the weight sold for one item of an order, in kilograms.

    Recorded prepared weights/quantities win (canonical key, raw key, then a
    scan for keys with the same canonical name); otherwise the ordered
    quantity is converted by its unit.
    """
    recorded = recorded_item_weight(order, item)
    if recorded is not None:
        return to_kilograms(recorded)
    return quantity_to_kilograms(item)


def recorded_order_kilograms(order: Order) -> float:
    """Sum every recorded item weight and item quantity of an order, in kg."""
    total = 0.0
    for mapping in (order.item_weights, order.item_quantities):
        if mapping:
            total += sum(to_kilograms(value) for value in mapping.values())
    return total


def order_weight(order: Order) -> float:
    """Order-level weight used for proportional allocation.

    ``picked_weight`` when recorded and non-zero, else the sum of item
    quantities.
    """
    if order.picked_weight:
        return order.picked_weight
    return order.total_quantity


def preparing_weight(order: Order) -> float:
    """Weight prepared for an order, in kilograms.

    Recorded item weights when any exist, else recorded item quantities, else
    ``picked_weight``, else the sum of ordered quantities.
    """
    for mapping in (order.item_weights, order.item_quantities):
        if mapping:
            return sum(to_kilograms(value) for value in mapping.values())
    if order.picked_weight:
        return order.picked_weight
    return order.total_quantity
