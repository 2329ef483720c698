"""Shared fixtures: small in-memory orders built with factory fixtures."""

from datetime import datetime
from typing import Callable

import pytest

from butcher_core.models import Order, OrderItem

# Wednesday
REFERENCE_NOW = datetime(2025, 1, 15, 18, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for relative windows (Wednesday 2025-01-15 18:00)."""
    return REFERENCE_NOW


@pytest.fixture
def make_item() -> Callable[..., OrderItem]:
    """Factory for OrderItem with test-friendly defaults."""

    def _make(
        name: str = "Chicken Leg", quantity: float = 1.0, unit: str = "kg", **kwargs
    ) -> OrderItem:
        return OrderItem(name=name, quantity=quantity, unit=unit, **kwargs)

    return _make


@pytest.fixture
def make_order(make_item: Callable[..., OrderItem]) -> Callable[..., Order]:
    """Factory for Order.

    ``items`` accepts OrderItem instances or ``(name, quantity)`` tuples.
    """

    def _make(
        order_id: str = "ORD-1",
        butcher_id: str | None = "kak",
        order_time: datetime = datetime(2025, 1, 15, 10, 0),
        items=(),
        **kwargs,
    ) -> Order:
        built = tuple(
            item if isinstance(item, OrderItem) else make_item(*item) for item in items
        )
        return Order(
            order_id=order_id,
            order_time=order_time,
            butcher_id=butcher_id,
            items=built,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_orders(
    make_order: Callable[..., Order], make_item: Callable[..., OrderItem]
) -> list[Order]:
    """A week of mixed orders from a fish stall (kak) and a meat stall (usaj).

    Includes one duplicate submission of ORD-2 at kak.
    """
    mackerel = "Ayala - Mackerel - അയല"
    sardine = "Mathi - Sardine - മത്തി"
    return [
        make_order(
            "ORD-1",
            "kak",
            datetime(2025, 1, 13, 9, 15),
            items=[make_item(mackerel, 1.0, category="Sea Water Fish")],
            status="completed",
            item_weights={"Mackerel": "1.2kg"},
            item_revenues={"Mackerel": 240.0},
            completion_time=20.0,
        ),
        make_order(
            "ORD-2",
            "kak",
            datetime(2025, 1, 14, 11, 40),
            items=[
                make_item(mackerel, 2.0, category="Sea Water Fish"),
                make_item(sardine, 1.0, category="Sea Water Fish"),
            ],
            status="prepared",
            item_weights={mackerel: "2kg", sardine: "900g"},
            revenue=600.0,
            preparation_start_time=datetime(2025, 1, 14, 11, 45),
            preparation_end_time=datetime(2025, 1, 14, 12, 15, 30),
        ),
        make_order(
            "ORD-2",
            "kak",
            datetime(2025, 1, 14, 11, 40),
            items=[make_item(mackerel, 5.0)],
            status="new",
            revenue=9999.0,
        ),
        make_order(
            "ORD-3",
            "usaj",
            datetime(2025, 1, 15, 11, 5),
            items=[
                make_item("Chicken Curry Cut", 2.0, cut_type="curry cut"),
                make_item("Beef Boneless", 1.0, cut_type="boneless"),
            ],
            status="completed",
            item_quantities={"Chicken Curry Cut": "2kg", "Beef Boneless": "1kg"},
            item_revenues={"Chicken Curry Cut": 400.0, "Beef Boneless": 350.0},
            completion_time=35.0,
        ),
        make_order(
            "ORD-4",
            "usaj",
            datetime(2025, 1, 15, 17, 30),
            items=[make_item("Chicken Leg", 1.0, cut_type="curry cut")],
            status="rejected",
            rejection_reason="Out of stock",
        ),
        make_order(
            "ORD-5",
            "kak",
            datetime(2025, 1, 10, 8, 0),
            items=[make_item(sardine, 1.0)],
            status="declined",
        ),
    ]
