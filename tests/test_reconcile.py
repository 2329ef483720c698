"""Tests for time windows, filtering and deduplication."""

from datetime import date, datetime

import pytest

from butcher_core.orders.reconcile import deduplicate, filter_by_vendor, reconcile
from butcher_core.orders.window import TimeWindow, month_bounds, week_bounds


class TestTimeWindow:
    """Window kinds and their inclusive day bounds."""

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Invalid window"):
            TimeWindow("yesterday")

    def test_custom_needs_ordered_dates(self) -> None:
        with pytest.raises(ValueError):
            TimeWindow("custom")
        with pytest.raises(ValueError, match="after end"):
            TimeWindow.custom("2025-02-01", "2025-01-01")

    def test_all_has_no_bounds(self, now: datetime) -> None:
        assert TimeWindow.all().bounds(now) is None

    def test_today(self, now: datetime) -> None:
        assert TimeWindow.today().bounds(now) == (date(2025, 1, 15), date(2025, 1, 15))

    def test_this_week_is_monday_to_sunday(self, now: datetime) -> None:
        assert TimeWindow.this_week().bounds(now) == (date(2025, 1, 13), date(2025, 1, 19))

    def test_this_week_on_sunday(self) -> None:
        assert week_bounds(date(2025, 1, 19)) == (date(2025, 1, 13), date(2025, 1, 19))

    def test_this_month(self, now: datetime) -> None:
        assert TimeWindow.this_month().bounds(now) == (date(2025, 1, 1), date(2025, 1, 31))
        assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_bounds(date(2024, 12, 31)) == (date(2024, 12, 1), date(2024, 12, 31))

    def test_custom_is_inclusive(self) -> None:
        window = TimeWindow.custom("2025-01-01", datetime(2025, 1, 31, 8))
        assert window.bounds() == (date(2025, 1, 1), date(2025, 1, 31))
        assert window.contains(datetime(2025, 1, 31, 23, 59))
        assert window.contains(datetime(2025, 1, 1, 0, 0))
        assert not window.contains(datetime(2025, 2, 1, 0, 0))

    def test_str(self) -> None:
        assert str(TimeWindow.this_week()) == "this_week"
        assert str(TimeWindow.custom("2025-01-01", "2025-01-02")) == "2025-01-01..2025-01-02"


class TestDeduplicate:
    """Composite (butcher, order id) identity; first copy wins."""

    def test_first_submission_wins(self, make_order) -> None:
        first = make_order("A", "kak", revenue=100.0)
        second = make_order("A", "kak", revenue=999.0)

        result = deduplicate([first, second])

        assert len(result) == 1
        assert result[0].revenue == 100.0

    def test_same_id_at_two_butchers_is_kept(self, make_order) -> None:
        orders = [make_order("A", "kak"), make_order("A", "usaj")]
        assert len(deduplicate(orders)) == 2

    def test_missing_butcher_shares_unknown_key(self, make_order) -> None:
        orders = [make_order("A", None), make_order("A", None), make_order("A", "unknown")]
        assert len(deduplicate(orders)) == 1


class TestReconcile:
    """Vendor filter, window filter, dedupe and newest-first ordering."""

    def test_empty(self) -> None:
        assert reconcile([]) == []

    def test_vendor_filter(self, make_order) -> None:
        orders = [make_order("A", "kak"), make_order("B", "usaj"), make_order("C", None)]

        assert [o.order_id for o in filter_by_vendor(orders, "usaj")] == ["B"]
        for vendor in (None, "", "all"):
            assert len(filter_by_vendor(orders, vendor)) == 3

    def test_window_filter(self, make_order, now: datetime) -> None:
        orders = [
            make_order("A", order_time=datetime(2025, 1, 12, 23, 59)),
            make_order("B", order_time=datetime(2025, 1, 13, 0, 0)),
            make_order("C", order_time=datetime(2025, 1, 19, 23, 59)),
            make_order("D", order_time=datetime(2025, 1, 20, 0, 0)),
        ]

        result = reconcile(orders, window=TimeWindow.this_week(), now=now)

        assert [o.order_id for o in result] == ["C", "B"]

    def test_sorted_newest_first_and_stable(self, make_order) -> None:
        tie = datetime(2025, 1, 14, 9, 0)
        orders = [
            make_order("A", order_time=datetime(2025, 1, 13, 9, 0)),
            make_order("B", order_time=tie),
            make_order("C", order_time=datetime(2025, 1, 15, 9, 0)),
            make_order("D", order_time=tie),
        ]

        assert [o.order_id for o in reconcile(orders)] == ["C", "B", "D", "A"]

    def test_duplicate_submissions(self, sample_orders) -> None:
        result = reconcile(sample_orders, vendor="kak")

        kept = [o for o in result if o.order_id == "ORD-2"]
        assert len(kept) == 1
        assert kept[0].status == "prepared"
        assert [o.order_id for o in result] == ["ORD-2", "ORD-1", "ORD-5"]

    def test_idempotent(self, sample_orders, now: datetime) -> None:
        window = TimeWindow.this_week()
        once = reconcile(sample_orders, "kak", window, now=now)
        assert reconcile(once, "kak", window, now=now) == once
        assert reconcile(reconcile(sample_orders)) == reconcile(sample_orders)
