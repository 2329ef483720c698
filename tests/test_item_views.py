"""Tests for the item fact table and item-level views."""

import pandas as pd
import pytest

from butcher_core.analytics.categories import CATEGORY_COLUMNS, revenue_by_category
from butcher_core.analytics.items import (
    CUT_TYPE_COLUMNS,
    MOST_SOLD_COLUMNS,
    PRICE_COMPARISON_COLUMNS,
    cut_type_breakdown,
    item_revenue_contribution,
    most_sold_items,
    price_comparison,
)
from butcher_core.analytics.lines import ITEM_LINE_COLUMNS, build_item_lines
from butcher_core.orders.reconcile import reconcile


@pytest.fixture
def reconciled(sample_orders):
    return reconcile(sample_orders)


@pytest.fixture
def lines(reconciled) -> pd.DataFrame:
    return build_item_lines(reconciled)


class TestItemLines:
    """One row per item with resolved weight and revenue."""

    def test_columns_and_grain(self, lines: pd.DataFrame) -> None:
        assert list(lines.columns) == ITEM_LINE_COLUMNS
        assert len(lines) == 7

    def test_resolved_values(self, lines: pd.DataFrame) -> None:
        by_order = lines.set_index(["order_id", "canonical_name"])

        assert by_order.loc[("ORD-1", "Mackerel"), "weight_kg"] == pytest.approx(1.2)
        assert by_order.loc[("ORD-1", "Mackerel"), "revenue"] == pytest.approx(240.0)
        assert by_order.loc[("ORD-2", "Mackerel"), "revenue"] == pytest.approx(400.0)
        assert by_order.loc[("ORD-2", "Sardine"), "weight_kg"] == pytest.approx(0.9)
        assert by_order.loc[("ORD-3", "Beef Boneless"), "revenue"] == pytest.approx(350.0)
        assert by_order.loc[("ORD-5", "Sardine"), "category"] == "other"

    def test_no_nan_measures(self, lines: pd.DataFrame) -> None:
        assert not lines[["quantity", "weight_kg", "revenue"]].isna().any().any()

    def test_empty(self) -> None:
        empty = build_item_lines([])
        assert empty.empty
        assert list(empty.columns) == ITEM_LINE_COLUMNS


class TestMostSold:
    """Ranked by weight."""

    def test_ranking(self, reconciled) -> None:
        result = most_sold_items(reconciled)

        assert list(result.columns) == MOST_SOLD_COLUMNS
        assert result["item_name"].tolist()[:3] == ["Mackerel", "Chicken Curry Cut", "Sardine"]
        top = result.iloc[0]
        assert top["total_quantity"] == pytest.approx(3.0)
        assert top["total_weight"] == pytest.approx(3.2)
        assert top["total_revenue"] == pytest.approx(640.0)
        assert top["order_count"] == 2

    def test_top_n(self, lines: pd.DataFrame) -> None:
        assert len(most_sold_items(lines, top_n=2)) == 2
        assert len(most_sold_items(lines, top_n=None)) == 5

    def test_empty(self) -> None:
        result = most_sold_items([])
        assert result.empty
        assert list(result.columns) == MOST_SOLD_COLUMNS


class TestPriceComparison:
    """Realized revenue per kilogram."""

    def test_average_price(self, lines: pd.DataFrame) -> None:
        result = price_comparison(lines)

        assert list(result.columns) == PRICE_COMPARISON_COLUMNS
        assert result["item_name"].tolist() == [
            "Mackerel",
            "Chicken Curry Cut",
            "Beef Boneless",
            "Sardine",
        ]
        prices = dict(zip(result["item_name"], result["average_price"]))
        assert prices["Mackerel"] == pytest.approx(200.0)
        assert prices["Beef Boneless"] == pytest.approx(350.0)
        assert prices["Sardine"] == pytest.approx(200.0 / 1.9)

    def test_items_without_revenue_excluded(self, lines: pd.DataFrame) -> None:
        assert "Chicken Leg" not in price_comparison(lines)["item_name"].tolist()

    def test_zero_weight_excluded(self, make_order) -> None:
        order = make_order(
            items=[("A", 1.0)], item_weights={"A": "0kg"}, item_revenues={"A": 100.0}
        )
        assert price_comparison([order]).empty


class TestContribution:
    """Share of revenue per item."""

    def test_percentages(self, lines: pd.DataFrame) -> None:
        result = item_revenue_contribution(lines)

        assert result.iloc[0]["item_name"] == "Mackerel"
        assert result["percentage"].sum() == pytest.approx(100.0)
        assert result.iloc[0]["percentage"] == pytest.approx(640 / 1590 * 100)

    def test_zero_revenue(self, make_order) -> None:
        result = item_revenue_contribution([make_order(items=[("A", 1.0)])])
        assert result["percentage"].tolist() == [0.0]


class TestRevenueByCategory:
    """Recorded category, else keyword inference."""

    def test_breakdown(self, lines: pd.DataFrame) -> None:
        result = revenue_by_category(lines)

        assert list(result.columns) == CATEGORY_COLUMNS
        assert result["category"].tolist() == ["Sea Water Fish", "chicken", "beef", "other"]
        assert result["revenue"].tolist() == pytest.approx([840.0, 400.0, 350.0, 0.0])

    def test_revenue_sums_to_item_revenue(self, lines: pd.DataFrame) -> None:
        result = revenue_by_category(lines)
        assert result["revenue"].sum() == pytest.approx(lines["revenue"].sum())
        assert result["percentage"].sum() == pytest.approx(100.0)

    def test_zero_total_gives_zero_percentages(self, make_order) -> None:
        result = revenue_by_category([make_order(items=[("Chicken Leg", 1.0), ("Beef", 1.0)])])
        assert result["percentage"].tolist() == [0.0, 0.0]

    def test_empty(self) -> None:
        assert revenue_by_category([]).empty


class TestCutTypes:
    """Only for a single meat butcher."""

    def test_meat_vendor(self, sample_orders) -> None:
        result = cut_type_breakdown(reconcile(sample_orders, vendor="usaj"), "usaj")

        assert list(result.columns) == CUT_TYPE_COLUMNS
        assert result["cut_type"].tolist() == ["curry cut", "boneless"]
        assert result["quantity"].tolist() == pytest.approx([3.0, 1.0])
        assert result["revenue"].tolist() == pytest.approx([400.0, 350.0])

    @pytest.mark.parametrize("vendor", [None, "", "all", "kak", "tender_chops", "nobody"])
    def test_other_selections_are_empty(self, sample_orders, vendor) -> None:
        result = cut_type_breakdown(sample_orders, vendor)
        assert result.empty
        assert list(result.columns) == CUT_TYPE_COLUMNS

    def test_items_without_cut_type_skipped(self, make_order) -> None:
        order = make_order(butcher_id="usaj", items=[("Chicken Leg", 1.0)])
        assert cut_type_breakdown([order], "usaj").empty


def test_views_accept_orders_or_prebuilt_lines(reconciled, lines: pd.DataFrame) -> None:
    pd.testing.assert_frame_equal(most_sold_items(reconciled), most_sold_items(lines))
    pd.testing.assert_frame_equal(revenue_by_category(reconciled), revenue_by_category(lines))
