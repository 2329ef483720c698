"""Tests for run_analytics and the console report."""

from datetime import date

import pytest

from butcher_core.analytics import AnalyticsConfig, RejectionPolicy, run_analytics
from butcher_core.analytics.api import RATE_COLUMNS
from butcher_core.analytics.console import format_analytics_for_console
from butcher_core.orders.window import TimeWindow


class TestAnalyticsConfig:
    """Validation of run parameters."""

    def test_defaults(self) -> None:
        config = AnalyticsConfig()
        assert config.vendor is None
        assert config.window.kind == "all"
        assert config.rejection_policy is RejectionPolicy.REJECTED_ONLY

    def test_policy_from_string(self) -> None:
        config = AnalyticsConfig(rejection_policy="rejected_or_declined")
        assert config.rejection_policy is RejectionPolicy.REJECTED_OR_DECLINED

    @pytest.mark.parametrize("kwargs", [{"top_n": 0}, {"top_reasons": 0}, {"rejection_policy": "x"}])
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            AnalyticsConfig(**kwargs)


class TestRunAnalytics:
    """One reconciliation feeds every view."""

    def test_all_vendors(self, sample_orders, now) -> None:
        result = run_analytics(sample_orders, now=now)

        assert [o.order_id for o in result.orders] == ["ORD-4", "ORD-3", "ORD-2", "ORD-1", "ORD-5"]
        assert len(result.item_lines) == 7
        assert len(result.order_facts) == 5
        assert result.summary.total_revenue == pytest.approx(1590.0)
        assert result.most_sold.iloc[0]["item_name"] == "Mackerel"
        assert result.revenue_by_category["revenue"].sum() == pytest.approx(1590.0)
        assert result.rejections.rate == pytest.approx(20.0)
        assert result.cut_types.empty
        assert result.daily["date"].iloc[0] == date(2025, 1, 13)
        assert len(result.weekly) == 5

    def test_metadata(self, sample_orders, now) -> None:
        config = AnalyticsConfig(vendor="kak", window=TimeWindow.this_week())
        meta = run_analytics(sample_orders, config, now=now).metadata

        assert meta["vendor"] == "kak"
        assert meta["vendor_name"] == "KAK"
        assert meta["window"] == "this_week"
        assert meta["window_bounds"] == (date(2025, 1, 13), date(2025, 1, 19))
        assert meta["order_count"] == 2
        assert meta["item_line_count"] == 3
        assert meta["rejection_policy"] == "rejected_only"
        assert meta["generated_at"] == now
        assert meta["rate_diagnostics"] == []

    def test_single_meat_vendor(self, sample_orders, now) -> None:
        config = AnalyticsConfig(vendor="usaj", rejection_policy="rejected_or_declined")
        result = run_analytics(sample_orders, config, now=now)

        assert {o.butcher_id for o in result.orders} == {"usaj"}
        assert result.cut_types["cut_type"].tolist() == ["curry cut", "boneless"]
        assert result.rejections.rejected == 1
        assert result.rejections.rate == pytest.approx(50.0)

    def test_rates(self, sample_orders, now) -> None:
        rates = run_analytics(sample_orders, now=now).rates

        assert list(rates.columns) == RATE_COLUMNS
        assert len(rates) == 5
        usaj = rates[rates["butcher_id"] == "usaj"].set_index("category")
        assert usaj.loc["Chicken", "commission_rate"] == 0.10
        assert usaj.loc["Chicken", "markup_rate"] == 0.05

    def test_unknown_butcher_diagnostics(self, make_order, now) -> None:
        orders = [make_order("A", "nobody", items=[("Chicken Leg", 1.0)], revenue=100.0)]

        result = run_analytics(orders, now=now)

        diagnostics = result.metadata["rate_diagnostics"]
        assert {d["kind"] for d in diagnostics} == {"commission", "markup"}
        assert {d["reason"] for d in diagnostics} == {"unknown_butcher"}
        assert result.rates.iloc[0]["category"] == "chicken"

    def test_no_orders(self, now) -> None:
        result = run_analytics([], now=now)

        assert result.orders == []
        assert result.summary.total_orders == 0
        assert result.most_sold.empty
        assert len(result.peak_hours) == 24
        assert result.rates.empty


class TestConsoleReport:
    """Plain-text rendering."""

    def test_sections(self, sample_orders, now) -> None:
        result = run_analytics(sample_orders, AnalyticsConfig(vendor="usaj"), now=now)

        text = format_analytics_for_console(result)

        assert text.startswith("Butcher order analytics")
        assert "usaj (Usaj Meat Hub)" in text
        assert "Most sold items" in text
        assert "Cut types" in text
        assert "10.0%" in text

    def test_diagnostics_listed(self, make_order, now) -> None:
        orders = [make_order("A", "nobody", items=[("Chicken Leg", 1.0)])]
        text = format_analytics_for_console(run_analytics(orders, now=now))

        assert "Rate configuration gaps: 2" in text
        assert "[WARN ] commission rate for butcher=nobody" in text

    def test_empty(self, now) -> None:
        text = format_analytics_for_console(run_analytics([], now=now))
        assert "(no data)" in text
        assert "avg completion    : n/a" in text
