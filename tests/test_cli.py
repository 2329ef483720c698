"""Tests for the butcher-analytics command line."""

import csv
import json

import pytest

from butcher_core.cli import build_window, main

RECORDS = [
    {
        "id": "ORD-1",
        "butcherId": "usaj",
        "orderTime": "2025-01-15T10:30:00",
        "status": "completed",
        "items": [{"name": "Chicken Curry Cut", "quantity": 2, "unit": "kg", "cutType": "curry cut"}],
        "itemRevenues": {"Chicken Curry Cut": 400},
        "revenue": 400,
        "customerName": "Anil",
    },
    {
        "id": "ORD-2",
        "butcherId": "kak",
        "orderTime": "2025-01-14T09:00:00",
        "status": "declined",
        "items": [{"name": "Ayala - Mackerel - അയല", "quantity": 1, "unit": "kg"}],
        "rejectionReason": "Closed",
    },
]


@pytest.fixture
def orders_file(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps(RECORDS, ensure_ascii=False), encoding="utf-8")
    return path


class TestBuildWindow:
    """Argument combinations."""

    def test_kinds(self) -> None:
        assert build_window("all", None, None).kind == "all"
        assert str(build_window("custom", "2025-01-01", "2025-01-31")) == "2025-01-01..2025-01-31"

    def test_custom_requires_dates(self) -> None:
        with pytest.raises(ValueError, match="requires both"):
            build_window("custom", "2025-01-01", None)

    def test_dates_only_for_custom(self) -> None:
        with pytest.raises(ValueError, match="only valid"):
            build_window("today", "2025-01-01", None)


class TestMain:
    """Exit codes and outputs."""

    def test_report(self, orders_file, capsys) -> None:
        assert main([str(orders_file)]) == 0

        out = capsys.readouterr().out
        assert "Butcher order analytics" in out
        assert "Chicken Curry Cut" in out

    def test_vendor_and_export(self, orders_file, tmp_path, capsys) -> None:
        target = tmp_path / "out.csv"

        code = main([str(orders_file), "--vendor", "usaj", "--export-csv", str(target)])

        assert code == 0
        assert "usaj (Usaj Meat Hub)" in capsys.readouterr().out
        with target.open(encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 2
        assert rows[1][0] == "1-usaj"
        assert rows[1][8] == "400"

    def test_rejection_policy_option(self, orders_file, capsys) -> None:
        assert main([str(orders_file)]) == 0
        assert "rejection rate    : 0.0%" in capsys.readouterr().out
        assert main([str(orders_file), "--rejections", "rejected_or_declined"]) == 0
        assert "rejection rate    : 50.0%" in capsys.readouterr().out

    def test_custom_window_without_dates(self, orders_file) -> None:
        assert main([str(orders_file), "--window", "custom"]) == 2

    def test_missing_file(self, tmp_path) -> None:
        assert main([str(tmp_path / "missing.json")]) == 2

    def test_not_an_array(self, tmp_path) -> None:
        path = tmp_path / "orders.json"
        path.write_text('{"id": "ORD-1"}', encoding="utf-8")
        assert main([str(path)]) == 2

    def test_custom_registry(self, orders_file, tmp_path, capsys) -> None:
        registry = tmp_path / "butchers.json"
        registry.write_text(
            json.dumps(
                {"usaj": {"name": "Usaj Test", "type": "meat", "commission_rates": {"Chicken": 0.2}}}
            ),
            encoding="utf-8",
        )

        assert main([str(orders_file), "--butchers", str(registry), "--vendor", "usaj"]) == 0
        assert "usaj (Usaj Test)" in capsys.readouterr().out

    def test_invalid_window_choice(self, orders_file) -> None:
        with pytest.raises(SystemExit) as exc:
            main([str(orders_file), "--window", "yesterday"])
        assert exc.value.code == 2
