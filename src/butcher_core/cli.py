"""Command-line entry point: ``butcher-analytics``.

Examples:
    $ butcher-analytics orders.json
    $ butcher-analytics orders.json --vendor kak --window this_week
    $ butcher-analytics orders.json --window custom --start 2025-01-01 --end 2025-01-31
    $ butcher-analytics orders.json --butchers butchers.json --export-csv orders.csv -v
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from butcher_core.analytics import AnalyticsConfig, RejectionPolicy, run_analytics
from butcher_core.analytics.console import format_analytics_for_console
from butcher_core.config import DEFAULT_REGISTRY, ButcherRegistry
from butcher_core.exceptions import ButcherAPIError
from butcher_core.models import load_orders
from butcher_core.orders.export import export_orders_csv
from butcher_core.orders.window import WINDOW_KINDS, TimeWindow

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2


def build_window(kind: str, start: str | None, end: str | None) -> TimeWindow:
    """Build a TimeWindow from command-line values.

    Raises:
        ValueError: If a custom window misses a date, or dates are given for
            another window kind.
    """
    if kind == "custom":
        if not start or not end:
            raise ValueError("--window custom requires both --start and --end")
        return TimeWindow.custom(start, end)
    if start or end:
        raise ValueError("--start/--end are only valid with --window custom")
    return TimeWindow(kind)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="butcher-analytics",
        description="Reconcile butcher orders and print revenue and performance analytics.",
    )
    parser.add_argument("orders", type=Path, help="JSON file with an array of order records.")
    parser.add_argument(
        "--butchers",
        type=Path,
        default=None,
        help="JSON butcher registry. Default: the built-in butcher table.",
    )
    parser.add_argument(
        "--vendor",
        default=None,
        help="Butcher id to report on (e.g. 'kak'). Default: all butchers.",
    )
    parser.add_argument(
        "--window",
        choices=WINDOW_KINDS,
        default="all",
        help="Date window (default: all).",
    )
    parser.add_argument("--start", default=None, help="First day (YYYY-MM-DD) for --window custom.")
    parser.add_argument("--end", default=None, help="Last day (YYYY-MM-DD) for --window custom.")
    parser.add_argument(
        "--rejections",
        choices=[p.value for p in RejectionPolicy],
        default=RejectionPolicy.REJECTED_ONLY.value,
        help="Which statuses count as rejected (default: rejected_only).",
    )
    parser.add_argument(
        "--export-csv",
        type=Path,
        default=None,
        help="Also write the reconciled orders to this CSV file.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the analytics CLI.

    Returns:
        0 on success, 2 on argument, configuration or data errors.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        window = build_window(args.window, args.start, args.end)
        registry = ButcherRegistry.from_json(args.butchers) if args.butchers else DEFAULT_REGISTRY
        if args.vendor and args.vendor != "all" and args.vendor not in registry:
            logger.warning("Vendor '%s' is not in the butcher registry", args.vendor)
        orders = load_orders(args.orders)
        config = AnalyticsConfig(
            vendor=args.vendor,
            window=window,
            rejection_policy=RejectionPolicy(args.rejections),
        )
        result = run_analytics(orders, config, registry)
    except (ButcherAPIError, ValueError, OSError) as e:
        logger.error("%s", e)
        return EXIT_ERROR

    print(format_analytics_for_console(result))

    if args.export_csv:
        try:
            args.export_csv.write_text(export_orders_csv(result.orders, registry), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write CSV export to %s: %s", args.export_csv, e)
            return EXIT_ERROR
        logger.info("Wrote %d order(s) to %s", len(result.orders), args.export_csv)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
