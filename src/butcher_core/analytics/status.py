"""Status views: breakdown, rejections, headline numbers and display badges.

Two rejection rules are in use. The per-butcher performance view counts only
orders whose status is exactly "rejected"; the admin order list treats
"rejected" and "declined" alike, ignoring case. Both are kept as named
policies instead of being merged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import pandas as pd

from butcher_core.analytics.lines import OrdersOrFrame, as_order_facts
from butcher_core.analytics.timeline import COMPLETED_STATUSES

logger = logging.getLogger(__name__)

NO_REASON = "No reason provided"
DEFAULT_TOP_REASONS = 5

STATUS_COLUMNS = ["status", "count", "percentage"]
REASON_COLUMNS = ["reason", "count"]


class RejectionPolicy(str, Enum):
    """Which statuses count as a rejection."""

    REJECTED_ONLY = "rejected_only"
    REJECTED_OR_DECLINED = "rejected_or_declined"

    def mask(self, statuses: pd.Series) -> pd.Series:
        """Boolean mask of the rejected rows of ``statuses``."""
        if self is RejectionPolicy.REJECTED_ONLY:
            return statuses == "rejected"
        return statuses.astype(str).str.lower().isin(("rejected", "declined"))


@dataclass(frozen=True)
class StatusBadge:
    """Display label and colour tone for an order status."""

    label: str
    tone: str


STATUS_BADGES = {
    "new": StatusBadge("New", "gray"),
    "preparing": StatusBadge("Preparing", "yellow"),
    "prepared": StatusBadge("Prepared", "blue"),
    "completed": StatusBadge("Completed", "blue"),
    "ready to pick up": StatusBadge("Ready to Pick Up", "blue"),
    "rejected": StatusBadge("Rejected", "red"),
    "declined": StatusBadge("Declined", "red"),
}


def status_badge(status: Optional[str]) -> StatusBadge:
    """Badge for a status; lookup ignores case and unknown statuses show as "New".

    Examples:
        >>> status_badge("Ready to pick up").label
        'Ready to Pick Up'
        >>> status_badge("on hold").label
        'New'
    """
    return STATUS_BADGES.get((status or "").lower(), STATUS_BADGES["new"])


def status_breakdown(data: OrdersOrFrame) -> pd.DataFrame:
    """Order count per status string, exactly as recorded (case preserved).

    Returns:
        DataFrame with STATUS_COLUMNS sorted by count descending.
    """
    facts = as_order_facts(data)
    if facts.empty:
        return pd.DataFrame(columns=STATUS_COLUMNS)

    counts = facts.groupby("status", sort=False).size().reset_index(name="count")
    counts["percentage"] = counts["count"] / len(facts) * 100
    counts = counts.sort_values("count", ascending=False, kind="stable")
    return counts[STATUS_COLUMNS].reset_index(drop=True)


@dataclass
class RejectionStats:
    """Rejected order count, rate and most common reasons."""

    rejected: int
    total: int
    rate: float
    reasons: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=REASON_COLUMNS))


def rejection_stats(
    data: OrdersOrFrame,
    policy: RejectionPolicy = RejectionPolicy.REJECTED_ONLY,
    top_reasons: int = DEFAULT_TOP_REASONS,
) -> RejectionStats:
    """Count rejections under ``policy``.

    Args:
        data: Reconciled orders or their order fact table.
        policy: Which statuses count as rejected.
        top_reasons: Number of reasons to keep.

    Returns:
        RejectionStats with ``rate`` in percent (0 for no orders) and the
        ``top_reasons`` most frequent reasons; a missing reason is reported
        as "No reason provided".
    """
    policy = RejectionPolicy(policy)
    facts = as_order_facts(data)
    total = len(facts)
    if total == 0:
        return RejectionStats(rejected=0, total=0, rate=0.0)

    rejected = facts[policy.mask(facts["status"])]
    reasons = rejected["rejection_reason"].fillna(NO_REASON).replace("", NO_REASON)
    reason_counts = reasons.value_counts(sort=False).reset_index()
    reason_counts.columns = REASON_COLUMNS
    reason_counts = reason_counts.sort_values("count", ascending=False, kind="stable")

    return RejectionStats(
        rejected=len(rejected),
        total=total,
        rate=len(rejected) / total * 100,
        reasons=reason_counts.head(top_reasons).reset_index(drop=True),
    )


@dataclass
class SummaryStats:
    """Headline numbers for a set of orders.

    ``completed_revenue`` sums the order revenue of finished orders;
    ``total_revenue`` sums it over every order. ``average_completion_minutes``
    is None when no finished order has a known completion time.
    """

    total_orders: int = 0
    completed_orders: int = 0
    rejected_orders: int = 0
    preparing_orders: int = 0
    new_orders: int = 0
    total_revenue: float = 0.0
    completed_revenue: float = 0.0
    total_kilograms: float = 0.0
    average_order_value: float = 0.0
    average_completion_minutes: Optional[float] = None


def summary_stats(data: OrdersOrFrame) -> SummaryStats:
    """Compute the headline numbers.

    Status matching ignores case here; "rejected" and "declined" both count
    as rejected.
    """
    facts = as_order_facts(data)
    if facts.empty:
        return SummaryStats()

    statuses = facts["status"].astype(str).str.lower()
    completed = statuses.isin(COMPLETED_STATUSES)
    total_revenue = float(facts["revenue"].sum())

    # Completion time uses the recorded status spelling
    minutes = facts.loc[
        facts["status"].isin(COMPLETED_STATUSES), "completion_minutes"
    ].dropna()

    return SummaryStats(
        total_orders=len(facts),
        completed_orders=int(completed.sum()),
        rejected_orders=int(RejectionPolicy.REJECTED_OR_DECLINED.mask(facts["status"]).sum()),
        preparing_orders=int((statuses == "preparing").sum()),
        new_orders=int((statuses == "new").sum()),
        total_revenue=total_revenue,
        completed_revenue=float(facts.loc[completed, "revenue"].sum()),
        total_kilograms=float(facts["kilograms"].sum()),
        average_order_value=total_revenue / len(facts),
        average_completion_minutes=float(minutes.mean()) if len(minutes) else None,
    )
