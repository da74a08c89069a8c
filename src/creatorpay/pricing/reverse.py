"""Reverse solver: profitability of a proposed CPM against modeled revenue.

Consumes the funnel model's revenue for the current metrics; it does not
recompute conversions.
"""

from decimal import Decimal

from pydantic import BaseModel


class ReverseQuote(BaseModel, frozen=True):
    """Profitability figures implied by a proposed CPM.

    Every field is ``None`` when views is zero.

    Attributes:
        implied_payout: Per-video payout the proposed CPM implies.
        profit_per_video: Revenue minus implied payout; may be negative.
        roas: Revenue over implied payout, ``None`` if the payout is zero.
        profit_percent: Profit as a percentage of revenue, ``None`` if
            revenue is zero.
    """

    implied_payout: Decimal | None = None
    profit_per_video: Decimal | None = None
    roas: Decimal | None = None
    profit_percent: Decimal | None = None


def solve(proposed_cpm: Decimal, views: Decimal, revenue: Decimal) -> ReverseQuote:
    """Back out payout and profitability from a proposed CPM.

    Formula: ``implied_payout = proposed_cpm * views / 1000``.

    Args:
        proposed_cpm: Cost per thousand views being proposed.
        views: Average views per post.
        revenue: Modeled revenue for the same metrics.

    Returns:
        A ``ReverseQuote``; all-``None`` when *views* is zero.
    """
    if views <= 0:
        return ReverseQuote()

    implied_payout = proposed_cpm * (views / 1000)
    profit = revenue - implied_payout

    return ReverseQuote(
        implied_payout=implied_payout,
        profit_per_video=profit,
        roas=revenue / implied_payout if implied_payout > 0 else None,
        profit_percent=100 * profit / revenue if revenue > 0 else None,
    )
