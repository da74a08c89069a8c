"""Estimation engine combining the funnel model with its classifiers.

``estimate()`` is the single entry point the calculator and CLI use: it
runs the funnel, labels the revenue share, flags overpricing, and attaches
the earnings range, offer assessment, and optional reverse quote.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from pydantic import BaseModel

from creatorpay.domain.models import FunnelResult, Metrics
from creatorpay.domain.types import AggressivenessTier, CampaignType
from creatorpay.pricing.aggressiveness import classify, is_overpriced
from creatorpay.pricing.benchmark import (
    EarningsRange,
    OfferAssessment,
    assess_offer,
    earnings_range,
)
from creatorpay.pricing.funnel import AVG_LTV, evaluate
from creatorpay.pricing.reverse import ReverseQuote, solve

logger = structlog.get_logger()


class Estimate(BaseModel, frozen=True):
    """Everything derived from one set of calculator inputs.

    Attributes:
        metrics: The inputs the estimate was computed from.
        campaign_type: Campaign type used.
        revenue_share_percent: Revenue share used.
        funnel: The funnel model output.
        tier: Aggressiveness tier of the revenue share.
        overpriced: Whether payout exceeds 35% of revenue.
        earnings: Earnings band around the payout.
        assessment: Current-offer verdict.
        reverse: Reverse quote, present only when a proposed CPM was given.
    """

    metrics: Metrics
    campaign_type: CampaignType
    revenue_share_percent: Decimal
    funnel: FunnelResult
    tier: AggressivenessTier
    overpriced: bool
    earnings: EarningsRange
    assessment: OfferAssessment
    reverse: ReverseQuote | None = None


def estimate(
    metrics: Metrics,
    campaign_type: CampaignType,
    revenue_share_percent: Decimal,
    *,
    proposed_cpm: Decimal | None = None,
    current_offer: Decimal | None = None,
    avg_ltv: Decimal = AVG_LTV,
) -> Estimate:
    """Derive a full estimate from calculator inputs.

    Args:
        metrics: Non-negative average engagement counts.
        campaign_type: Which conversion preset to use.
        revenue_share_percent: Creator's share of modeled revenue, in percent.
        proposed_cpm: Optional CPM to run through the reverse solver.
        current_offer: Optional per-video offer the creator currently gets.
        avg_ltv: Average customer lifetime value. Defaults to ``AVG_LTV``.

    Returns:
        The bundled ``Estimate``.
    """
    funnel = evaluate(metrics, campaign_type, revenue_share_percent, avg_ltv)

    reverse = None
    if proposed_cpm is not None:
        reverse = solve(proposed_cpm, metrics.views, funnel.revenue)

    result = Estimate(
        metrics=metrics,
        campaign_type=campaign_type,
        revenue_share_percent=revenue_share_percent,
        funnel=funnel,
        tier=classify(revenue_share_percent),
        overpriced=is_overpriced(funnel.revenue, funnel.payout),
        earnings=earnings_range(funnel.payout),
        assessment=assess_offer(current_offer, funnel.payout),
        reverse=reverse,
    )

    logger.debug(
        "estimate_computed",
        campaign_type=str(campaign_type),
        views=str(metrics.views),
        revenue_share_percent=str(revenue_share_percent),
        payout=str(funnel.payout),
    )
    return result
