"""Funnel model translating engagement metrics into modeled compensation.

All arithmetic uses Decimal so the published reference figures are exact.
Results are never quantized here; rounding is a display concern handled in
``creatorpay.formatting``.
"""

from decimal import Decimal

from pydantic import BaseModel

from creatorpay.domain.models import FunnelResult, Metrics
from creatorpay.domain.types import CampaignType

ZERO = Decimal("0")

# Subscription pricing the lifetime value is derived from
MONTHLY_PRICE = Decimal("7.99")
ANNUAL_PRICE = Decimal("64.99")


def average_ltv(monthly_price: Decimal, annual_price: Decimal) -> Decimal:
    """Average of a year of monthly billing and one annual subscription."""
    return (monthly_price * 12 + annual_price) / 2


AVG_LTV = average_ltv(MONTHLY_PRICE, ANNUAL_PRICE)

# Likes signal shallower intent than comments or shares
LIKE_WEIGHT = Decimal("0.5")

# Trackable-link attribution credit, applied to link-in-bio conversions only
BIO_ATTRIBUTION_LIFT = Decimal("1.08")


class ConversionPreset(BaseModel, frozen=True):
    """Conversion rates for one campaign type.

    Attributes:
        entry_rate: Fraction of viewers entering the funnel (profile CTR for
            link-in-bio, search rate for mention-only).
        install_rate: Fraction of entrants who install.
        paid_conversion: Fraction of installs who become paying users.
    """

    entry_rate: Decimal
    install_rate: Decimal
    paid_conversion: Decimal


PRESETS: dict[CampaignType, ConversionPreset] = {
    CampaignType.LINK_IN_BIO: ConversionPreset(
        entry_rate=Decimal("0.025"),
        install_rate=Decimal("0.45"),
        paid_conversion=Decimal("0.12"),
    ),
    CampaignType.MENTION_ONLY: ConversionPreset(
        entry_rate=Decimal("0.0035"),
        install_rate=Decimal("0.40"),
        paid_conversion=Decimal("0.10"),
    ),
}


def evaluate(
    metrics: Metrics,
    campaign_type: CampaignType,
    revenue_share_percent: Decimal,
    avg_ltv: Decimal = AVG_LTV,
) -> FunnelResult:
    """Run the conversion funnel for one post's average metrics.

    Link-in-bio::

        profile_clicks = views * 0.025
        installs       = profile_clicks * 0.45
        paid_users     = installs * 0.12 * 1.08

    Mention-only::

        profile_clicks = None
        installs       = views * 0.0035 * 0.40
        paid_users     = installs * 0.10

    Then ``revenue = paid_users * avg_ltv`` and ``payout = revenue *
    revenue_share_percent / 100``.  CPM and CAC are ``None`` when their
    denominators are zero.

    Args:
        metrics: Non-negative average engagement counts.
        campaign_type: Which conversion preset to use.
        revenue_share_percent: Creator's share of modeled revenue, in percent.
        avg_ltv: Average customer lifetime value. Defaults to ``AVG_LTV``.

    Returns:
        The derived ``FunnelResult``.
    """
    preset = PRESETS[campaign_type]
    views = metrics.views

    unique_engaged = metrics.shares + metrics.comments + metrics.likes * LIKE_WEIGHT

    profile_clicks: Decimal | None
    if campaign_type == CampaignType.LINK_IN_BIO:
        profile_clicks = views * preset.entry_rate
        installs = profile_clicks * preset.install_rate
        paid_users = installs * preset.paid_conversion * BIO_ATTRIBUTION_LIFT
    else:
        profile_clicks = None
        installs = views * preset.entry_rate * preset.install_rate
        paid_users = installs * preset.paid_conversion

    revenue = paid_users * avg_ltv
    payout = revenue * (revenue_share_percent / 100)

    cpm = payout / (views / 1000) if views > ZERO else None
    cac = payout / paid_users if paid_users > ZERO else None

    return FunnelResult(
        unique_engaged=unique_engaged,
        profile_clicks=profile_clicks,
        installs=installs,
        paid_users=paid_users,
        revenue=revenue,
        payout=payout,
        cpm=cpm,
        cac=cac,
    )
