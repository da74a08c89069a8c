"""Offer composition: render engine output as human-readable text.

Every function here is deterministic and side-effect free.  Copying text to
a clipboard or showing UI feedback is left to the caller.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from creatorpay.domain.models import FunnelResult
from creatorpay.domain.types import CampaignType, PaymentPackage
from creatorpay.formatting import (
    format_cents,
    format_count,
    format_currency,
)
from creatorpay.offer.templates import (
    BREAKDOWN_NOTE_TEMPLATE,
    OFFER_TEMPLATE,
    SHARE_TEMPLATE,
)
from creatorpay.pricing.aggressiveness import classify
from creatorpay.pricing.funnel import AVG_LTV, BIO_ATTRIBUTION_LIFT, PRESETS


class BreakdownRow(BaseModel, frozen=True):
    """One line of the "how this was calculated" panel."""

    label: str
    value: str
    hint: str


def _rate_percent(rate: Decimal) -> str:
    """Render a fractional rate as a compact percentage, e.g. 0.025 -> ``2.5%``."""
    return f"{(rate * 100).normalize():f}%"


def compose_offer(
    result: FunnelResult,
    cpm: Decimal | None,
    views: Decimal,
    package: PaymentPackage,
    *,
    creator_name: str | None = None,
) -> str:
    """Compose outbound offer text for a creator.

    Args:
        result: Funnel output whose payout is the per-video offer.
        cpm: CPM to quote, or ``None`` to render ``N/A``.
        views: Average views per video.
        package: Payment package; the total is ``payout * package.post_count``.
        creator_name: Optional name for the greeting.

    Returns:
        The offer text.
    """
    name = (creator_name or "").strip()
    greeting = f"Hi {name}," if name else "Hi there,"

    return OFFER_TEMPLATE.format(
        greeting=greeting,
        views=format_count(views),
        payout=format_currency(result.payout),
        cpm=format_cents(cpm),
        package_label=package.label,
        post_count=package.post_count,
        total=format_currency(result.payout * package.post_count),
    )


def compose_share_text(payout: Decimal) -> str:
    """Compose the shareable "what I should be earning" blurb."""
    return SHARE_TEMPLATE.format(payout=format_currency(payout))


def compose_breakdown_note(revenue_share_percent: Decimal) -> str:
    """One-sentence summary of the assumptions behind the breakdown."""
    return BREAKDOWN_NOTE_TEMPLATE.format(
        avg_ltv=format_cents(AVG_LTV),
        revenue_share=_rate_percent(revenue_share_percent / 100),
    )


def compose_breakdown(
    result: FunnelResult,
    campaign_type: CampaignType,
    revenue_share_percent: Decimal,
) -> list[BreakdownRow]:
    """Build the step-by-step calculation rows for a funnel result.

    The profile-visitor row only appears for link-in-bio campaigns, which
    are the only ones with a trackable click path.

    Args:
        result: The funnel output to explain.
        campaign_type: Campaign type the result was computed for.
        revenue_share_percent: Revenue share the payout was computed with.

    Returns:
        Rows in funnel order.
    """
    preset = PRESETS[campaign_type]
    is_link = campaign_type == CampaignType.LINK_IN_BIO

    rows = [
        BreakdownRow(
            label="People who interacted",
            value=format_count(result.unique_engaged),
            hint="Weighted sum of likes, comments, and shares",
        ),
    ]

    if is_link:
        rows.append(
            BreakdownRow(
                label="Estimated profile visitors",
                value=format_count(result.profile_clicks),
                hint=f"{_rate_percent(preset.entry_rate)} of viewers click through to the profile",
            )
        )
        install_hint = f"{_rate_percent(preset.install_rate)} of profile visitors install"
        paid_hint = (
            f"{_rate_percent(preset.paid_conversion)} convert to paid "
            f"(+{_rate_percent(BIO_ATTRIBUTION_LIFT - 1)} bio attribution)"
        )
    else:
        install_hint = (
            f"{_rate_percent(preset.entry_rate)} of viewers search and install later"
        )
        paid_hint = f"{_rate_percent(preset.paid_conversion)} convert to paid"

    tier = classify(revenue_share_percent)
    rows.extend([
        BreakdownRow(
            label="Expected installs",
            value=format_count(result.installs),
            hint=install_hint,
        ),
        BreakdownRow(
            label="Expected paying customers",
            value=format_count(result.paid_users),
            hint=paid_hint,
        ),
        BreakdownRow(
            label="Revenue your content generates",
            value=format_currency(result.revenue),
            hint=f"{format_cents(AVG_LTV)} avg customer lifetime value",
        ),
        BreakdownRow(
            label=f"Your fair share ({_rate_percent(revenue_share_percent / 100)})",
            value=format_currency(result.payout),
            hint=f"{tier.label} creator revenue share",
        ),
    ])
    return rows
