"""Earnings range and current-offer assessment shown alongside an estimate."""

from decimal import Decimal

from pydantic import BaseModel

RANGE_LOW_FACTOR = Decimal("0.75")
RANGE_HIGH_FACTOR = Decimal("1.25")

# An offer below this fraction of the fair payout counts as underpaid
FAIR_OFFER_RATIO = Decimal("0.9")


class EarningsRange(BaseModel, frozen=True):
    """Plus/minus 25% band around the modeled payout."""

    low: Decimal
    high: Decimal


class OfferAssessment(BaseModel, frozen=True):
    """Comparison of a brand's current offer against the modeled payout.

    Attributes:
        current_offer: The offer being assessed, ``None`` if none was given.
        is_underpaid: Whether the creator is likely underpaid.
        shortfall: Payout minus offer when underpaid with a known offer.
    """

    current_offer: Decimal | None
    is_underpaid: bool
    shortfall: Decimal | None = None

    @property
    def label(self) -> str:
        """Short verdict for display."""
        return "You are likely underpaid" if self.is_underpaid else "You are fairly paid"


def earnings_range(payout: Decimal) -> EarningsRange:
    """Return the 75%-125% band around *payout*."""
    return EarningsRange(low=payout * RANGE_LOW_FACTOR, high=payout * RANGE_HIGH_FACTOR)


def assess_offer(current_offer: Decimal | None, payout: Decimal) -> OfferAssessment:
    """Assess a brand's current per-video offer against the fair payout.

    With no offer (or a zero offer) the creator is assumed underpaid.

    Args:
        current_offer: What brands currently pay per video, if known.
        payout: Modeled fair payout per video.

    Returns:
        An ``OfferAssessment``.
    """
    if current_offer is None or current_offer <= 0:
        return OfferAssessment(current_offer=None, is_underpaid=True)

    underpaid = current_offer < payout * FAIR_OFFER_RATIO
    return OfferAssessment(
        current_offer=current_offer,
        is_underpaid=underpaid,
        shortfall=payout - current_offer if underpaid else None,
    )
