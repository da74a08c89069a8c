"""Aggressiveness classification of a revenue-share percentage.

Tiers are display labels only; neither the tier nor the overpriced flag
ever changes a computed figure.
"""

from decimal import Decimal

from creatorpay.domain.types import AggressivenessTier

CONSERVATIVE_MAX = Decimal("12")
NORMAL_MAX = Decimal("18")

# Payout above this fraction of revenue is flagged as overpriced
OVERPRICED_RATIO = Decimal("0.35")


def classify(revenue_share_percent: Decimal) -> AggressivenessTier:
    """Map a revenue-share percentage to its aggressiveness tier.

    Boundary logic (evaluated in order):
    1. ``<= 12``: CONSERVATIVE
    2. ``<= 18``: NORMAL
    3. Otherwise: GROWTH_MODE

    Args:
        revenue_share_percent: The creator's revenue share, in percent.

    Returns:
        The matching ``AggressivenessTier``.
    """
    if revenue_share_percent <= CONSERVATIVE_MAX:
        return AggressivenessTier.CONSERVATIVE
    if revenue_share_percent <= NORMAL_MAX:
        return AggressivenessTier.NORMAL
    return AggressivenessTier.GROWTH_MODE


def is_overpriced(revenue: Decimal, payout: Decimal) -> bool:
    """Return True if *payout* exceeds 35% of a positive *revenue*."""
    return revenue > 0 and payout > OVERPRICED_RATIO * revenue
