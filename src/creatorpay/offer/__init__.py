"""Offer composer: templated offer text, share text, and calculation breakdown."""

from creatorpay.offer.composer import (
    BreakdownRow,
    compose_breakdown,
    compose_breakdown_note,
    compose_offer,
    compose_share_text,
)

__all__ = [
    "BreakdownRow",
    "compose_breakdown",
    "compose_breakdown_note",
    "compose_offer",
    "compose_share_text",
]
