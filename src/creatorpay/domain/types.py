"""Domain enumerations for the creator compensation estimator."""

from enum import StrEnum


class CampaignType(StrEnum):
    """Which conversion-preset branch of the funnel applies."""

    LINK_IN_BIO = "link"
    MENTION_ONLY = "mention"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return _CAMPAIGN_LABELS[self]


_CAMPAIGN_LABELS: dict[CampaignType, str] = {
    CampaignType.LINK_IN_BIO: "Link in Bio",
    CampaignType.MENTION_ONLY: "Mention Only",
}


class PaymentPackage(StrEnum):
    """Number of posts bundled into a single offer."""

    SINGLE = "single"
    PACK_3 = "pack3"
    PACK_5 = "pack5"

    @property
    def post_count(self) -> int:
        """Integer multiplier applied to the per-video payout."""
        return _PACKAGE_POST_COUNTS[self]

    @property
    def label(self) -> str:
        """Human-readable package label used in offer text."""
        return _PACKAGE_LABELS[self]


_PACKAGE_POST_COUNTS: dict[PaymentPackage, int] = {
    PaymentPackage.SINGLE: 1,
    PaymentPackage.PACK_3: 3,
    PaymentPackage.PACK_5: 5,
}

_PACKAGE_LABELS: dict[PaymentPackage, str] = {
    PaymentPackage.SINGLE: "Single video",
    PaymentPackage.PACK_3: "3-video pack",
    PaymentPackage.PACK_5: "5-video pack",
}


class AggressivenessTier(StrEnum):
    """Named risk band for a chosen revenue-share percentage."""

    CONSERVATIVE = "conservative"
    NORMAL = "normal"
    GROWTH_MODE = "growth_mode"

    @property
    def label(self) -> str:
        """Human-readable tier label."""
        return _TIER_LABELS[self]


_TIER_LABELS: dict[AggressivenessTier, str] = {
    AggressivenessTier.CONSERVATIVE: "Conservative",
    AggressivenessTier.NORMAL: "Normal",
    AggressivenessTier.GROWTH_MODE: "Growth mode",
}


class RecordState(StrEnum):
    """States in a creator record's lifecycle."""

    ABSENT = "absent"
    SAVED = "saved"
    EDITED = "edited"
    DELETED = "deleted"
