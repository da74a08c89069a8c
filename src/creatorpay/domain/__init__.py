"""Domain types, models, input coercion, and errors for creatorpay."""

from creatorpay.domain.errors import (
    CreatorPayError,
    InvalidTransitionError,
    PersistenceError,
)
from creatorpay.domain.inputs import (
    clamp_non_negative,
    clamp_revenue_share,
    parse_number,
)
from creatorpay.domain.models import (
    CreatorDraft,
    CreatorRecord,
    FunnelResult,
    Lead,
    Metrics,
    ReplaySettings,
    StoreResult,
)
from creatorpay.domain.types import (
    AggressivenessTier,
    CampaignType,
    PaymentPackage,
    RecordState,
)

__all__ = [
    "AggressivenessTier",
    "CampaignType",
    "CreatorDraft",
    "CreatorPayError",
    "CreatorRecord",
    "FunnelResult",
    "InvalidTransitionError",
    "Lead",
    "Metrics",
    "PaymentPackage",
    "PersistenceError",
    "RecordState",
    "ReplaySettings",
    "StoreResult",
    "clamp_non_negative",
    "clamp_revenue_share",
    "parse_number",
]
