"""Pydantic v2 models for domain data structures in creatorpay."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from creatorpay.domain.inputs import (
    DEFAULT_REVENUE_SHARE,
    clamp_non_negative,
    clamp_revenue_share,
)
from creatorpay.domain.types import CampaignType, PaymentPackage


class Metrics(BaseModel):
    """Average per-post engagement counts.

    Every field is coerced leniently: non-numeric input becomes zero and
    negative values clamp to zero, so a ``Metrics`` instance is always safe
    to feed to the funnel model.
    """

    model_config = ConfigDict(frozen=True)

    views: Decimal = Decimal("0")
    likes: Decimal = Decimal("0")
    comments: Decimal = Decimal("0")
    shares: Decimal = Decimal("0")

    @field_validator("views", "likes", "comments", "shares", mode="before")
    @classmethod
    def coerce_non_negative(cls, v: object) -> Decimal:
        """Coerce raw input to a non-negative Decimal."""
        return clamp_non_negative(v)


class FunnelResult(BaseModel):
    """Derived funnel figures for one set of metrics.  Never persisted.

    Attributes:
        unique_engaged: Weighted-intent proxy (shares + comments + likes / 2).
        profile_clicks: Estimated profile visits, ``None`` for mention-only.
        installs: Expected app installs.
        paid_users: Expected paying subscribers.
        revenue: Modeled revenue (paid users x average LTV).
        payout: Creator's share of the modeled revenue.
        cpm: Payout per thousand views, ``None`` when views is zero.
        cac: Payout per paying user, ``None`` when paid users is zero.
    """

    model_config = ConfigDict(frozen=True)

    unique_engaged: Decimal
    profile_clicks: Decimal | None
    installs: Decimal
    paid_users: Decimal
    revenue: Decimal
    payout: Decimal
    cpm: Decimal | None
    cac: Decimal | None


class CreatorProfile(BaseModel):
    """Fields shared by creator drafts and saved creator records."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str | None = None
    tiktok_url: str | None = None
    instagram_url: str | None = None
    youtube_url: str | None = None
    metrics: Metrics = Field(default_factory=Metrics)
    campaign_type: CampaignType = CampaignType.LINK_IN_BIO
    payment_package: PaymentPackage = PaymentPackage.SINGLE
    revenue_share_percent: Decimal = DEFAULT_REVENUE_SHARE

    @field_validator("email", "tiktok_url", "instagram_url", "youtube_url", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Normalize blank optional strings to ``None`` and trim the rest."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("revenue_share_percent", mode="before")
    @classmethod
    def clamp_share(cls, v: object) -> Decimal:
        """Clamp the revenue share into the supported ``[10, 30]`` range."""
        return clamp_revenue_share(v)


class CreatorDraft(CreatorProfile):
    """Immutable, unsaved creator input.

    A draft may carry an empty name; the record store rejects such drafts
    with a result rather than an exception.
    """

    @property
    def has_name(self) -> bool:
        """Return True if the name is non-empty after trimming."""
        return bool(self.name.strip())


class CreatorRecord(CreatorProfile):
    """A saved creator profile with an immutable identity."""

    id: str

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """Ensure name is not empty or whitespace-only, and store it trimmed."""
        if not v.strip():
            raise ValueError("name must not be empty")
        return v.strip()

    @classmethod
    def from_draft(cls, record_id: str, draft: CreatorDraft) -> "CreatorRecord":
        """Promote a validated draft to a record with the given id."""
        return cls(id=record_id, **draft.model_dump())


class ReplaySettings(BaseModel):
    """Calculator settings copied out of a saved record."""

    model_config = ConfigDict(frozen=True)

    metrics: Metrics
    campaign_type: CampaignType
    payment_package: PaymentPackage
    revenue_share_percent: Decimal


class Lead(BaseModel):
    """A captured lead: an email plus the payout estimate shown at capture.

    Attributes:
        email: Trimmed email address.
        payout: Whole-dollar payout estimate at capture time.
        timestamp: Capture time in epoch milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    email: str
    payout: int
    timestamp: int


class StoreResult(BaseModel):
    """Outcome of a record-store mutation.

    Validation failures are expected and recoverable, so they are reported
    here instead of raised.
    """

    model_config = ConfigDict(frozen=True)

    record: CreatorRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True if the mutation was applied."""
        return self.record is not None and self.error is None
