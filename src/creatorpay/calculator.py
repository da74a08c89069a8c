"""Active calculator working state.

Holds the inputs the operator is currently looking at.  Replaying a saved
creator overwrites these inputs with a copy of the record's settings; the
record itself is never touched.
"""

from __future__ import annotations

from decimal import Decimal

from creatorpay.domain.inputs import DEFAULT_REVENUE_SHARE, clamp_non_negative, clamp_revenue_share
from creatorpay.domain.models import Metrics, ReplaySettings
from creatorpay.domain.types import CampaignType, PaymentPackage
from creatorpay.offer.composer import compose_offer
from creatorpay.pricing.engine import Estimate, estimate
from creatorpay.store.creators import CreatorRecordStore


class Calculator:
    """Mutable calculator inputs plus on-demand estimation.

    Results are recomputed on every call to ``estimate()``; nothing derived
    is cached.
    """

    def __init__(
        self,
        campaign_type: CampaignType = CampaignType.LINK_IN_BIO,
        payment_package: PaymentPackage = PaymentPackage.SINGLE,
        revenue_share_percent: Decimal = DEFAULT_REVENUE_SHARE,
    ) -> None:
        self.metrics = Metrics()
        self.campaign_type = campaign_type
        self.payment_package = payment_package
        self.revenue_share_percent = clamp_revenue_share(revenue_share_percent)
        self.proposed_cpm: Decimal | None = None
        self.current_offer: Decimal | None = None

    def set_metrics_text(
        self,
        views: str = "",
        likes: str = "",
        comments: str = "",
        shares: str = "",
    ) -> Metrics:
        """Replace the metrics from raw field text.  Never raises."""
        self.metrics = Metrics(views=views, likes=likes, comments=comments, shares=shares)
        return self.metrics

    def set_revenue_share(self, value: object) -> Decimal:
        """Set the revenue share, clamped into ``[10, 30]``."""
        self.revenue_share_percent = clamp_revenue_share(value)
        return self.revenue_share_percent

    def set_proposed_cpm(self, value: object) -> None:
        """Set the CPM for the reverse solver; blank or zero text clears it."""
        cpm = clamp_non_negative(value)
        self.proposed_cpm = cpm if cpm > 0 else None

    def set_current_offer(self, value: object) -> None:
        """Set the brand's current offer; blank or zero text clears it."""
        offer = clamp_non_negative(value)
        self.current_offer = offer if offer > 0 else None

    def apply_replay(self, settings: ReplaySettings) -> None:
        """Overwrite the working state with a saved record's settings."""
        self.metrics = settings.metrics
        self.campaign_type = settings.campaign_type
        self.payment_package = settings.payment_package
        self.revenue_share_percent = settings.revenue_share_percent

    def replay(self, store: CreatorRecordStore, record_id: str) -> bool:
        """Load a saved creator into the calculator.

        Returns:
            True if the record existed and was loaded, False otherwise.
        """
        settings = store.load_for_replay(record_id)
        if settings is None:
            return False
        self.apply_replay(settings)
        return True

    def estimate(self) -> Estimate:
        """Compute the estimate for the current inputs."""
        return estimate(
            self.metrics,
            self.campaign_type,
            self.revenue_share_percent,
            proposed_cpm=self.proposed_cpm,
            current_offer=self.current_offer,
        )

    def offer_text(self, creator_name: str | None = None) -> str:
        """Compose offer text for the current inputs."""
        result = self.estimate().funnel
        return compose_offer(
            result,
            result.cpm,
            self.metrics.views,
            self.payment_package,
            creator_name=creator_name,
        )
