"""Tests for the estimate() facade."""

from decimal import Decimal

from creatorpay.domain.models import Metrics
from creatorpay.domain.types import AggressivenessTier, CampaignType
from creatorpay.pricing.engine import estimate
from creatorpay.pricing.funnel import evaluate


class TestEstimate:
    def test_funnel_matches_evaluate(self, sample_metrics: Metrics):
        result = estimate(sample_metrics, CampaignType.LINK_IN_BIO, Decimal("15"))
        assert result.funnel == evaluate(sample_metrics, CampaignType.LINK_IN_BIO, Decimal("15"))

    def test_tier_and_flags(self, sample_metrics: Metrics):
        result = estimate(sample_metrics, CampaignType.LINK_IN_BIO, Decimal("25"))
        assert result.tier == AggressivenessTier.GROWTH_MODE
        assert result.overpriced is False

    def test_earnings_range_from_payout(self, sample_metrics: Metrics):
        result = estimate(sample_metrics, CampaignType.MENTION_ONLY, Decimal("15"))
        assert result.earnings.low == result.funnel.payout * Decimal("0.75")
        assert result.earnings.high == result.funnel.payout * Decimal("1.25")

    def test_reverse_absent_without_proposed_cpm(self, sample_metrics: Metrics):
        result = estimate(sample_metrics, CampaignType.LINK_IN_BIO, Decimal("15"))
        assert result.reverse is None

    def test_reverse_uses_funnel_revenue(self):
        result = estimate(
            Metrics(views=100000),
            CampaignType.LINK_IN_BIO,
            Decimal("15"),
            proposed_cpm=Decimal("20"),
        )
        assert result.reverse is not None
        assert result.reverse.implied_payout == Decimal("2000")
        assert result.reverse.profit_per_video == result.funnel.revenue - Decimal("2000")

    def test_current_offer_assessed_against_payout(self):
        result = estimate(
            Metrics(views=100000),
            CampaignType.LINK_IN_BIO,
            Decimal("15"),
            current_offer=Decimal("500"),
        )
        assert result.assessment.is_underpaid is True
        assert result.assessment.shortfall == Decimal("1759.11345") - Decimal("500")

    def test_zero_metrics_are_total(self):
        result = estimate(Metrics(), CampaignType.MENTION_ONLY, Decimal("10"))
        assert result.funnel.payout == 0
        assert result.funnel.cpm is None
        assert result.tier == AggressivenessTier.CONSERVATIVE
        assert result.overpriced is False
