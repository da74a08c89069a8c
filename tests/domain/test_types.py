"""Tests for domain enumerations and their display mappings."""

import pytest

from creatorpay.domain.types import (
    AggressivenessTier,
    CampaignType,
    PaymentPackage,
    RecordState,
)


class TestCampaignType:
    """Tests for the CampaignType enum."""

    def test_members(self):
        assert CampaignType.LINK_IN_BIO == "link"
        assert CampaignType.MENTION_ONLY == "mention"

    def test_from_string(self):
        assert CampaignType("link") is CampaignType.LINK_IN_BIO

    def test_invalid_value_raises(self):
        with pytest.raises(ValueError):
            CampaignType("banner")

    def test_labels(self):
        assert CampaignType.LINK_IN_BIO.label == "Link in Bio"
        assert CampaignType.MENTION_ONLY.label == "Mention Only"


class TestPaymentPackage:
    """Tests for the PaymentPackage enum."""

    @pytest.mark.parametrize(
        ("package", "count", "label"),
        [
            (PaymentPackage.SINGLE, 1, "Single video"),
            (PaymentPackage.PACK_3, 3, "3-video pack"),
            (PaymentPackage.PACK_5, 5, "5-video pack"),
        ],
        ids=["single", "pack3", "pack5"],
    )
    def test_post_count_and_label(self, package, count, label):
        assert package.post_count == count
        assert package.label == label

    def test_string_serialization(self):
        assert str(PaymentPackage.PACK_3) == "pack3"


class TestAggressivenessTier:
    def test_labels(self):
        assert [t.label for t in AggressivenessTier] == ["Conservative", "Normal", "Growth mode"]


class TestRecordState:
    def test_has_exactly_four_members(self):
        assert len(RecordState) == 4

    def test_values(self):
        assert {s.value for s in RecordState} == {"absent", "saved", "edited", "deleted"}
