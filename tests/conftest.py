"""Shared pytest fixtures for the creatorpay test suite."""

from collections.abc import Callable, Iterator
from decimal import Decimal

import pytest
import structlog

from creatorpay.domain.models import CreatorDraft, CreatorRecord, Metrics
from creatorpay.domain.types import CampaignType, PaymentPackage
from creatorpay.store.creators import CreatorRecordStore
from creatorpay.store.repository import InMemoryRepository


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Reset structlog so configuration done by one test doesn't leak."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def sample_metrics() -> Metrics:
    """A representative set of average post metrics."""
    return Metrics(
        views=Decimal("100000"),
        likes=Decimal("8000"),
        comments=Decimal("300"),
        shares=Decimal("150"),
    )


@pytest.fixture
def sample_draft(sample_metrics: Metrics) -> CreatorDraft:
    """A complete creator draft for testing."""
    return CreatorDraft(
        name="Test Creator",
        email="creator@example.com",
        tiktok_url="https://www.tiktok.com/@testcreator",
        instagram_url="https://www.instagram.com/testcreator",
        metrics=sample_metrics,
        campaign_type=CampaignType.LINK_IN_BIO,
        payment_package=PaymentPackage.PACK_3,
        revenue_share_percent=Decimal("15"),
    )


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic record id source: rec-1, rec-2, ..."""
    counter = iter(range(1, 1_000_000))
    return lambda: f"rec-{next(counter)}"


@pytest.fixture
def memory_repo() -> InMemoryRepository[CreatorRecord]:
    """Empty in-memory creator repository."""
    return InMemoryRepository(CreatorRecord)


@pytest.fixture
def store(
    memory_repo: InMemoryRepository[CreatorRecord],
    id_factory: Callable[[], str],
) -> CreatorRecordStore:
    """Creator store backed by the in-memory repository."""
    return CreatorRecordStore(memory_repo, id_factory=id_factory)
