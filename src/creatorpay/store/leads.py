"""Append-only list of captured leads."""

from __future__ import annotations

import time
from collections.abc import Callable
from decimal import Decimal

import structlog

from creatorpay.domain.models import Lead
from creatorpay.formatting import round_whole
from creatorpay.store.repository import Repository

logger = structlog.get_logger()


def _now_ms() -> int:
    return int(time.time() * 1000)


class LeadStore:
    """Captured ``{email, payout, timestamp}`` entries, oldest first.

    Each capture appends to the loaded list and persists the whole list.
    Entries are never edited or removed.
    """

    def __init__(
        self,
        repository: Repository[Lead],
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize with a repository and a millisecond clock.

        Args:
            repository: Where the lead list is persisted.
            clock: Returns the current time in epoch milliseconds.
        """
        self._repository = repository
        self._clock = clock
        self._leads: list[Lead] = repository.load()

    def list(self) -> list[Lead]:
        """Return all captured leads."""
        return list(self._leads)

    def capture(self, email: str, payout: Decimal) -> Lead | None:
        """Record a lead with the payout estimate shown at capture time.

        Args:
            email: The lead's email; rejected if blank after trimming.
            payout: Modeled per-video payout, stored as whole dollars.

        Returns:
            The captured ``Lead``, or ``None`` if the email was blank.

        Raises:
            PersistenceError: If the list could not be written.
        """
        trimmed = email.strip()
        if not trimmed:
            logger.info("lead_capture_rejected", reason="email must not be empty")
            return None

        lead = Lead(email=trimmed, payout=round_whole(payout), timestamp=self._clock())
        leads = [*self._leads, lead]
        self._repository.save_all(leads)
        self._leads = leads

        logger.info("lead_captured", payout=lead.payout)
        return lead
