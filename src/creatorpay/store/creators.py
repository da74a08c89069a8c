"""Creator record store: the single owner of the creator collection.

Every mutation builds the next collection in memory, persists it through
the repository, and only then replaces the in-memory snapshot.  A failed
write leaves the snapshot untouched and propagates ``PersistenceError``.

Validation failures (blank name, unknown id) are expected and recoverable,
so they come back as a rejected ``StoreResult`` rather than an exception.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

import structlog

from creatorpay.domain.models import CreatorDraft, CreatorRecord, ReplaySettings, StoreResult
from creatorpay.domain.types import RecordState
from creatorpay.store.lifecycle import RecordEvent, RecordLifecycle
from creatorpay.store.repository import Repository

logger = structlog.get_logger()

NAME_REQUIRED = "name must not be empty"


def _new_record_id() -> str:
    return uuid.uuid4().hex


class CreatorRecordStore:
    """Ordered, persisted collection of creator profiles.

    Records are kept in insertion order; an update replaces a record in
    place without moving it.  The store never computes funnel results:
    callers evaluate records on demand.
    """

    def __init__(
        self,
        repository: Repository[CreatorRecord],
        id_factory: Callable[[], str] = _new_record_id,
    ) -> None:
        """Initialize and load the persisted collection.

        Args:
            repository: Where the collection is persisted.
            id_factory: Source of fresh record ids.  Defaults to hex UUID4.
        """
        self._repository = repository
        self._id_factory = id_factory
        self._records: dict[str, CreatorRecord] = {}
        self._lifecycles: dict[str, RecordLifecycle] = {}
        self.reload()

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def reload(self) -> None:
        """Replace the in-memory snapshot with the persisted collection."""
        records: dict[str, CreatorRecord] = {}
        for record in self._repository.load():
            if record.id in records:
                logger.warning("creator_duplicate_id_skipped", record_id=record.id)
                continue
            records[record.id] = record

        self._records = records
        self._lifecycles = {
            record_id: RecordLifecycle(RecordState.SAVED) for record_id in records
        }
        logger.debug("creators_loaded", count=len(records))

    def list(self) -> list[CreatorRecord]:
        """Return the current snapshot in storage order."""
        return list(self._records.values())

    def get(self, record_id: str) -> CreatorRecord | None:
        """Return the record with *record_id*, or ``None``."""
        return self._records.get(record_id)

    def load_for_replay(self, record_id: str) -> ReplaySettings | None:
        """Copy a record's calculator settings for replay.

        Args:
            record_id: The record to copy from.

        Returns:
            The record's settings, or ``None`` if the id is unknown.
        """
        record = self._records.get(record_id)
        if record is None:
            return None
        return ReplaySettings(
            metrics=record.metrics,
            campaign_type=record.campaign_type,
            payment_package=record.payment_package,
            revenue_share_percent=record.revenue_share_percent,
        )

    def state_of(self, record_id: str) -> RecordState:
        """Return the lifecycle state of *record_id* (ABSENT if never seen)."""
        lifecycle = self._lifecycles.get(record_id)
        return lifecycle.state if lifecycle is not None else RecordState.ABSENT

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(self, draft: CreatorDraft) -> StoreResult:
        """Save a new creator record.

        Args:
            draft: The creator input.  Its name must be non-empty after trim.

        Returns:
            A ``StoreResult`` carrying the new record, or the rejection reason.

        Raises:
            PersistenceError: If the collection could not be written.
        """
        if not draft.has_name:
            logger.info("creator_create_rejected", reason=NAME_REQUIRED)
            return StoreResult(error=NAME_REQUIRED)

        record_id = self._id_factory()
        while record_id in self._lifecycles:
            record_id = self._id_factory()

        lifecycle = RecordLifecycle()
        record = CreatorRecord.from_draft(record_id, draft)
        self._commit({**self._records, record_id: record})

        lifecycle.trigger(RecordEvent.CREATE)
        self._lifecycles[record_id] = lifecycle
        logger.info("creator_created", record_id=record_id, name=record.name)
        return StoreResult(record=record)

    def update(self, record_id: str, draft: CreatorDraft) -> StoreResult:
        """Fully replace an existing record.

        No field of the previous version survives: optional fields absent
        from *draft* are cleared.

        Args:
            record_id: The record to replace.
            draft: The new creator input.

        Returns:
            A ``StoreResult`` carrying the updated record, or the rejection reason.

        Raises:
            PersistenceError: If the collection could not be written.
        """
        lifecycle = self._lifecycles.get(record_id)
        if (
            record_id not in self._records
            or lifecycle is None
            or not lifecycle.can_trigger(RecordEvent.UPDATE)
        ):
            logger.info("creator_update_rejected", record_id=record_id, reason="unknown id")
            return StoreResult(error=f"no creator with id '{record_id}'")

        if not draft.has_name:
            logger.info("creator_update_rejected", record_id=record_id, reason=NAME_REQUIRED)
            return StoreResult(error=NAME_REQUIRED)

        record = CreatorRecord.from_draft(record_id, draft)
        updated = dict(self._records)
        updated[record_id] = record
        self._commit(updated)

        lifecycle.trigger(RecordEvent.UPDATE)
        logger.info("creator_updated", record_id=record_id, name=record.name)
        return StoreResult(record=record)

    def delete(self, record_id: str) -> None:
        """Remove a record.  Deleting an unknown id is a no-op.

        Args:
            record_id: The record to remove.

        Raises:
            PersistenceError: If the collection could not be written.
        """
        if record_id not in self._records:
            logger.debug("creator_delete_noop", record_id=record_id)
            return

        self._commit({k: v for k, v in self._records.items() if k != record_id})

        self._lifecycles[record_id].trigger(RecordEvent.DELETE)
        logger.info("creator_deleted", record_id=record_id)

    def _commit(self, records: dict[str, CreatorRecord]) -> None:
        """Persist *records* and, only on success, adopt them as the snapshot."""
        self._repository.save_all(list(records.values()))
        self._records = records
