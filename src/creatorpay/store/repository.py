"""Repositories persisting whole collections as JSON arrays.

A repository only knows how to load and replace an entire collection; it
never patches individual items.  Stores build the next collection in memory
and hand it over in one ``save_all()`` call, so a reader never observes a
partially-applied mutation.

Read failures degrade to an empty collection and invalid items are skipped
one by one.  Write failures raise ``PersistenceError`` so data is never
silently lost.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Generic, Protocol, TypeVar

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from creatorpay.domain.errors import PersistenceError
from creatorpay.resilience.retry import resilient_write

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)


class Repository(Protocol[T]):
    """Load/replace interface for one persisted collection."""

    def load(self) -> list[T]:
        """Return the persisted collection, or ``[]`` if unavailable."""
        ...

    def save_all(self, items: Sequence[T]) -> None:
        """Replace the persisted collection with *items*."""
        ...


class _JsonCodec(Generic[T]):
    """Encode and decode a list of models as a JSON array.

    Decoding validates item by item: an item that fails validation is
    skipped with a warning so the rest of the collection still loads.
    A payload that is not a JSON array raises ``ValidationError``.
    """

    def __init__(self, item_type: type[T], key: str) -> None:
        self._key = key
        self._adapter: TypeAdapter[list[T]] = TypeAdapter(list[item_type])  # type: ignore[valid-type]
        self._item_adapter: TypeAdapter[T] = TypeAdapter(item_type)
        self._raw_adapter: TypeAdapter[list[Any]] = TypeAdapter(list[Any])

    def encode(self, items: Sequence[T]) -> str:
        return self._adapter.dump_json(list(items)).decode("utf-8")

    def decode(self, payload: str) -> list[T]:
        items: list[T] = []
        for index, raw in enumerate(self._raw_adapter.validate_json(payload)):
            try:
                items.append(self._item_adapter.validate_python(raw))
            except ValidationError as exc:
                logger.warning(
                    "state_item_skipped",
                    key=self._key,
                    index=index,
                    errors=exc.error_count(),
                )
        return items


class SqliteRepository(Generic[T]):
    """Persist a collection under a fixed key in the ``app_state`` table.

    Mirrors the rest of the storage layer: accepts an open connection, uses
    parameterized queries exclusively, and commits synchronously after
    every write.
    """

    def __init__(self, conn: sqlite3.Connection, key: str, item_type: type[T]) -> None:
        """Initialize with an open database connection.

        Args:
            conn: An open sqlite3.Connection whose database already has the
                  ``app_state`` table (see ``init_app_state_table``).
            key: Storage identifier the collection lives under.
            item_type: Pydantic model type of the collection's items.
        """
        self._conn = conn
        self._key = key
        self._codec: _JsonCodec[T] = _JsonCodec(item_type, key)

    @property
    def key(self) -> str:
        """Storage identifier of this collection."""
        return self._key

    def load(self) -> list[T]:
        """Load the collection, degrading to ``[]`` on any read failure."""
        try:
            row = self._conn.execute(
                "SELECT value FROM app_state WHERE key = ?",
                (self._key,),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.warning("state_load_failed", key=self._key, reason=str(exc))
            return []

        if row is None:
            return []

        try:
            return self._codec.decode(row[0])
        except ValidationError as exc:
            logger.warning(
                "state_load_corrupt",
                key=self._key,
                errors=exc.error_count(),
            )
            return []

    def save_all(self, items: Sequence[T]) -> None:
        """Replace the stored collection in a single statement.

        Raises:
            PersistenceError: If the write fails after retries.
        """
        payload = self._codec.encode(items)
        try:
            self._write(payload)
        except sqlite3.Error as exc:
            self._conn.rollback()
            logger.error("state_save_failed", key=self._key, reason=str(exc))
            raise PersistenceError(self._key, str(exc)) from exc

    def read_raw(self) -> str | None:
        """Return the stored JSON text, or ``None`` if the key is unset."""
        row = self._conn.execute(
            "SELECT value FROM app_state WHERE key = ?",
            (self._key,),
        ).fetchone()
        return row[0] if row else None

    @resilient_write("app_state_save")
    def _write(self, payload: str) -> None:
        now = datetime.now(tz=UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        self._conn.execute(
            "INSERT OR REPLACE INTO app_state (key, value, updated_at) VALUES (?, ?, ?)",
            (self._key, payload, now),
        )
        self._conn.commit()


class InMemoryRepository(Generic[T]):
    """Process-local repository holding the serialized JSON text.

    Serializing on every write keeps the in-memory fake faithful to the
    SQLite repository: loaded items are fresh copies, never shared objects.
    """

    def __init__(self, item_type: type[T], payload: str | None = None) -> None:
        self._codec: _JsonCodec[T] = _JsonCodec(item_type, "memory")
        self._payload = payload

    def load(self) -> list[T]:
        """Load the collection, degrading to ``[]`` on corrupt data."""
        if self._payload is None:
            return []
        try:
            return self._codec.decode(self._payload)
        except ValidationError as exc:
            logger.warning("state_load_corrupt", key="memory", errors=exc.error_count())
            return []

    def save_all(self, items: Sequence[T]) -> None:
        """Replace the held collection."""
        self._payload = self._codec.encode(items)

    def read_raw(self) -> str | None:
        """Return the held JSON text, or ``None`` if nothing was saved."""
        return self._payload
