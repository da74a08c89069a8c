"""Persistence package.

Provides the creator record store, the lead store, the repositories they
persist through, and the SQLite schema and record lifecycle they rely on.
"""

from creatorpay.store.creators import CreatorRecordStore
from creatorpay.store.leads import LeadStore
from creatorpay.store.lifecycle import (
    TERMINAL_STATES,
    TRANSITIONS,
    RecordEvent,
    RecordLifecycle,
)
from creatorpay.store.repository import InMemoryRepository, Repository, SqliteRepository
from creatorpay.store.schema import close_state_db, init_app_state_table, init_state_db

__all__ = [
    "TERMINAL_STATES",
    "TRANSITIONS",
    "CreatorRecordStore",
    "InMemoryRepository",
    "LeadStore",
    "RecordEvent",
    "RecordLifecycle",
    "Repository",
    "SqliteRepository",
    "close_state_db",
    "init_app_state_table",
    "init_state_db",
]
