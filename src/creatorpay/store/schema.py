"""SQLite schema for persisted application state.

State is a small key/value table: each key holds one whole collection as a
JSON array, so a collection is always replaced in a single statement.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path


def init_state_db(db_path: Path | str) -> sqlite3.Connection:
    """Open the state database with WAL mode and ensure the schema exists.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.

    Returns:
        An open sqlite3.Connection.
    """
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    init_app_state_table(conn)
    return conn


def init_app_state_table(conn: sqlite3.Connection) -> None:
    """Create the app_state table if it does not already exist.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS app_state (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)

    conn.commit()


def close_state_db(conn: sqlite3.Connection) -> None:
    """Close the state database connection.

    Args:
        conn: The database connection to close.
    """
    conn.close()
