"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  Each service call opens its own connection, runs a
single statement and closes it again; uniqueness is left to the
constraints declared below rather than to application-level locks.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: accounts
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: watched movies and episodes.  One row per
    # (user, media type, catalog id, season, episode); movies always use
    # season 0 / episode 0.
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS watched_items (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            media_type TEXT NOT NULL,
            tmdb_id INTEGER NOT NULL,
            season_number INTEGER NOT NULL DEFAULT 0,
            episode_number INTEGER NOT NULL DEFAULT 0,
            watched_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(user_id, media_type, tmdb_id, season_number, episode_number)
        );
        """,
    ),
    # Migration 3: listing is always by user and media type, newest first
    (
        3,
        """
        CREATE INDEX IF NOT EXISTS idx_watched_items_user_media
            ON watched_items(user_id, media_type, watched_at);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_path`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_path = settings.database_path
    if os.path.isabs(db_path):
        return db_path
    base_dir = Path(__file__).resolve().parent.parent.parent  # series_tracker_api/
    return str((base_dir / db_path).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  No
    type detection is enabled; timestamps come back as the text they
    were stored as.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  Errors are not caught: a database that cannot be
    opened or migrated must stop the application from starting.
    """
    path = get_database_path()
    logger.info("Using database %s", path)
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
