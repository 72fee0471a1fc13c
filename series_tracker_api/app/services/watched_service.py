"""
Service layer for watched movies and episodes.

Rows in ``watched_items`` are identified by the composite key
``(user_id, media_type, tmdb_id, season_number, episode_number)``.
Marking an item as watched is a single ``INSERT ... ON CONFLICT DO
UPDATE`` statement, so repeating it only moves ``watched_at`` and
concurrent requests for the same key converge on one row without any
application-level locking.  Unmarking deletes by the same key and is
silent when nothing matched.

Timestamps are stored as UTC ``YYYY-MM-DD HH:MM:SS`` text, which sorts
chronologically.
"""

import logging
import sqlite3
from typing import List

from series_tracker_api.app.core.db import get_connection
from series_tracker_api.app.core.errors import InternalError
from series_tracker_api.app.schemas.watched import WatchedFilter, WatchedInput, WatchedItem
from series_tracker_api.app.services.normalizer import normalize_watched_at, normalize_watched_input

logger = logging.getLogger(__name__)


class WatchedService:
    """Upsert, delete and list watched items."""

    @classmethod
    async def upsert(cls, data: WatchedInput) -> WatchedItem:
        """Mark an item as watched, overwriting ``watched_at`` if it already was.

        Returns the row as stored.  Raises ``ValidationError`` for bad
        input and ``InternalError`` if the write fails.
        """
        data = normalize_watched_input(data)
        watched_at = normalize_watched_at(data.watched_at)
        conn = None
        try:
            conn = get_connection()
            conn.execute(
                """
                INSERT INTO watched_items (user_id, media_type, tmdb_id, season_number, episode_number, watched_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(user_id, media_type, tmdb_id, season_number, episode_number)
                DO UPDATE SET watched_at = excluded.watched_at
                """,
                (
                    data.user_id,
                    data.media_type,
                    data.tmdb_id,
                    data.season_number,
                    data.episode_number,
                    watched_at,
                ),
            )
            conn.commit()
        except sqlite3.Error:
            logger.exception("Failed to save watched item for user %s", data.user_id)
            raise InternalError("failed to save watched status")
        finally:
            if conn is not None:
                conn.close()

        logger.debug(
            "User %s watched %s %s S%sE%s at %s",
            data.user_id, data.media_type, data.tmdb_id, data.season_number, data.episode_number, watched_at,
        )
        return WatchedItem(
            user_id=data.user_id,
            media_type=data.media_type,
            tmdb_id=data.tmdb_id,
            season_number=data.season_number,
            episode_number=data.episode_number,
            watched_at=watched_at,
        )

    @classmethod
    async def delete(cls, data: WatchedInput) -> None:
        """Remove the row with the given key, if any.  ``watched_at`` is ignored."""
        data = normalize_watched_input(data)
        conn = None
        try:
            conn = get_connection()
            conn.execute(
                """
                DELETE FROM watched_items
                WHERE user_id = ? AND media_type = ? AND tmdb_id = ? AND season_number = ? AND episode_number = ?
                """,
                (data.user_id, data.media_type, data.tmdb_id, data.season_number, data.episode_number),
            )
            conn.commit()
        except sqlite3.Error:
            logger.exception("Failed to delete watched item for user %s", data.user_id)
            raise InternalError("failed to delete watched status")
        finally:
            if conn is not None:
                conn.close()

    @classmethod
    async def list_items(cls, filters: WatchedFilter) -> List[WatchedItem]:
        """Return a user's watched items, most recently watched first."""
        query = (
            "SELECT user_id, media_type, tmdb_id, season_number, episode_number, watched_at"
            " FROM watched_items WHERE user_id = ? AND media_type = ?"
        )
        params: list = [filters.user_id, filters.media_type]
        if filters.tmdb_id is not None:
            query += " AND tmdb_id = ?"
            params.append(filters.tmdb_id)
        if filters.season_number is not None:
            query += " AND season_number = ?"
            params.append(filters.season_number)
        if filters.episode_number is not None:
            query += " AND episode_number = ?"
            params.append(filters.episode_number)
        query += " ORDER BY watched_at DESC"

        conn = None
        try:
            conn = get_connection()
            rows = conn.execute(query, tuple(params)).fetchall()
        except sqlite3.Error:
            logger.exception("Failed to list watched items for user %s", filters.user_id)
            raise InternalError("failed to list watched items")
        finally:
            if conn is not None:
                conn.close()
        return [WatchedItem(**dict(row)) for row in rows]
