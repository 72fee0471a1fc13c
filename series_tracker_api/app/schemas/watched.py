"""
Pydantic models for watched movies and episodes.

The wire format is camelCase (``userId``, ``mediaType`` ...); the
Python attributes are snake_case and mapped through aliases.  Both
spellings are accepted on input.
"""

from typing import Optional

from pydantic import BaseModel, Field

from series_tracker_api.app.schemas import MAX_INT64

MEDIA_TYPES = ("movie", "tv")


class WatchedInput(BaseModel):
    """Body of an upsert or delete request.

    ``watched_at`` is ignored on delete.  Season and episode may be
    omitted (or ``null``) and then count as ``0``.
    """

    user_id: int = Field(0, alias="userId", le=MAX_INT64, examples=[1])
    media_type: str = Field("", alias="mediaType", examples=["tv"])
    tmdb_id: int = Field(0, alias="tmdbId", le=MAX_INT64, examples=[1396])
    season_number: Optional[int] = Field(0, alias="seasonNumber", le=MAX_INT64, examples=[1])
    episode_number: Optional[int] = Field(0, alias="episodeNumber", le=MAX_INT64, examples=[3])
    watched_at: Optional[str] = Field(None, alias="watchedAt", examples=["2024-05-01T20:15:00Z"])

    model_config = {
        "populate_by_name": True,
    }


class WatchedItem(BaseModel):
    """A stored watched row."""

    user_id: int = Field(..., alias="userId")
    media_type: str = Field(..., alias="mediaType")
    tmdb_id: int = Field(..., alias="tmdbId")
    season_number: int = Field(..., alias="seasonNumber")
    episode_number: int = Field(..., alias="episodeNumber")
    watched_at: str = Field(..., alias="watchedAt")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class WatchedFilter(BaseModel):
    """Parsed query of a list request.

    ``user_id`` and ``media_type`` are always applied; the remaining
    fields refine the result only when set.
    """

    user_id: int
    media_type: str
    tmdb_id: Optional[int] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
