"""
Watched-item endpoints.

``POST`` marks a movie or episode as watched (repeating it only moves
the timestamp), ``DELETE`` unmarks it and always succeeds, ``GET``
lists a user's items for one media type, newest first.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Query, status

from series_tracker_api.app.schemas.watched import WatchedInput, WatchedItem
from series_tracker_api.app.services.normalizer import normalize_watched_filter
from series_tracker_api.app.services.watched_service import WatchedService

router = APIRouter()


@router.get("", response_model=List[WatchedItem])
async def list_watched(
    user_id: Optional[str] = Query(None, alias="userId"),
    media_type: Optional[str] = Query(None, alias="mediaType"),
    tmdb_id: Optional[str] = Query(None, alias="tmdbId"),
    season_number: Optional[str] = Query(None, alias="seasonNumber"),
    episode_number: Optional[str] = Query(None, alias="episodeNumber"),
) -> List[WatchedItem]:
    """List watched items.

    - **userId**, **mediaType**: required.
    - **tmdbId**, **seasonNumber**, **episodeNumber**: optional exact filters.
    """
    # Parameters arrive as raw strings so malformed numbers get the
    # same error body as every other validation failure.
    filters = normalize_watched_filter(user_id, media_type, tmdb_id, season_number, episode_number)
    return await WatchedService.list_items(filters)


@router.post("")
async def upsert_watched(item: WatchedInput) -> Dict[str, str]:
    await WatchedService.upsert(item)
    return {"status": "ok"}


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_watched(item: WatchedInput) -> None:
    await WatchedService.delete(item)
    return None
