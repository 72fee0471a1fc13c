"""
Series endpoints.

CRUD over the in-memory series catalog.  Series ids are path segments
and must be positive integers; anything else is answered with 400.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from series_tracker_api.app.api.dependencies import get_series_store
from series_tracker_api.app.schemas import MAX_INT64
from series_tracker_api.app.schemas.series import SeriesCreate, SeriesRead, SeriesUpdate
from series_tracker_api.app.services.series_store import SeriesStore

router = APIRouter()


@router.get("", response_model=List[SeriesRead])
async def list_series(
    status_filter: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
    store: SeriesStore = Depends(get_series_store),
) -> List[SeriesRead]:
    """List series in insertion order.

    - **status**: exact status match (e.g. `watching`).
    - **q**: case-insensitive substring of title or overview.
    """
    return store.list(status=status_filter, query=q)


@router.post("", response_model=SeriesRead, status_code=status.HTTP_201_CREATED)
async def create_series(
    series: SeriesCreate,
    store: SeriesStore = Depends(get_series_store),
) -> SeriesRead:
    """Create a series.  An empty status becomes `planned`."""
    return store.create(series)


@router.get("/{series_id}", response_model=SeriesRead)
async def get_series(
    series_id: int = Path(..., ge=1, le=MAX_INT64),
    store: SeriesStore = Depends(get_series_store),
) -> SeriesRead:
    return store.get(series_id)


@router.patch("/{series_id}", response_model=SeriesRead)
async def update_series(
    series: SeriesUpdate,
    series_id: int = Path(..., ge=1, le=MAX_INT64),
    store: SeriesStore = Depends(get_series_store),
) -> SeriesRead:
    """Partially update a series; only fields sent with a value change."""
    return store.patch(series_id, series)


@router.delete("/{series_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_series(
    series_id: int = Path(..., ge=1, le=MAX_INT64),
    store: SeriesStore = Depends(get_series_store),
) -> None:
    store.delete(series_id)
    return None
