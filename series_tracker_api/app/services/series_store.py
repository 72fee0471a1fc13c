"""
In-memory series catalog.

``SeriesStore`` keeps the catalog as an ordered list plus a
monotonically increasing id counter.  One :class:`ReadWriteLock`
guards the whole collection: listing and lookups share the lock,
create/patch/delete hold it exclusively, so no caller ever sees a
half-applied change.  The store is created by ``create_app`` and
handed to endpoints through a dependency; there is no module-level
instance.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from series_tracker_api.app.core.errors import NotFoundError
from series_tracker_api.app.schemas.series import SeriesCreate, SeriesRead, SeriesUpdate
from series_tracker_api.app.services.normalizer import normalize_series_create, normalize_series_update

logger = logging.getLogger(__name__)


SEED_SERIES: list[dict] = [
    {
        "id": 1,
        "title": "Breaking Bad",
        "overview": "Professor de química vira produtor de metanfetamina.",
        "poster": "https://image.tmdb.org/t/p/w500/ztkUQFLlC19CCMYHW9o1zWhJRNq.jpg",
        "seasons": 5,
        "status": "completed",
        "rating": 9.5,
    },
    {
        "id": 2,
        "title": "Severance",
        "overview": "Funcionários separam memórias pessoais e de trabalho.",
        "poster": "https://image.tmdb.org/t/p/w500/lF4M1taK9Q4S3mM7Qv7v6V5T4Qf.jpg",
        "seasons": 2,
        "status": "watching",
        "rating": 9.0,
    },
    {
        "id": 3,
        "title": "Dark",
        "overview": "Mistérios temporais em uma cidade alemã.",
        "poster": "https://image.tmdb.org/t/p/w500/5Lo5fY2R8xk3Q4zNwJ2Y8Q6kU2q.jpg",
        "seasons": 3,
        "status": "planned",
        "rating": 8.8,
    },
]


class ReadWriteLock:
    """Many concurrent readers or a single writer.

    Once a writer is waiting, new readers queue behind it so a steady
    stream of reads cannot starve writes.  Not reentrant.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class SeriesStore:
    """Lock-guarded, ordered collection of series.

    Records are stored as ``SeriesRead`` models and replaced, never
    mutated, on update; callers always receive copies.
    """

    def __init__(self, items: Optional[Iterable[SeriesRead]] = None, next_id: Optional[int] = None) -> None:
        self._lock = ReadWriteLock()
        self._items: List[SeriesRead] = [item.model_copy() for item in (items or [])]
        highest = max((item.id for item in self._items), default=0)
        self._next_id = max(next_id or 0, highest + 1)

    @classmethod
    def with_seed_data(cls) -> "SeriesStore":
        """Return a store pre-loaded with the three sample series (ids 1-3)."""
        return cls(items=[SeriesRead(**row) for row in SEED_SERIES], next_id=4)

    def _index_of(self, series_id: int) -> int:
        for idx, item in enumerate(self._items):
            if item.id == series_id:
                return idx
        raise NotFoundError("series not found")

    def list(self, status: Optional[str] = None, query: Optional[str] = None) -> List[SeriesRead]:
        """Return series matching the filters in insertion order.

        ``status`` must match exactly; ``query`` is matched
        case-insensitively against title and overview.  Blank filters
        are ignored.
        """
        status = (status or "").strip()
        needle = (query or "").strip().lower()
        with self._lock.read():
            out = []
            for item in self._items:
                if status and item.status != status:
                    continue
                if needle and needle not in item.title.lower() and needle not in item.overview.lower():
                    continue
                out.append(item.model_copy())
            return out

    def get(self, series_id: int) -> SeriesRead:
        with self._lock.read():
            return self._items[self._index_of(series_id)].model_copy()

    def create(self, data: SeriesCreate) -> SeriesRead:
        """Validate ``data``, assign the next id and append the series."""
        data = normalize_series_create(data)
        with self._lock.write():
            item = SeriesRead(id=self._next_id, **data.model_dump())
            self._next_id += 1
            self._items.append(item)
        logger.info("Created series %s (%s)", item.id, item.title)
        return item.model_copy()

    def patch(self, series_id: int, data: SeriesUpdate) -> SeriesRead:
        """Apply the provided, non-null fields of ``data`` to a series.

        Raises ``NotFoundError`` when the id is unknown.
        """
        changes = normalize_series_update(data).provided()
        with self._lock.write():
            idx = self._index_of(series_id)
            updated = self._items[idx].model_copy(update=changes)
            self._items[idx] = updated
        logger.info("Updated series %s: %s", series_id, sorted(changes))
        return updated.model_copy()

    def delete(self, series_id: int) -> None:
        """Remove a series; the order of the others is preserved."""
        with self._lock.write():
            del self._items[self._index_of(series_id)]
        logger.info("Deleted series %s", series_id)
