"""Series tracker API client.

This module defines a small client wrapper around the series tracker
REST API.  It uses the ``requests`` library internally and exposes
high-level methods for every endpoint:

* :meth:`health` – liveness probe.
* :meth:`list_series`, :meth:`get_series`, :meth:`create_series`,
  :meth:`update_series`, :meth:`delete_series` – series catalog.
* :meth:`register`, :meth:`login` – user accounts.
* :meth:`list_watched`, :meth:`mark_watched`, :meth:`unmark_watched` –
  watched movies and episodes.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list / ``False``)
and ``error`` is a dictionary with the keys ``status_code`` and
``message``.  The message is taken from the ``error`` field of the
API's JSON error body when present.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class SeriesTrackerAPI:
    """Client for interacting with the series tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/series``).
            params: Query parameters; ``None`` values are dropped.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------
    def health(self) -> Tuple[bool, Optional[ApiError]]:
        data, error = self._request("GET", "/health")
        if error:
            return False, error
        return bool(data and data.get("status") == "ok"), None

    # ------------------------------------------------------------------
    # Series operations
    # ------------------------------------------------------------------
    def list_series(
        self, status: Optional[str] = None, query: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve series, optionally filtered by exact status and a text query."""
        data, error = self._request("GET", "/api/series", params={"status": status, "q": query})
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_series(self, series_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", f"/api/series/{series_id}")

    def create_series(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a series.

        Args:
            payload: Series fields (``title`` is required).
        """
        return self._request("POST", "/api/series", json_body=payload)

    def update_series(
        self, series_id: int, changes: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Partially update a series.  Only the keys in ``changes`` are sent."""
        return self._request("PATCH", f"/api/series/{series_id}", json_body=changes)

    def delete_series(self, series_id: int) -> Tuple[bool, Optional[ApiError]]:
        _, error = self._request("DELETE", f"/api/series/{series_id}")
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Account operations
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Register a user and return its identity (``id``, ``name``, ``email``)."""
        return self._request(
            "POST",
            "/api/auth/register",
            json_body={"name": name, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Check credentials.  A failed login yields status 401 in ``error``."""
        return self._request("POST", "/api/auth/login", json_body={"email": email, "password": password})

    # ------------------------------------------------------------------
    # Watched operations
    # ------------------------------------------------------------------
    @staticmethod
    def _watched_key(
        user_id: int, media_type: str, tmdb_id: int, season_number: int, episode_number: int
    ) -> Dict[str, Any]:
        return {
            "userId": user_id,
            "mediaType": media_type,
            "tmdbId": tmdb_id,
            "seasonNumber": season_number,
            "episodeNumber": episode_number,
        }

    def list_watched(
        self,
        user_id: int,
        media_type: str,
        tmdb_id: Optional[int] = None,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve a user's watched items, most recent first."""
        params = {
            "userId": user_id,
            "mediaType": media_type,
            "tmdbId": tmdb_id,
            "seasonNumber": season_number,
            "episodeNumber": episode_number,
        }
        data, error = self._request("GET", "/api/user/watched", params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def mark_watched(
        self,
        user_id: int,
        media_type: str,
        tmdb_id: int,
        season_number: int = 0,
        episode_number: int = 0,
        watched_at: Optional[str] = None,
    ) -> Tuple[bool, Optional[ApiError]]:
        """Mark a movie or episode as watched (idempotent)."""
        body = self._watched_key(user_id, media_type, tmdb_id, season_number, episode_number)
        if watched_at:
            body["watchedAt"] = watched_at
        _, error = self._request("POST", "/api/user/watched", json_body=body)
        if error:
            return False, error
        return True, None

    def unmark_watched(
        self,
        user_id: int,
        media_type: str,
        tmdb_id: int,
        season_number: int = 0,
        episode_number: int = 0,
    ) -> Tuple[bool, Optional[ApiError]]:
        """Remove a watched mark.  Succeeds even if the item was not marked."""
        body = self._watched_key(user_id, media_type, tmdb_id, season_number, episode_number)
        _, error = self._request("DELETE", "/api/user/watched", json_body=body)
        if error:
            return False, error
        return True, None
