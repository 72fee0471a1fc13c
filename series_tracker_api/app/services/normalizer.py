"""
Input validation and canonicalisation.

Every function here is pure: it receives a parsed request model,
returns a normalised copy and raises
:class:`~series_tracker_api.app.core.errors.ValidationError` with a
message suitable for the client when the input is unacceptable.
Services call these before touching any state.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from series_tracker_api.app.core.errors import ValidationError
from series_tracker_api.app.schemas import MAX_INT64
from series_tracker_api.app.schemas.series import SeriesCreate, SeriesUpdate
from series_tracker_api.app.schemas.user import LoginInput, RegisterInput
from series_tracker_api.app.schemas.watched import MEDIA_TYPES, WatchedFilter, WatchedInput

DEFAULT_SERIES_STATUS = "planned"
MIN_PASSWORD_LENGTH = 6
WATCHED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

# Accepted ``watchedAt`` layouts, tried in order; the first one that
# matches wins.  Append new layouts at the end so that values accepted
# today keep their meaning.  Each value must match the pattern exactly
# before ``strptime`` reads it: fields are zero padded and offsets
# carry a colon.  The boolean marks date-only layouts, which are
# anchored at noon UTC so the calendar date survives any client
# timezone offset.
_DATE = r"[0-9]{4}-[0-9]{2}-[0-9]{2}"
_TIME = r"[0-9]{2}:[0-9]{2}:[0-9]{2}"
_OFFSET = r"(?:Z|[+-][0-9]{2}:[0-9]{2})"

WATCHED_AT_LAYOUTS: list[tuple[re.Pattern, str, bool]] = [
    # RFC 3339
    (re.compile(rf"{_DATE}T{_TIME}{_OFFSET}"), "%Y-%m-%dT%H:%M:%S%z", False),
    # RFC 3339 with fractional seconds
    (re.compile(rf"{_DATE}T{_TIME}\.[0-9]{{1,6}}{_OFFSET}"), "%Y-%m-%dT%H:%M:%S.%f%z", False),
    (re.compile(_DATE), "%Y-%m-%d", True),
    (re.compile(rf"{_DATE} {_TIME}"), "%Y-%m-%d %H:%M:%S", False),
]

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def normalize_series_create(data: SeriesCreate) -> SeriesCreate:
    title = data.title.strip()
    status = data.status.strip()
    if not title:
        raise ValidationError("title is required")
    return data.model_copy(update={"title": title, "status": status or DEFAULT_SERIES_STATUS})


def normalize_series_update(data: SeriesUpdate) -> SeriesUpdate:
    """Trim ``status`` when it was provided; nothing else changes."""
    if data.status is None:
        return data
    return data.model_copy(update={"status": data.status.strip()})


def normalize_registration(data: RegisterInput) -> RegisterInput:
    name = data.name.strip()
    email = data.email.strip().lower()
    if not name:
        raise ValidationError("name is required")
    if not email or "@" not in email:
        raise ValidationError("valid email is required")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must have at least {MIN_PASSWORD_LENGTH} characters")
    return data.model_copy(update={"name": name, "email": email})


def normalize_login(data: LoginInput) -> LoginInput:
    email = data.email.strip().lower()
    if not email or not data.password:
        raise ValidationError("email and password are required")
    return data.model_copy(update={"email": email})


def normalize_watched_input(data: WatchedInput) -> WatchedInput:
    """Validate a watched key and canonicalise season/episode.

    Movies have no seasons, so both numbers are forced to ``0``.  A tv
    episode must name its season.
    """
    media_type = data.media_type.strip().lower()
    season = data.season_number or 0
    episode = data.episode_number or 0
    if data.user_id <= 0:
        raise ValidationError("userId is required")
    if data.tmdb_id <= 0:
        raise ValidationError("tmdbId is required")
    if media_type not in MEDIA_TYPES:
        raise ValidationError("mediaType must be movie or tv")
    if media_type == "movie":
        season, episode = 0, 0
    elif episode > 0 and season <= 0:
        raise ValidationError("seasonNumber is required when episodeNumber is provided")
    if season < 0 or episode < 0:
        raise ValidationError("seasonNumber and episodeNumber must be positive")
    return data.model_copy(
        update={"media_type": media_type, "season_number": season, "episode_number": episode}
    )


def normalize_watched_at(raw: Optional[str], now: Optional[datetime] = None) -> str:
    """Return ``raw`` as a UTC ``YYYY-MM-DD HH:MM:SS`` string.

    A blank value means "now".  Otherwise the layouts in
    ``WATCHED_AT_LAYOUTS`` are tried in order.  Values without an
    offset are read as UTC.

    Parameters
    ----------
    raw : Optional[str]
        Timestamp sent by the client.
    now : Optional[datetime]
        Clock override used for blank values; defaults to the current
        UTC time.
    """
    value = (raw or "").strip()
    if not value:
        current = now or datetime.now(timezone.utc)
        return current.astimezone(timezone.utc).strftime(WATCHED_AT_FORMAT)

    for pattern, layout, date_only in WATCHED_AT_LAYOUTS:
        if not pattern.fullmatch(value):
            continue
        try:
            parsed = datetime.strptime(value, layout)
        except ValueError:
            continue
        if date_only:
            parsed = datetime(parsed.year, parsed.month, parsed.day, 12, 0, 0, tzinfo=timezone.utc)
        elif parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        try:
            converted = parsed.astimezone(timezone.utc)
        except OverflowError:
            # The offset pushes the instant outside years 1..9999.
            raise ValidationError("invalid watchedAt")
        return converted.strftime(WATCHED_AT_FORMAT)

    raise ValidationError("invalid watchedAt")


def _parse_int(raw: str) -> int:
    """Parse a signed 64-bit decimal integer; raise ``ValueError`` otherwise."""
    if not _INT_RE.match(raw):
        raise ValueError(raw)
    number = int(raw)
    if not -MAX_INT64 - 1 <= number <= MAX_INT64:
        raise ValueError(raw)
    return number


def normalize_watched_filter(
    user_id: Optional[str],
    media_type: Optional[str],
    tmdb_id: Optional[str] = None,
    season_number: Optional[str] = None,
    episode_number: Optional[str] = None,
) -> WatchedFilter:
    """Parse the raw query parameters of a watched list request.

    ``user_id`` and ``media_type`` are mandatory.  The optional filters
    are ignored when blank and rejected when malformed or out of range.
    """
    try:
        uid = _parse_int((user_id or "").strip())
    except ValueError:
        uid = 0
    if uid <= 0:
        raise ValidationError("userId is required")

    kind = (media_type or "").strip().lower()
    if kind not in MEDIA_TYPES:
        raise ValidationError("mediaType must be movie or tv")

    result = WatchedFilter(user_id=uid, media_type=kind)

    tmdb_raw = (tmdb_id or "").strip()
    if tmdb_raw:
        try:
            result.tmdb_id = _parse_int(tmdb_raw)
        except ValueError:
            raise ValidationError("invalid tmdbId")
        if result.tmdb_id <= 0:
            raise ValidationError("invalid tmdbId")

    for field, raw, label in (
        ("season_number", season_number, "seasonNumber"),
        ("episode_number", episode_number, "episodeNumber"),
    ):
        raw = (raw or "").strip()
        if not raw:
            continue
        try:
            number = _parse_int(raw)
        except ValueError:
            raise ValidationError(f"invalid {label}")
        if number < 0:
            raise ValidationError(f"invalid {label}")
        setattr(result, field, number)

    return result
