from datetime import datetime, timezone

import pytest

from series_tracker_api.app.core.errors import ValidationError
from series_tracker_api.app.schemas.series import SeriesCreate, SeriesUpdate
from series_tracker_api.app.schemas.user import LoginInput, RegisterInput
from series_tracker_api.app.schemas.watched import WatchedInput
from series_tracker_api.app.services.normalizer import (
    normalize_login,
    normalize_registration,
    normalize_series_create,
    normalize_series_update,
    normalize_watched_at,
    normalize_watched_filter,
    normalize_watched_input,
)


def test_series_create_trims_and_defaults_status():
    result = normalize_series_create(SeriesCreate(title="  Foo  ", status="   "))
    assert result.title == "Foo"
    assert result.status == "planned"


def test_series_create_keeps_given_status():
    assert normalize_series_create(SeriesCreate(title="Foo", status=" watching ")).status == "watching"


def test_series_create_requires_title():
    with pytest.raises(ValidationError, match="title is required"):
        normalize_series_create(SeriesCreate(title="   "))


def test_series_update_trims_status_only_when_given():
    assert normalize_series_update(SeriesUpdate(status=" done ")).status == "done"
    untouched = normalize_series_update(SeriesUpdate(overview=" spaced "))
    assert untouched.overview == " spaced "
    assert untouched.status is None


def test_registration_normalizes_name_and_email():
    result = normalize_registration(RegisterInput(name=" Ana ", email="  Ana@Example.COM ", password="secret1"))
    assert result.name == "Ana"
    assert result.email == "ana@example.com"
    assert result.password == "secret1"


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"name": " ", "email": "a@b.c", "password": "secret1"}, "name is required"),
        ({"name": "Ana", "email": "  ", "password": "secret1"}, "valid email is required"),
        ({"name": "Ana", "email": "ana.example.com", "password": "secret1"}, "valid email is required"),
        ({"name": "Ana", "email": "a@b.c", "password": "12345"}, "at least 6 characters"),
    ],
)
def test_registration_rejects_bad_input(payload, message):
    with pytest.raises(ValidationError, match=message):
        normalize_registration(RegisterInput(**payload))


def test_login_lowercases_email_and_requires_both_fields():
    assert normalize_login(LoginInput(email=" ANA@b.c ", password="x")).email == "ana@b.c"
    with pytest.raises(ValidationError, match="email and password are required"):
        normalize_login(LoginInput(email="ana@b.c", password=""))
    with pytest.raises(ValidationError, match="email and password are required"):
        normalize_login(LoginInput(email="   ", password="secret1"))


def test_watched_movie_zeroes_season_and_episode():
    result = normalize_watched_input(
        WatchedInput(userId=1, mediaType=" MOVIE ", tmdbId=550, seasonNumber=2, episodeNumber=7)
    )
    assert result.media_type == "movie"
    assert (result.season_number, result.episode_number) == (0, 0)


def test_watched_tv_keeps_numbers_and_treats_null_as_zero():
    result = normalize_watched_input(WatchedInput(userId=1, mediaType="tv", tmdbId=1396, seasonNumber=None))
    assert (result.season_number, result.episode_number) == (0, 0)
    result = normalize_watched_input(
        WatchedInput(userId=1, mediaType="tv", tmdbId=1396, seasonNumber=1, episodeNumber=3)
    )
    assert (result.season_number, result.episode_number) == (1, 3)


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"userId": 0, "mediaType": "tv", "tmdbId": 1}, "userId is required"),
        ({"userId": 1, "mediaType": "tv", "tmdbId": -4}, "tmdbId is required"),
        ({"userId": 1, "mediaType": "book", "tmdbId": 1}, "mediaType must be movie or tv"),
        (
            {"userId": 1, "mediaType": "tv", "tmdbId": 1, "seasonNumber": 0, "episodeNumber": 3},
            "seasonNumber is required when episodeNumber is provided",
        ),
        (
            {"userId": 1, "mediaType": "tv", "tmdbId": 1, "seasonNumber": -1},
            "must be positive",
        ),
    ],
)
def test_watched_input_rejects_bad_keys(payload, message):
    with pytest.raises(ValidationError, match=message):
        normalize_watched_input(WatchedInput(**payload))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-05-01T20:15:00Z", "2024-05-01 20:15:00"),
        ("2024-05-01T20:15:00-03:00", "2024-05-01 23:15:00"),
        ("2024-05-01T20:15:00.250+00:00", "2024-05-01 20:15:00"),
        ("2024-05-01", "2024-05-01 12:00:00"),
        (" 2024-05-01 08:30:00 ", "2024-05-01 08:30:00"),
    ],
)
def test_watched_at_accepts_supported_layouts(raw, expected):
    assert normalize_watched_at(raw) == expected


def test_watched_at_blank_uses_current_utc_time():
    now = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert normalize_watched_at("  ", now=now) == "2024-01-02 03:04:05"
    assert normalize_watched_at(None, now=now) == "2024-01-02 03:04:05"


def test_watched_at_blank_without_clock_has_storage_format():
    value = normalize_watched_at("")
    assert datetime.strptime(value, "%Y-%m-%d %H:%M:%S")


@pytest.mark.parametrize(
    "raw",
    [
        "yesterday",
        "01/05/2024",
        "2024-13-01",
        "2024-1-5",
        "2024-05-01T20:15:00+0500",
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:00:00-05:00",
    ],
)
def test_watched_at_rejects_unknown_layouts(raw):
    with pytest.raises(ValidationError, match="invalid watchedAt"):
        normalize_watched_at(raw)


def test_watched_filter_parses_optional_refinements():
    result = normalize_watched_filter(" 7 ", "TV", "1396", "2", "")
    assert result.user_id == 7
    assert result.media_type == "tv"
    assert result.tmdb_id == 1396
    assert result.season_number == 2
    assert result.episode_number is None


@pytest.mark.parametrize(
    "args, message",
    [
        ((None, "tv"), "userId is required"),
        (("abc", "tv"), "userId is required"),
        (("0", "tv"), "userId is required"),
        (("1", "anime"), "mediaType must be movie or tv"),
        (("1", "tv", "0"), "invalid tmdbId"),
        (("1", "tv", "x1"), "invalid tmdbId"),
        (("1", "tv", None, "-1"), "invalid seasonNumber"),
        (("1", "tv", None, None, "two"), "invalid episodeNumber"),
        (("99999999999999999999", "tv"), "userId is required"),
        (("1", "tv", "9223372036854775808"), "invalid tmdbId"),
        (("1", "tv", None, "9223372036854775808"), "invalid seasonNumber"),
    ],
)
def test_watched_filter_rejects_malformed_values(args, message):
    with pytest.raises(ValidationError, match=message):
        normalize_watched_filter(*args)


def test_watched_filter_accepts_largest_integer():
    result = normalize_watched_filter("9223372036854775807", "movie", "9223372036854775807")
    assert result.user_id == 2**63 - 1
    assert result.tmdb_id == 2**63 - 1
