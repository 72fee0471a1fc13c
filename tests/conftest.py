import pytest
from fastapi.testclient import TestClient

from series_tracker_api.app.core.config import settings
from series_tracker_api.app.core.db import init_db
from series_tracker_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the application at a fresh, migrated database file."""
    path = tmp_path / "tracker.db"
    monkeypatch.setattr(settings, "database_path", str(path))
    init_db()
    return path


@pytest.fixture
def client(db_path):
    with TestClient(create_app()) as test_client:
        yield test_client
