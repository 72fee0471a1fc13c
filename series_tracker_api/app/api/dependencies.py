"""
Shared FastAPI dependencies.

The series store belongs to the application instance (created in
``create_app`` and kept on ``app.state``); endpoints obtain it through
``get_series_store`` so tests can build isolated apps.
"""

from fastapi import Request

from series_tracker_api.app.services.series_store import SeriesStore


def get_series_store(request: Request) -> SeriesStore:
    return request.app.state.series_store
