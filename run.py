"""Entry point for the series tracker API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8080``); the database location from ``DB_PATH``.

Usage:
    python run.py
"""
import logging

from uvicorn import Config, Server

from series_tracker_api.app.core.config import settings
from series_tracker_api.app.main import app


def main() -> None:
    """Serve the API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("API running on http://%s:%s", settings.host, settings.port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
