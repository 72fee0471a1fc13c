"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with no configuration at all; override them via the
environment in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Series Tracker API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional log file.  When empty only the console handler is used.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file holding the ``users`` and
    # ``watched_items`` tables.  A blank value falls back to the default
    # file name.  Relative paths are resolved against the project root by
    # the ``db`` module.
    database_path: str = os.getenv("DB_PATH", "").strip() or "tracksm.db"

    # Bind address used by ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
