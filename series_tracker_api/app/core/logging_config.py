"""
Logging setup for the series tracker.

``setup_logging`` configures the root logger from the application
``Settings``: ``LOG_LEVEL`` picks the level (``DEBUG=true`` forces
``DEBUG``), and a non-empty ``LOG_FILE`` adds a UTF-8 file handler next
to the console handler, creating the file's directory when missing.
Every record carries the timestamp, logger name, level and message.
"""

import logging
from pathlib import Path

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: Settings) -> None:
    """Attach console and optional file handlers to the root logger.

    Does nothing when the root logger already has handlers.

    Parameters
    ----------
    config : Settings
        Source of ``log_level``, ``log_file`` and ``debug``.  Unknown
        level names fall back to ``INFO``.
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured (tests call ``create_app`` repeatedly).
        return

    if config.debug:
        numeric_level = logging.DEBUG
    else:
        numeric_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logfile = config.log_file.strip()
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
