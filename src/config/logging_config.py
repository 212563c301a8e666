# src/config/logging_config.py

"""Logging setup for the two ways the storefront runs.

The CLI writes one log file per launch inside ``logs/`` (for example
``logs/run_20261019_153045.log``) and keeps the terminal quiet: only
warnings reach stderr, while ingestion, filtering and authorization
detail lands in the file.

The serverless handler has no writable log directory worth keeping, so
it calls ``setup_logging(to_file=False)`` when its module loads.  That
attaches a single stderr handler at INFO, which the hosting platform
collects as the function's log stream.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_STREAM_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handler(
    handler: logging.Handler, level: int, fmt: str
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    return handler


def _current_log_file(logger: logging.Logger) -> Path | None:
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler):
            return Path(h.baseFilename)
    return None


def setup_logging(to_file: bool = True) -> Path | None:
    """Attach handlers to the ``storefront`` logger.

    Args:
        to_file: ``True`` for the CLI layout (DEBUG file plus WARNING
            console); ``False`` for a console-only INFO stream.

    Returns:
        The log file receiving this run's records, or ``None`` when
        logging goes to stderr only.  A logger that already has handlers
        is left untouched.
    """
    storefront_logger = logging.getLogger("storefront")
    if storefront_logger.handlers:
        return _current_log_file(storefront_logger)

    if not to_file:
        storefront_logger.setLevel(logging.INFO)
        storefront_logger.addHandler(
            _handler(
                logging.StreamHandler(sys.stderr), logging.INFO, _STREAM_FORMAT
            )
        )
        return None

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    storefront_logger.setLevel(logging.DEBUG)
    storefront_logger.addHandler(
        _handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.DEBUG,
            _FILE_FORMAT,
        )
    )
    storefront_logger.addHandler(
        _handler(
            logging.StreamHandler(sys.stderr), logging.WARNING, _STREAM_FORMAT
        )
    )
    storefront_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
