"""File logging setup.

The terminal belongs to the TUI while it runs, so records only go to a
rotating file under the user data directory.
"""

from __future__ import annotations

import logging
import logging.handlers
import platform
from pathlib import Path

from platformdirs import user_data_dir

from . import __version__

APP_NAME = "dirscout"
LOG_FILENAME = "dirscout.log"
LOG_MAX_BYTES = 1024 * 1024
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"


def default_log_path() -> Path:
    return Path(user_data_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def initialize_logging(log_path: Path | None = None, level: int = logging.DEBUG) -> Path:
    """Attach a rotating file handler to the package logger and return the log path.

    Calling it again replaces the previously installed handler.
    """
    target = log_path or default_log_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=LOG_MAX_BYTES,
        backupCount=1,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    package_logger = logging.getLogger(APP_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    package_logger.info("%s %s on %s", APP_NAME, __version__, platform.platform())
    return target


__all__ = ["default_log_path", "initialize_logging"]
