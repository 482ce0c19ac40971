"""Logging setup for the shortlinks service.

Everything logs under the ``shortlinks`` logger; modules get children of
it through :func:`get_logger`.
"""

import json
import logging
import sys
from typing import List, Optional


ROOT_LOGGER_NAME = "shortlinks"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; message and traceback are escaped by json.dumps"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the service logger.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Also write to this file when given
        json_format: Emit JSON lines instead of plain text

    Returns:
        The ``shortlinks`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Each create_app() reconfigures; close the previous handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Map ``shortlinks_app.*`` module names onto the ``shortlinks`` logger tree."""
    if name.startswith("shortlinks_app"):
        name = ROOT_LOGGER_NAME + name[len("shortlinks_app"):]
    return logging.getLogger(name)
