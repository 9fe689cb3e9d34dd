# projectstore/core/logging_setup.py
"""Root logger configuration."""

import logging
import sys

from projectstore.core.config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "projectstore-console"


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the root logger once; repeated calls only adjust the level."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.value)

    root = logging.getLogger()
    root.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)

    logger = logging.getLogger("projectstore")
    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
