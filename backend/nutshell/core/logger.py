"""
Logging setup.

All application loggers live below the "nutshell" namespace and share the
handler installed on it.
"""

import logging
import sys

from nutshell.core.config import get_settings

ROOT_LOGGER_NAME = "nutshell"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(get_settings().LOG_LEVEL)
        root.propagate = False
    return root


def setup_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a logger for ``name`` with the application handler attached."""
    _configure_root()
    return logging.getLogger(name)
