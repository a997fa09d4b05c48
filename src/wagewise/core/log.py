"""Logging setup for the ``wagewise`` logger tree.

Modules obtain loggers with ``logging.getLogger(__name__)``; applications call
:func:`configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys

from wagewise.core.config import AppSettings

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER_NAME = "wagewise"
HANDLER_NAME = "wagewise-stdout"


def _installed_handler(logger: logging.Logger) -> logging.Handler | None:
    return next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)


def configure_logging(settings: AppSettings | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger at the configured level.

    Safe to call repeatedly; only the level is updated once the handler is in place.
    """
    if settings is None:
        settings = AppSettings()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(settings.log_level.upper())

    if _installed_handler(root) is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
        root.addHandler(handler)
        root.propagate = False

    return root
