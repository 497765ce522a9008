"""Logging setup for the API process and the maintenance scripts."""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-request INFO lines from the webhook transport
_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging() -> None:
    """Log to stdout at DEBUG when settings.debug is set, INFO otherwise.

    httpx/httpcore stay at WARNING unless debug is on.
    """
    debug = get_settings().debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not debug:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__."""
    return logging.getLogger(name)
