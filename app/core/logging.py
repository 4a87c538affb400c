"""Logging setup for the card API.

Every module logs through ``logging.getLogger(__name__)`` with snake_case
event names and an ``extra`` dict; this module only wires the root logger.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Client libraries that log every HTTP round trip to Supabase at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "uvicorn.access")


def setup_logging() -> None:
    """Install a single stdout handler on the root logger.

    Safe to call more than once (tests, reloads): existing root handlers are
    replaced rather than stacked.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
