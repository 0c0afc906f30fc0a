# dashboard/log.py — structured event logging for the loader, controller and views
# What it does:
# - configures structlog once (ISO timestamp, level, JSON lines)
# - LOG_LEVEL from the environment drops events below that level
# - get_logger(__name__) -> log.info("event_name", key=value, ...)

from __future__ import annotations
import logging
import os

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer(sort_keys=True),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(LOG_LEVEL, logging.INFO)),
)


def get_logger(name: str):
    """Module logger; every event carries `module=name`."""
    return structlog.get_logger(name, module=name)
