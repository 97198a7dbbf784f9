from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from holdermap.config import settings


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Send structlog output to stderr through a level filter, rendered as JSON
    lines or in the console format.
    """
    lvl_name = (level or settings.LOG_LEVEL).upper()
    lvl = getattr(logging, lvl_name, None)
    if not isinstance(lvl, int):
        lvl = logging.INFO

    use_json = settings.LOG_JSON if json_output is None else json_output
    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(lvl),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
