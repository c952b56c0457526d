"""Structured logging setup"""
import logging
import sys
from typing import Optional

import structlog


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None):
    """Configure structlog; defaults come from settings"""
    if level is None or json_logs is None:
        from ratify.config import settings
        level = level or settings.log_level
        json_logs = settings.log_json if json_logs is None else json_logs

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    return structlog.get_logger(name)
