"""structlog configuration shared by the whole package.

Usage:
    from forum.core.logging import logger
    logger.info("thread_marked_read", thread_id=thread.id, user_id=user.id)
"""

import logging
import sys

import structlog

from forum.core.config import settings


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure stdlib logging and structlog processors.

    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
        fmt: "console" or "json", defaults to settings.LOG_FORMAT
    """
    level = (level or settings.LOG_LEVEL).upper()
    fmt = fmt or settings.LOG_FORMAT

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


setup_logging()

logger = structlog.get_logger("forum")
