"""Structured logging setup.

All modules log through the shared ``logger`` with snake_case event names
and keyword context, e.g. ``logger.info("interaction_approved", step_id=...)``.
"""

import logging

import structlog

from interaction_plugin.core.config import settings


def setup_logging(level: str = settings.LOG_LEVEL, fmt: str = settings.LOG_FORMAT) -> None:
    """Configure structlog for the plugin process.

    Args:
        level: Log level name.
        fmt: ``"json"`` for one JSON object per line, anything else for console output.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


setup_logging()

logger = structlog.get_logger(settings.PROJECT_NAME)
