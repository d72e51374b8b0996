"""
Structured logging setup for the account service.
"""
import logging

import structlog

from .config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog processors and level from settings."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def mask_email(email: str) -> str:
    """Mask the local part of an email address for log output."""
    if not email or "@" not in email:
        return "***MASKED***"
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"
