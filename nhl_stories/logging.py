"""
Centralized structlog configuration for the stories service.

Provides JSON-formatted logs with environment context for filtering
in production.
"""

from __future__ import annotations

import logging

import structlog

from .config import get_settings


def _normalize_log_level(level: str | None, environment: str) -> int:
    env = environment.lower()
    if level:
        normalized = level.strip().upper()
    else:
        normalized = "INFO" if env == "production" else "DEBUG"
    return logging._nameToLevel.get(normalized, logging.INFO)


def configure_logging(log_level: str | None, environment: str) -> None:
    """
    Configure structlog with JSON output.

    All logs are output as JSON to stdout for easy aggregation.
    """
    resolved_level = _normalize_log_level(log_level, environment)
    logging.basicConfig(level=resolved_level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


_settings = get_settings()
configure_logging(_settings.log_level, _settings.environment)

# Global logger instance with service context
logger = structlog.get_logger("nhl-stories").bind(
    service="nhl-stories",
    environment=_settings.environment,
)
