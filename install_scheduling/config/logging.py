"""
Logging configuration for the application.

Request-scoped values (request_id) are bound through structlog contextvars
by the logging middleware and merged into every event logged while the
request is handled.
"""

import logging
import sys
from typing import Any, Dict

import structlog

from install_scheduling.config.settings import Settings, settings

# Environments that ship logs to an aggregator instead of a terminal
JSON_ENVIRONMENTS = ("production", "staging")

NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx", "httpcore", "redis")


def service_context(config: Settings):
    """Processor stamping service name and environment on each event."""

    def add_service_context(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict.setdefault("service", config.APP_NAME)
        event_dict.setdefault("environment", config.ENVIRONMENT)
        return event_dict

    return add_service_context


def configure_logging(config: Settings = settings) -> None:
    """Configure structured logging."""
    renderer = (
        structlog.processors.JSONRenderer()
        if config.ENVIRONMENT in JSON_ENVIRONMENTS
        else structlog.dev.ConsoleRenderer(colors=config.DEBUG)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            service_context(config),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.LOG_LEVEL),
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
