"""
Structured logging configuration using structlog.

Development gets a colored console renderer, production gets JSON lines.
Request-scoped values (request_id, path, user_id) are carried through
contextvars so every log line emitted while scoring a product is tagged.

Usage:
    from core.logging import configure_logging, get_logger

    configure_logging(json_logs=False)
    logger = get_logger(__name__)
    logger.info("Scored product", product_id="abc", overall_score=72)
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor


# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "uvicorn.access")


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        json_logs: JSON output (production) instead of console output.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        include_timestamp: Whether to include an ISO timestamp
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Bind values to all subsequent logs in the current context.

    Usage:
        bind_context(user_id="123", request_id="abc")
        logger.info("Scoring")  # includes user_id and request_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound values. Called at the end of each request."""
    structlog.contextvars.clear_contextvars()


class LoggerMixin:
    """
    Mixin that gives a class a logger named after itself.

    Usage:
        class ScoringService(LoggerMixin):
            def score_product(self, ...):
                self.logger.info("Scoring")
    """

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return get_logger(self.__class__.__name__)
