"""Structured logging configuration for Taskboard.

This module configures structlog with support for:
- JSON and console output formats
- File rotation based on size
- Correlation IDs for tracing one user action across log lines
- Board context binding

The logging system integrates structlog with Python's stdlib logging
for handlers (file rotation, stream selection), while using structlog
exclusively for actual log emission.

Example usage:
    >>> from taskboard.config import LoggingConfig
    >>> from taskboard.logging import setup_logging, get_logger, bind_board_context
    >>>
    >>> setup_logging(LoggingConfig(level="DEBUG", format="console"))
    >>> bind_board_context(board_id="main")
    >>> get_logger(__name__).info("board_ready", lists=2)
"""

from __future__ import annotations

import contextvars
import logging
import logging.handlers
import sys
from typing import Any

import structlog

from taskboard.config import LoggingConfig

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation_id to log event if set in context.

    Args:
        logger: Logger instance (unused, required by structlog protocol)
        method_name: Log method name (unused, required by structlog protocol)
        event_dict: Current event dictionary to augment

    Returns:
        Event dictionary with correlation_id added if available
    """
    correlation_id = _correlation_id.get()
    if correlation_id is not None:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID for current context."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def bind_board_context(board_id: str) -> None:
    """Bind the board identifier to all subsequent logs in this context.

    Args:
        board_id: Identifier of the board session emitting the logs
    """
    structlog.contextvars.bind_contextvars(board_id=board_id)


def setup_logging(config: LoggingConfig) -> None:
    """Configure structlog with the given configuration.

    Sets up the complete logging pipeline:
    - JSON or console rendering based on config.format
    - File rotation if config.file is specified, otherwise config.stream
    - Timestamp, log level, and logger name processors
    - Correlation ID processor
    - Rendering in a ProcessorFormatter, so tracebacks stay inside the event

    Args:
        config: Logging configuration from TaskboardConfig
    """
    log_level = getattr(logging, config.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)

        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            filename=config.file,
            maxBytes=config.rotation_size_mb * 1024 * 1024,
            backupCount=config.retention_count,
            encoding="utf-8",
        )
    else:
        stream = sys.stderr if config.stream == "stderr" else sys.stdout
        handler = logging.StreamHandler(stream)

    if config.format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    shared_processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Rendering happens in the handler's formatter, which also drops the
    # record's exc_info so tracebacks only appear inside the rendered event.
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    handler.setLevel(log_level)
    root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
