"""
Structured Logging with structlog

Provides structured, contextual logging for the detector, the introspection
layer and the CLI.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars


def setup_logging(
    level: str = "INFO",
    format: str = "console",  # "json" or "console"
    include_timestamp: bool = True,
) -> None:
    """
    Setup structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" for machines, "console" for humans)
        include_timestamp: Include timestamp in logs
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Log to stderr so CLI output on stdout stays parseable
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    shared_processors: list[Any] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso"))

    shared_processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]
    )

    if format == "json":
        output_processors = [
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=shared_processors + output_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ from calling module)

    Returns:
        Structured logger instance

    Example:
        ```python
        logger = get_logger(__name__)
        logger.debug("reactive_method_found", method="find_all", type_id="collections.abc.AsyncIterator")
        ```
    """
    return structlog.get_logger(name)


def log_performance(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    duration_ms: float,
    **extra: Any,
) -> None:
    """
    Log performance metrics in consistent format.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Duration in milliseconds
        **extra: Additional context (e.g., files_scanned)
    """
    perf_data = {
        "operation": operation,
        "duration_ms": round(duration_ms, 2),
        **extra,
    }

    if duration_ms > 1000:
        perf_data["slow"] = True
        logger.warning("slow_operation", **perf_data)
    else:
        logger.info("operation_complete", **perf_data)


__all__ = [
    "setup_logging",
    "get_logger",
    "log_performance",
]
