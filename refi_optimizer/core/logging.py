"""Logging configuration for refi_optimizer.

Structured logging with structlog. Events go to stderr as console lines, or
as JSON lines when REFI_LOG_JSON is set.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

# Module-level state for lazy initialization
_configured: bool = False


def configure_logging(
    level: str | None = None,
    json_output: bool = False,
    force: bool = False,
) -> structlog.BoundLogger:
    """Configure structured logging for the solver.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env LOGLEVEL or WARNING.
        json_output: If True, output JSON format. Otherwise, console format.
        force: Reconfigure even if logging was already set up.

    Returns:
        Configured logger instance.
    """
    global _configured

    # Skip if already configured (idempotent)
    if _configured and not force:
        return structlog.get_logger()

    log_level = (level or os.environ.get("LOGLEVEL", "WARNING")).upper()
    numeric_level = getattr(logging, log_level, logging.WARNING)

    # Log to stderr so CLI output on stdout stays machine readable
    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True
    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger instance, optionally bound to a specific name.

    This function lazily initializes logging on first call.

    Args:
        name: Optional logger name (usually module name).

    Returns:
        Bound logger instance.
    """
    if not _configured:
        configure_logging()

    # Lazy proxy: processors are resolved on first use, after any CLI reconfiguration
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
