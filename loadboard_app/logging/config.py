"""
Centralized logging configuration for the load board.

This module provides standardized logging configuration using structlog
for all components. Store mutations, persistence failures and notification
deliveries are all logged through this configuration so that the output
stays structured and consistent.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None,
    subsystem_levels: Optional[dict[str, str]] = None
) -> None:
    """
    Configure structlog for the load board service.

    Gateways log under "persistence.<name>", delivery mechanisms under
    "notification.delivery.<name>" and the store under its module path,
    so any of them can be quietened or opened up through subsystem_levels
    without touching the global level.

    Args:
        level: Root logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON lines; otherwise coloured console output
        include_timestamp: Include an ISO timestamp on every entry
        include_caller: Include filename and line number of the log call
        extra_processors: Additional structlog processors run before rendering
        subsystem_levels: Logger name prefix to level, e.g. {"persistence": "DEBUG"}
    """
    log_level = getattr(logging, level.upper())

    # Rendering happens in structlog, stdlib only routes the line
    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"
    )

    for prefix, prefix_level in (subsystem_levels or {}).items():
        logging.getLogger(prefix).setLevel(getattr(logging, prefix_level.upper()))

    # filter_by_level must run first so per-subsystem levels drop entries early
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    # Renderer goes last
    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger for a load board component, named after its module."""
    return structlog.get_logger(name)


def get_store_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for load store mutations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger with store context bound
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="load_store",
        audit_trail=True
    )


def log_store_mutation(
    logger: FilteringBoundLogger,
    operation: str,
    outcome: str,
    load_id: Optional[str] = None,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of a load store mutation with standardized format.

    Args:
        logger: Structlog logger instance
        operation: Store operation name (post_load, remove_load, ...)
        outcome: "committed", "rolled_back" or "rejected"
        load_id: Load the mutation addressed, if any
        context: Additional context data
    """
    bound_logger = logger.bind(
        operation=operation,
        outcome=outcome,
        load_id=load_id,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if outcome == "committed":
        bound_logger.info("Store mutation committed")
    else:
        bound_logger.warning("Store mutation not applied")
