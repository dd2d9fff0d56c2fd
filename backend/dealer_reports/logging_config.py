"""Structured logging configuration using structlog.

API modules log through structlog directly; services and engines use the
standard library ``logging`` module.  Both end up in the same handler, which
renders through structlog's ``ProcessorFormatter`` so the report period bound
with :func:`report_context` shows up on every line either way.

Usage::

    from dealer_reports.logging_config import get_logger, report_context

    logger = get_logger(__name__)
    with report_context(year=2025, month=6):
        logger.info("monthly_report_generated", total_profit="8500.00")
    # Output: {"event": "monthly_report_generated", "year": 2025, "month": 6, ...}
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog


def setup_logging(json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        json_logs: If True, output JSON format. If False, use human-readable format.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors + [structlog.stdlib.PositionalArgumentsFormatter()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, log_level.upper()))

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the module.

    Returns:
        Structured logger instance with bound context.
    """
    return structlog.get_logger(name)


@contextmanager
def report_context(**period: Any) -> Iterator[None]:
    """Bind the report period to every log line inside the block.

    Args:
        **period: Context fields such as ``date``, ``year`` or ``month``.

    Example:
        with report_context(year=2025, month=6):
            logger.info("Regenerating")
    """
    with structlog.contextvars.bound_contextvars(**period):
        yield
