"""
Structured logging configuration using structlog.

Provides JSON logging with ISO timestamps and stdlib compatibility.
Logs go to stderr so CLI results on stdout stay machine readable.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.typing import FilteringBoundLogger

from .settings import settings


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structlog with JSON output and stdlib compatibility.

    Args:
        log_level: Override log level from settings
        log_format: Override log format from settings
    """
    config = settings()
    level = (log_level or config.log_level).upper()
    format_type = (log_format or config.log_format).lower()

    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level),
    )

    def add_service_metadata(_, __, event_dict):
        event_dict["service"] = config.service_name
        event_dict["environment"] = config.environment
        return event_dict

    processors = [
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        add_service_metadata,
    ]

    # Choose renderer based on format
    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Development-friendly format
        processors.append(structlog.dev.ConsoleRenderer(colors=not config.is_production()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> FilteringBoundLogger:
    """Get a structlog logger; configuration applies on first use."""
    return structlog.get_logger(name)


def log_identifier_batch(
    logger: FilteringBoundLogger,
    command: str,
    accepted: int,
    rejected: int = 0,
    duration_ms: Optional[float] = None,
    **extra_context
) -> None:
    """
    Log the outcome of running one CLI command over a batch of identifiers.

    Any rejected identifier turns the summary into a warning.
    """
    total = accepted + rejected
    context = {
        "command": command,
        "identifiers": total,
        "accepted": accepted,
        "rejected": rejected,
        "acceptance_rate": round(accepted / total * 100, 2) if total else 0,
        **extra_context
    }

    if duration_ms is not None:
        context["duration_ms"] = round(duration_ms, 2)

    if rejected:
        logger.warning("Identifier batch had rejections", **context)
    else:
        logger.info("Identifier batch accepted", **context)
