"""
Structured logging for annomap.

Configures structlog once for the host process and hands out bound loggers.
Library modules only call :func:`get_logger`; the host decides format and
level through :func:`configure_logging` (usually from
:class:`~annomap.settings.AnnomapSettings`).

Examples:
    >>> from annomap.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> logger = get_logger(__name__)
    >>> logger.debug("registry_built", entries=8)

Guardrails:
    - Event names are snake_case; details go in key-value fields
    - Auto-detects JSON vs console based on TTY

Tags:
    logging, structlog, observability, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "annomap"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "annomap",
    cache_loggers: bool = True,
) -> None:
    """Configure structured logging for the host process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        cache_loggers: Freeze each logger on first use. Turn off when
            sys.stdout may be swapped later (test capture, reconfiguration).
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    The name travels as a bound ``logger`` field, so it works with any
    logger factory.

    Args:
        name: Logger name (usually __name__)
    """
    if name is None:
        return structlog.get_logger()
    # ``structlog.get_logger(logger=name)`` collides with wrap_logger's own
    # ``logger`` parameter; build the same lazy proxy directly.
    return BoundLoggerLazyProxy(
        None, initial_values={"logger": name}, logger_factory_args=()
    )


__all__ = ["configure_logging", "get_logger"]
