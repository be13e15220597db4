"""
Namestore Logging - Structured logging for collection diagnostics.

Stores emit a handful of debug-level events (clear, reset, key removal,
read-only transitions, rejected mutations). This module configures structlog
for those events and for any application that embeds the store.

Manifesto:
    Collection internals are silent by default. Until structlog is
    configured, store events go to stdlib ``logging`` under ``namestore.*``
    and are dropped at its default WARNING level. When something goes wrong
    (a mutation rejected by read-only mode, an enumerator invalidated
    mid-loop), the events should be structured so they can be filtered by
    operation, key, and version instead of grepped out of prose.

    - **Structures:** JSON output for log aggregation
    - **Correlates:** Context binding (owner, request_id) via contextvars
    - **Flexes:** Console output for development, JSON for production

Architecture:
    ::

        configure_logging(level="DEBUG", json_format=None, service="namestore")
             ↓
        structlog processor chain:
          1. merge_contextvars
          2. add_log_level (logger name is bound by get_logger)
          3. TimeStamper (iso)
          4. add_service_metadata
          5. elasticsearch_compatible (JSON only)
          6. JSONRenderer (or ConsoleRenderer for a tty)

        logger = get_logger(__name__)
        logger.debug("store_cleared", removed=3, version=7)

Examples:
    >>> from namestore.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="props")
    >>> logger = get_logger(__name__)
    >>> logger.debug("store_cleared", removed=3)

Guardrails:
    - Nothing is printed until configure_logging (or the host) configures structlog
    - configure_logging sets the `namestore` stdlib logger level, not the root logger
    - Auto-detects JSON vs console based on TTY
    - Service name stored globally (set once at startup)
    - ECS-compatible field names for Elasticsearch

Tags:
    logging, structlog, observability, json-logging, namestore

Doc-Types:
    - API Reference
    - Observability Guide
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Store service name for metadata
_SERVICE_NAME = "namestore"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "namestore",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Applications call this once at startup; the library itself never does.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Stdlib-routed namestore loggers follow the same level
    logging.getLogger("namestore").setLevel(getattr(logging, level.upper()))


def configure_from_settings(settings: Any = None) -> None:
    """Configure logging from ``NameStoreSettings`` (loaded if not given)."""
    if settings is None:
        from namestore.core.settings import get_settings

        settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)


class LibraryLogger:
    """Logger handed to namestore's own modules.

    Until structlog is configured (by ``configure_logging`` or by the host
    application) events are routed through stdlib ``logging`` under the
    module's name, so stdlib levels and handlers decide: nothing is printed
    unless the host enables DEBUG for ``namestore``. Once structlog is
    configured, events go through its processor chain.

    The check runs on every call, so configuring logging after a store
    module was imported still takes effect.
    """

    def __init__(self, name: str | None = None):
        self._name = name
        self._stdlib = structlog.wrap_logger(
            logging.getLogger(name or "namestore"),
            wrapper_class=structlog.stdlib.BoundLogger,
            processors=[structlog.stdlib.render_to_log_kwargs],
        )

    def _target(self) -> Any:
        if structlog.is_configured():
            # PrintLogger has no name attribute, so bind it as context
            return structlog.get_logger(self._name, logger=self._name or "namestore")
        return self._stdlib

    def __getattr__(self, method: str) -> Any:
        return getattr(self._target(), method)

    def __repr__(self) -> str:
        return f"LibraryLogger({self._name!r})"


def get_logger(name: str | None = None) -> LibraryLogger:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        LibraryLogger, quiet until logging is configured
    """
    return LibraryLogger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(owner="connection-properties")
        logger.debug("store_cleared")  # Includes owner
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(owner="schema-groups"):
            bag.add("ref", group)
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "LibraryLogger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
