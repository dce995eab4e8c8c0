"""
Logger Implementation
=====================

structlog configuration for the graph engine and its scripts.

Until `setup_logging` runs, events are routed through the standard library
root logger without handlers, so an embedding application sees warnings
and errors on stderr and nothing below that.

After `setup_logging`:
- JSON lines in production, console rendering otherwise
- Every event carries the service name and version
- Context bound with `bind_context` is merged into each event

Version: 0.1.0
"""

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


VERSION = "0.1.0"


def _service_context(service_name: str) -> Processor:
    """Build a processor stamping `service` and `version` onto each event."""

    def add_service_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", VERSION)
        return event_dict

    return add_service_context


def _stringify_enums(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Render enum values (node kinds, relationship types) by value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def _configure_library_defaults() -> None:
    """Quiet stdlib-backed configuration used before `setup_logging`."""
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            _stringify_enums,
            structlog.processors.KeyValueRenderer(key_order=["event", "level"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    service_name: str = "devgraph",
) -> None:
    """
    Configure structlog for the application.

    Safe to call more than once; each call replaces the root handler and
    applies `log_level`.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output JSON format (True for production)
        service_name: Name of the service for context
    """
    level = getattr(logging, log_level.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(service_name),
        _stringify_enums,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        shared_processors.append(structlog.dev.set_exc_info)
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(
                show_locals=False,
                max_frames=10,
            ),
        )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # stderr, so CLI output on stdout stays machine-readable
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str | None = None) -> "BoundLogger":
    """
    Get a structured logger instance.

    Example:
        logger = get_logger(__name__)
        logger.info("node_created", kind=NodeKind.DEVELOPER, node_id="dev1")
    """
    return structlog.stdlib.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-value pairs to every subsequent event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


_configure_library_defaults()
