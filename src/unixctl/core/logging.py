"""Structured logging infrastructure for unixctl.

Provides structured logging using structlog with a component name bound to
every entry. The library itself only emits ``debug`` events (requests sent,
responses received, discovery steps); applications decide where they go by
calling ``configure_logging`` once at startup. Until then entries are handed
to the stdlib ``unixctl`` logger, so nothing is printed unless the host
application has set up stdlib logging itself.

Example usage:
    from unixctl.core.logging import get_logger, configure_logging

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("jsonrpc.client")

    # Log with key-value context
    logger.debug("rpc_request_sent", method="version", request_id=1)

    # Bind context for a scope
    ctx_logger = logger.bind(endpoint="unix:///var/run/openvswitch/x.ctl")
    ctx_logger.debug("connected")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Root of the stdlib logger hierarchy used by this package
LOGGER_NAME = "unixctl"

# A library must not emit anything until the application configures logging.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

# Sensitive field patterns that should never be logged
SENSITIVE_PATTERNS = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "auth",
})


def _sanitize_value(key: str, value: Any) -> Any:
    """Return ``"[REDACTED]"`` for values whose key looks sensitive."""
    key_lower = key.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in key_lower:
            return "[REDACTED]"
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that sanitizes sensitive fields.

    Args:
        logger: The wrapped logger object.
        method_name: The name of the method called on the logger.
        event_dict: The event dict containing all bound and event data.

    Returns:
        Sanitized event dict with sensitive values redacted.
    """
    sanitized: EventDict = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            sanitized[key] = {
                k: _sanitize_value(k, v) for k, v in value.items()
            }
        else:
            sanitized[key] = _sanitize_value(key, value)
    return sanitized


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds ISO8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


# Used while structlog is unconfigured: stdlib levels and handlers decide.
_FALLBACK_PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    _sanitize_event_dict,
    structlog.processors.KeyValueRenderer(key_order=["event"]),
]


class UnixCtlLogger:
    """Component logger wrapper around structlog.

    The logger is bound to a component name and can have additional context
    bound for a specific scope (e.g., endpoint, method).

    Note: This class uses lazy logger initialization so that loggers created
    at module import time still respect configuration set later via
    configure_logging().
    """

    def __init__(
        self,
        component: str,
        **initial_context: Any,
    ) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger
        if structlog.is_configured():
            logger = structlog.get_logger().bind(**self._context)
        else:
            logger = structlog.wrap_logger(
                logging.getLogger(LOGGER_NAME),
                processors=_FALLBACK_PROCESSORS,
                wrapper_class=structlog.stdlib.BoundLogger,
            ).bind(**self._context)
        return logger

    @property
    def context(self) -> dict[str, Any]:
        """The key-value pairs bound to every entry of this logger."""
        return dict(self._context)

    def bind(self, **context: Any) -> UnixCtlLogger:
        """Create a new logger with additional bound context.

        Args:
            **context: Additional context to bind (e.g., endpoint, method).

        Returns:
            A new UnixCtlLogger with the additional context bound.
        """
        new_logger = UnixCtlLogger.__new__(UnixCtlLogger)
        new_logger._component = self._component
        new_logger._context = {**self._context, **context}
        return new_logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)


def _get_processors(
    format: Literal["json", "console"],  # noqa: A002
    include_timestamps: bool,
) -> list[Processor]:
    """Get the structlog processor chain for the given output format.

    Args:
        format: "json" for structured output, "console" for human-readable.
        include_timestamps: Whether to add timestamps to log entries.

    Returns:
        List of processors ending with the matching renderer.
    """
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,  # Filter before processing
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]

    if include_timestamps:
        processors.append(_add_timestamp)

    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ])

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING",
    format: Literal["json", "console"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 10,
    backup_count: int = 3,
    include_timestamps: bool = True,
) -> None:
    """Configure unixctl structured logging.

    This should be called once at application startup before any logging occurs.

    Args:
        level: Minimum log level to capture.
        format: Output format - "json" for structured, "console" for human-readable.
        file_path: Optional file path for log output. When given, entries are
            written there (rotated) instead of to stderr/stdout.
        max_file_size_mb: Maximum log file size before rotation (MB).
        backup_count: Number of rotated log files to keep.
        include_timestamps: Whether to include ISO8601 timestamps in log entries.

    Raises:
        ValueError: If level is not a known log level name.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler: logging.Handler
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            file_path,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
    elif format == "json":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # NOTE: cache_logger_on_first_use=False ensures loggers respect runtime config
    # even when created at module import time before configure_logging() is called
    structlog.configure(
        processors=_get_processors(format, include_timestamps),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> UnixCtlLogger:
    """Get a unixctl logger for a component.

    Args:
        component: The component name (e.g., "jsonrpc.client", "discovery").
        **initial_context: Additional context to bind.

    Returns:
        A UnixCtlLogger instance bound to the component.
    """
    return UnixCtlLogger(component, **initial_context)


__all__ = [
    "LOGGER_NAME",
    "SENSITIVE_PATTERNS",
    "UnixCtlLogger",
    "configure_logging",
    "get_logger",
]
