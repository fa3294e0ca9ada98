"""Shared utilities for unixctl CLI commands.

This module contains helpers used across CLI command modules:
- Logging configuration state
- Connection option state set by the global callback
- Opening a control session and rendering its errors
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

import typer
from pydantic import ValidationError
from rich.console import Console

from unixctl.config import UnixCtlConfig
from unixctl.core.logging import configure_logging, get_logger
from unixctl.exceptions import UnixCtlError
from unixctl.ovs import OvsUnixCtl

from .output import console, output_error

_logger = get_logger("cli")


# =============================================================================
# Logging configuration
# =============================================================================


class LogLevel(str, Enum):
    """Log levels accepted by --log-level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log formats accepted by --log-format."""

    CONSOLE = "console"
    JSON = "json"


@dataclass
class CliLoggingConfig:
    """CLI logging configuration state."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "console"] = "console"
    configured: bool = False


_log_config = CliLoggingConfig()


def set_log_level(level: LogLevel) -> None:
    """Set the log level."""
    _log_config.level = level.value  # type: ignore[assignment]


def set_log_format(fmt: LogFormat) -> None:
    """Set the log format."""
    _log_config.format = fmt.value  # type: ignore[assignment]


def configure_global_logging(console_instance: Console) -> None:
    """Configure logging from the global CLI options, once per session.

    Raises:
        typer.Exit: If logging configuration fails.
    """
    if _log_config.configured:
        return
    try:
        configure_logging(level=_log_config.level, format=_log_config.format)
        _log_config.configured = True
    except ValueError as e:
        console_instance.print(f"[red]Logging configuration error:[/red] {e}")
        raise typer.Exit(1) from None


def reset_cli_state() -> None:
    """Reset logging and connection state (primarily for testing)."""
    global _connection
    _log_config.level = "WARNING"
    _log_config.format = "console"
    _log_config.configured = False
    _connection = ConnectionOptions()


# =============================================================================
# Connection options
# =============================================================================


@dataclass
class ConnectionOptions:
    """Where and how to reach the daemon, as given on the command line."""

    target: str | None = None
    socket_path: Path | None = None
    rundir: Path | None = None
    timeout: float | None = None


_connection = ConnectionOptions()


def set_connection_options(options: ConnectionOptions) -> None:
    global _connection
    _connection = options


def build_config(options: ConnectionOptions | None = None) -> UnixCtlConfig:
    """Turn CLI connection options into a ``UnixCtlConfig``.

    Unset options fall back to the environment and built-in defaults.
    """
    opts = options or _connection
    return UnixCtlConfig.from_env(
        target=opts.target,
        socket_path=opts.socket_path,
        rundir=opts.rundir,
        timeout=opts.timeout,
    )


@contextmanager
def control_session(json_output: bool = False) -> Iterator[OvsUnixCtl]:
    """Open a control session for one command.

    Any ``UnixCtlError`` raised while connecting or inside the block is
    printed and turned into exit code 1.
    """
    try:
        config = build_config()
    except ValidationError as e:
        output_error(f"Invalid connection options: {e}", json_output=json_output)
        raise typer.Exit(1) from None

    try:
        with OvsUnixCtl.from_config(config) as ovs:
            yield ovs
    except UnixCtlError as e:
        _logger.debug("cli_command_failed", error=str(e), error_type=type(e).__name__)
        output_error(
            str(e),
            error_code=type(e).__name__,
            json_output=json_output,
        )
        raise typer.Exit(1) from None


__all__ = [
    "CliLoggingConfig",
    "ConnectionOptions",
    "LogFormat",
    "LogLevel",
    "build_config",
    "configure_global_logging",
    "console",
    "control_session",
    "reset_cli_state",
    "set_connection_options",
    "set_log_format",
    "set_log_level",
]
