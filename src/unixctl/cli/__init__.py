"""unixctl CLI - run control commands against OVS daemons.

The CLI is built using Typer. Global options select the daemon and
connection settings; each command opens one control session.

Package structure:
    cli/
    ├── __init__.py           # This file - app assembly
    ├── helpers.py            # Logging/connection state, session helper
    ├── output.py             # Rich formatting
    └── commands/
        ├── __init__.py       # Command exports
        └── control.py        # list-commands, version, run
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from unixctl import __version__

from . import helpers as helpers
from .commands import list_commands, run, version
from .helpers import (
    ConnectionOptions,
    LogFormat,
    LogLevel,
    configure_global_logging,
    set_connection_options,
    set_log_format,
    set_log_level,
)
from .output import console

# =============================================================================
# Typer app definition
# =============================================================================

app = typer.Typer(
    name="ovs-unixctl",
    help="Send control commands to Open vSwitch daemons over their unixctl socket",
    add_completion=False,
)


# =============================================================================
# Global option callbacks
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ovs-unixctl v{__version__}")
        raise typer.Exit()


def log_level_callback(value: LogLevel | None) -> LogLevel | None:
    """Set log level from CLI option."""
    if value:
        set_log_level(value)
    return value


def log_format_callback(value: LogFormat | None) -> LogFormat | None:
    """Set log format from CLI option."""
    if value:
        set_log_format(value)
    return value


@app.callback()
def main(
    show_version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    target: Annotated[
        str | None,
        typer.Option(
            "--target",
            "-t",
            help="Daemon to control (default: ovs-vswitchd)",
        ),
    ] = None,
    socket_path: Annotated[
        Path | None,
        typer.Option(
            "--socket",
            "-s",
            help="Explicit control socket path; skips pid-file discovery",
        ),
    ] = None,
    rundir: Annotated[
        Path | None,
        typer.Option(
            "--rundir",
            help="Runtime directory holding pid files and sockets",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help="Socket read/write timeout in seconds (default: 1)",
        ),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            case_sensitive=False,
            help="Logging level",
            envvar="UNIXCTL_LOG_LEVEL",
        ),
    ] = None,
    log_format: Annotated[
        LogFormat | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            case_sensitive=False,
            help="Log format",
            envvar="UNIXCTL_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """ovs-unixctl - control Open vSwitch daemons."""
    configure_global_logging(console)
    set_connection_options(
        ConnectionOptions(
            target=target,
            socket_path=socket_path,
            rundir=rundir,
            timeout=timeout,
        )
    )


# =============================================================================
# Command registration
# =============================================================================

app.command(name="list-commands")(list_commands)
app.command()(version)
app.command()(run)


__all__ = ["app", "main"]
