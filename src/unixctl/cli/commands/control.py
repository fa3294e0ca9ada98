"""Control commands for the unixctl CLI.

- `ovs-unixctl list-commands` - List the commands the daemon accepts
- `ovs-unixctl version` - Show the daemon's version
- `ovs-unixctl run METHOD [ARGS]...` - Run any command and print its raw result
"""

from __future__ import annotations

import json

import typer
from rich.text import Text

from ..helpers import control_session
from ..output import console, create_commands_table, create_simple_table


def list_commands(
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON",
    ),
) -> None:
    """List the commands supported by the daemon."""
    with control_session(json_output) as ovs:
        commands = ovs.list_commands()

    if json_output:
        console.print_json(
            json.dumps([{"command": name, "arguments": args} for name, args in commands])
        )
        return

    table = create_commands_table()
    for name, args in commands:
        table.add_row(Text(name), Text(args))
    console.print(table)


def version(
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON",
    ),
) -> None:
    """Show the version of the running daemon."""
    with control_session(json_output) as ovs:
        daemon_version = ovs.version()

    if json_output:
        console.print_json(json.dumps(daemon_version._asdict()))
        return

    table = create_simple_table()
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Version", str(daemon_version))
    table.add_row("Major", str(daemon_version.major))
    table.add_row("Minor", str(daemon_version.minor))
    table.add_row("Patch", str(daemon_version.patch))
    if daemon_version.suffix:
        table.add_row("Suffix", Text(daemon_version.suffix))
    console.print(table)


def run(
    method: str = typer.Argument(..., help="Command to run, e.g. bond/show"),
    args: list[str] | None = typer.Argument(None, help="Command arguments"),
) -> None:
    """Run an arbitrary command and print its raw result."""
    with control_session() as ovs:
        result = ovs.run(method, args)

    if result is not None:
        console.print(result, markup=False, highlight=False, soft_wrap=True, end="")
        if not result.endswith("\n"):
            console.print()
