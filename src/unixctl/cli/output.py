"""Rich output formatting for the unixctl CLI.

Centralizes the console instance, table builders and error rendering so
every command prints in the same style.
"""

from __future__ import annotations

import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

# =============================================================================
# Shared console instance
# =============================================================================

console = Console()


# =============================================================================
# Table builders
# =============================================================================


def create_commands_table() -> Table:
    """Create the table used by ``list-commands``."""
    table = Table(title="Available Commands", show_lines=False)
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Arguments", style="dim")
    return table


def create_simple_table(show_header: bool = False) -> Table:
    """Create a simple table without box styling, for key-value displays."""
    return Table(show_header=show_header, box=None)


# =============================================================================
# Error output
# =============================================================================


def output_error(
    message: str,
    *,
    error_code: str | None = None,
    json_output: bool = False,
) -> None:
    """Output a formatted error, or its JSON alternative.

    Args:
        message: The error message to display.
        error_code: Optional error code (the exception class name).
        json_output: If True, output as JSON instead of Rich markup.
    """
    if json_output:
        result: dict[str, str | bool] = {
            "success": False,
            "message": message,
        }
        if error_code:
            result["error_code"] = error_code
        console.print_json(json.dumps(result))
        return

    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


__all__ = [
    "console",
    "create_commands_table",
    "create_simple_table",
    "output_error",
]
