"""CLI command modules."""

from .control import list_commands, run, version

__all__ = ["list_commands", "run", "version"]
