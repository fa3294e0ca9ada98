"""Core infrastructure shared by every unixctl component."""

from unixctl.core.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
