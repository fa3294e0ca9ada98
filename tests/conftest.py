"""Pytest fixtures for unixctl tests."""

import logging
import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

from tests.helpers import FakeUnixCtlServer


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset logging and CLI state before and after each test.

    This ensures test isolation for logging configuration.
    """
    from unixctl.cli import helpers as cli_helpers

    cli_helpers.reset_cli_state()
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    cli_helpers.reset_cli_state()
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def sock_dir() -> Generator[Path, None, None]:
    """A short temporary directory for Unix sockets.

    pytest's tmp_path can exceed the 108-byte AF_UNIX path limit.
    """
    path = Path(tempfile.mkdtemp(prefix="uctl-", dir="/tmp"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def make_server(
    sock_dir: Path,
) -> Generator[Callable[..., FakeUnixCtlServer], None, None]:
    """Factory starting FakeUnixCtlServers that are stopped after the test."""
    servers: list[FakeUnixCtlServer] = []

    def _make(name: str = "test.ctl", **kwargs: Any) -> FakeUnixCtlServer:
        server = FakeUnixCtlServer(sock_dir / name, **kwargs).start()
        servers.append(server)
        return server

    yield _make

    for server in servers:
        server.stop()


@pytest.fixture
def ovs_commands() -> dict[str, Any]:
    """Builtin commands of a fake ovs-vswitchd."""
    return {
        "list-commands": (
            "The available commands are:\n"
            "  bond/list                \n"
            "  bond/show                [port]\n"
            "  dpif-netdev/bond-show    [dp]\n"
            "  list-commands            \n"
            "  version                  \n"
        ),
        "version": "ovs-vswitchd (Open vSwitch) 3.2.1\n",
        "bond/show": lambda params: f"---- {params[0] if params else 'all'} ----\n",
    }
