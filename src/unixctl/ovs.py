"""OVS unixctl interface.

``OvsUnixCtl`` runs control commands against ovs-vswitchd or any other
daemon speaking the unixctl protocol (ovsdb-server, ovn-northd, ...).

Usage:
    with OvsUnixCtl.connect() as ovs:
        print(ovs.version())
        for command, args in ovs.list_commands():
            ...
        print(ovs.run("bond/show", ["bond0"]))
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any, NamedTuple

from unixctl.config import DEFAULT_TARGET, DEFAULT_TIMEOUT, UnixCtlConfig
from unixctl.core.logging import get_logger
from unixctl.discovery import find_socket
from unixctl.exceptions import InvalidResponseError, SocketNotFoundError
from unixctl.jsonrpc.client import JsonRpcClient

_logger = get_logger("ovs")

# Separates the daemon name from its version in `version` output.
VERSION_MARKER = " (Open vSwitch) "

_VERSION_SEPARATORS = re.compile(r"[.-]")
_DIGITS = re.compile(r"[0-9]+")


class OvsVersion(NamedTuple):
    """Version reported by a daemon, e.g. ``3.2.1-4`` → ``(3, 2, 1, "4")``."""

    major: int
    minor: int
    patch: int
    suffix: str = ""

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.suffix}" if self.suffix else base


def _text_result(method: str, result: Any) -> str:
    """Return *result* if it is text, else raise InvalidResponseError."""
    if result is None:
        raise InvalidResponseError(method, "", "should not be empty")
    if not isinstance(result, str):
        raise InvalidResponseError(method, json.dumps(result), "expected a string result")
    return result


def parse_commands(text: str) -> list[tuple[str, str]]:
    """Parse ``list-commands`` output into (command, argument signature) pairs.

    The first line is a header. Each following line holds a command name,
    then optionally whitespace and its argument signature.
    """
    commands: list[tuple[str, str]] = []
    for line in text.splitlines()[1:]:
        fields = line.strip().split(maxsplit=1)
        if not fields:
            continue
        name = fields[0]
        args = fields[1].strip() if len(fields) > 1 else ""
        commands.append((name, args))
    return commands


def parse_version(text: str, method: str = "version") -> OvsVersion:
    """Parse ``"<daemon> (Open vSwitch) X.Y.Z[.patch|-patch]"``.

    Raises:
        InvalidResponseError: the prefix is missing, the token count is not
            3 or 4, or a numeric component is not a number.
    """
    _daemon, marker, remainder = text.strip().partition(VERSION_MARKER)
    if not marker:
        raise InvalidResponseError(method, text, "invalid prefix")

    tokens = _VERSION_SEPARATORS.split(remainder, maxsplit=3)
    if len(tokens) not in (3, 4):
        raise InvalidResponseError(method, text, "parse error")

    numbers: list[int] = []
    for component, token in zip(("major", "minor", "patch"), tokens):
        if not _DIGITS.fullmatch(token):
            raise InvalidResponseError(
                method, text, f"can't parse {component} version component {token!r}"
            )
        numbers.append(int(token))

    suffix = tokens[3] if len(tokens) == 4 else ""
    return OvsVersion(numbers[0], numbers[1], numbers[2], suffix)


class OvsUnixCtl:
    """OVS unix control interface.

    Wraps a connected ``JsonRpcClient``. Use one of the constructors
    ``connect``, ``from_socket`` or ``from_config`` rather than building a
    client by hand. One instance owns one socket connection; close it (or
    use it as a context manager) when done.
    """

    def __init__(self, client: JsonRpcClient) -> None:
        self._client = client

    @classmethod
    def connect(
        cls,
        target: str = DEFAULT_TARGET,
        timeout: float | None = None,
        *,
        rundir: str | Path | None = None,
    ) -> OvsUnixCtl:
        """Discover *target*'s control socket and connect to it.

        *rundir* defaults to ``OVS_RUNDIR`` or ``/var/run/openvswitch``.
        *timeout* defaults to one second.

        Raises:
            DaemonNotRunningError: no usable pid file for *target*.
            SocketNotFoundError: no socket for the published pid.
            SocketError: the socket refused the connection.
        """
        sock_path = find_socket(target, rundir)
        return cls.from_socket(sock_path, timeout)

    @classmethod
    def from_socket(cls, path: str | Path, timeout: float | None = None) -> OvsUnixCtl:
        """Connect to an explicit control socket, skipping discovery."""
        path = Path(path)
        if not path.exists():
            raise SocketNotFoundError(str(path))
        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        _logger.debug("ovs_connecting", path=str(path), timeout=timeout)
        return cls(JsonRpcClient.unix(path, timeout))

    @classmethod
    def from_config(cls, config: UnixCtlConfig) -> OvsUnixCtl:
        """Connect using a ``UnixCtlConfig``."""
        if config.socket_path is not None:
            return cls.from_socket(config.socket_path, config.timeout)
        return cls.connect(config.target, config.timeout, rundir=config.rundir)

    @property
    def client(self) -> JsonRpcClient:
        return self._client

    def list_commands(self) -> list[tuple[str, str]]:
        """Run ``list-commands`` and return (command, arguments) pairs."""
        method = "list-commands"
        return parse_commands(_text_result(method, self._client.call(method)))

    def version(self) -> OvsVersion:
        """Retrieve the version of the running daemon."""
        method = "version"
        return parse_version(_text_result(method, self._client.call(method)), method)

    def run(self, method: str, args: Sequence[str] | None = None) -> str | None:
        """Run an arbitrary command and return its raw result.

        The result is not interpreted. Non-text results are returned as JSON.
        """
        result = self._client.call(method, args)
        if result is None or isinstance(result, str):
            return result
        return json.dumps(result)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> OvsUnixCtl:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"OvsUnixCtl(endpoint={self._client.endpoint!r})"


__all__ = ["OvsUnixCtl", "OvsVersion", "VERSION_MARKER", "parse_commands", "parse_version"]
