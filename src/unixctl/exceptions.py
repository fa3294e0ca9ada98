"""Exception hierarchy for the unixctl client.

All client exceptions inherit from UnixCtlError, enabling callers to catch
broad (UnixCtlError) or narrow (e.g., CommandError). Transport failures
(SocketError, ReceiveTimeoutError), protocol failures (ProtocolError,
SerializeError) and application failures (CommandError,
InvalidResponseError) are kept apart so a caller never has to inspect a
lower layer to know what went wrong.
"""

from __future__ import annotations

from typing import Any


class UnixCtlError(Exception):
    """Base exception for all unixctl errors."""


class ProtocolError(UnixCtlError):
    """Raised when the peer violates the request/response correlation contract.

    Examples: a response without an id, or with the id of another request.
    The connection should be considered desynchronized.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"jsonrpc protocol error: {detail}")


class SerializeError(UnixCtlError):
    """Raised when a message cannot be encoded, or decoded JSON is malformed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"(de/)serialization error: {detail}")


class SocketError(UnixCtlError):
    """Raised on any transport-level I/O failure.

    Covers connect, read, write and timeout configuration. A decode that
    fails because the stream broke mid-message is also a SocketError.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"input/output socket error: {detail}")


class ReceiveTimeoutError(UnixCtlError):
    """Raised when no response value arrived before the socket deadline."""

    def __init__(self) -> None:
        super().__init__("connection timeout")


class CommandError(UnixCtlError):
    """Raised when the daemon executed the request but reported an error."""

    def __init__(self, method: str, params: str, error: Any) -> None:
        self.method = method
        self.params = params
        self.error = error if isinstance(error, str) else str(error)
        super().__init__(
            f"command {method}({params}) returns error: {self.error}"
        )


class SocketNotFoundError(UnixCtlError):
    """Raised when no control socket exists at the expected path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"socket not found: {path}")


class DaemonNotRunningError(UnixCtlError):
    """Raised when the target daemon has no usable pid file.

    Typically the pid file is missing, unreadable, or empty.
    """

    def __init__(self, target: str | None = None) -> None:
        self.target = target
        message = "OpenvSwitch is not running"
        if target:
            message = f"{message} (no pid for {target})"
        super().__init__(message)


class InvalidResponseError(UnixCtlError):
    """Raised when a builtin command returned data of an unexpected shape."""

    def __init__(self, method: str, response: str, detail: str) -> None:
        self.method = method
        self.response = response
        self.detail = detail
        super().__init__(
            f"{method} returned invalid data: {response!r} ({detail})"
        )


__all__ = [
    "CommandError",
    "DaemonNotRunningError",
    "InvalidResponseError",
    "ProtocolError",
    "ReceiveTimeoutError",
    "SerializeError",
    "SocketError",
    "SocketNotFoundError",
    "UnixCtlError",
]
