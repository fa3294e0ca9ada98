"""Synchronous JSON transport over Unix domain sockets.

``UnixJsonStreamClient`` connects to a control socket and applies one
timeout to both reads and writes. ``UnixJsonStream`` writes each message
as bare JSON and reads exactly one JSON value per ``receive`` call.
"""

from __future__ import annotations

import json
import socket
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from unixctl.core.logging import get_logger
from unixctl.exceptions import ReceiveTimeoutError, SerializeError, SocketError
from unixctl.jsonrpc.framing import JsonValueScanner

_logger = get_logger("jsonrpc.unix")

T = TypeVar("T")

# Bytes requested per recv() call.
RECV_CHUNK_BYTES = 65_536


@lru_cache(maxsize=None)
def _adapter_for(type_: Any) -> TypeAdapter[Any]:
    """Build the validator for *type_* once and reuse it."""
    return TypeAdapter(type_)


class UnixJsonStream:
    """A connected Unix socket exchanging bare JSON values."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._scanner = JsonValueScanner()
        self._closed = False

    def send(self, message: Any) -> None:
        """Serialize *message* and write it with no delimiter."""
        try:
            if isinstance(message, BaseModel):
                payload = message.model_dump_json()
            else:
                payload = json.dumps(message)
        except (TypeError, ValueError) as exc:
            raise SerializeError(str(exc)) from exc

        try:
            self._sock.sendall(payload.encode("utf-8"))
        except OSError as exc:
            raise SocketError(str(exc) or type(exc).__name__) from exc

    def receive(self, type_: type[T]) -> T:
        """Read exactly one JSON value and validate it as *type_*."""
        raw = self._read_value()
        try:
            adapter: TypeAdapter[T] = _adapter_for(type_)
            return adapter.validate_json(raw)
        except ValidationError as exc:
            raise SerializeError(str(exc)) from exc

    def _read_value(self) -> bytes:
        while True:
            value = self._scanner.next_value()
            if value is not None:
                return value

            try:
                chunk = self._sock.recv(RECV_CHUNK_BYTES)
            except TimeoutError:
                raise ReceiveTimeoutError() from None
            except OSError as exc:
                raise SocketError(str(exc) or type(exc).__name__) from exc

            if not chunk:
                if self._scanner.has_partial:
                    raise SocketError("connection closed in the middle of a message")
                # End of stream before any value: nothing arrived in time.
                raise ReceiveTimeoutError()
            self._scanner.feed(chunk)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._sock.close()
        except OSError:
            _logger.debug("socket_close_failed", exc_info=True)


class UnixJsonStreamClient:
    """Opens ``UnixJsonStream`` connections to one socket path.

    Parameters
    ----------
    path:
        Filesystem path of the Unix domain socket.
    timeout:
        Read and write deadline in seconds, or None to block indefinitely.
    """

    def __init__(self, path: str | Path, timeout: float | None = None) -> None:
        self.path = Path(path)
        self.timeout = timeout

    def with_timeout(self, timeout: float) -> UnixJsonStreamClient:
        """Return a copy of this client using *timeout*."""
        return UnixJsonStreamClient(self.path, timeout)

    def connect(self) -> UnixJsonStream:
        """Connect to the socket and configure its deadline."""
        if self.timeout is not None and self.timeout <= 0:
            raise SocketError(f"invalid socket timeout: {self.timeout}")

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(self.timeout)
            sock.connect(str(self.path))
        except OSError as exc:
            sock.close()
            raise SocketError(f"cannot connect to {self}: {exc}") from exc

        _logger.debug("unix_stream_connected", endpoint=str(self), timeout=self.timeout)
        return UnixJsonStream(sock)

    def __str__(self) -> str:
        return f"unix://{self.path}"

    def __repr__(self) -> str:
        return f"UnixJsonStreamClient(path={str(self.path)!r}, timeout={self.timeout!r})"


__all__ = ["RECV_CHUNK_BYTES", "UnixJsonStream", "UnixJsonStreamClient"]
