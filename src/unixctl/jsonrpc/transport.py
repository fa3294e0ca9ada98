"""Transport capabilities used by ``JsonRpcClient``.

The client only depends on these two structural interfaces, so another
medium (e.g. TCP) can be added by writing a new stream/stream-client pair
without touching the correlation logic.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class JsonStream(Protocol):
    """A connected stream that exchanges one JSON message at a time."""

    def send(self, message: Any) -> None:
        """Encode *message* and write it to the peer.

        Raises:
            SocketError: the write failed.
            SerializeError: the message cannot be encoded.
        """
        ...

    def receive(self, type_: type[T]) -> T:
        """Block until exactly one value arrives and validate it as *type_*.

        Raises:
            ReceiveTimeoutError: no value arrived before the deadline.
            SocketError: the read failed or the peer closed mid-message.
            SerializeError: the value is malformed or has the wrong shape.
        """
        ...

    def close(self) -> None:
        """Release the underlying connection. Safe to call twice."""
        ...


@runtime_checkable
class JsonStreamClient(Protocol):
    """Something that can open a ``JsonStream`` to a fixed endpoint.

    ``str()`` of a stream client describes its endpoint.
    """

    def connect(self) -> JsonStream:
        """Open a new stream.

        Raises:
            SocketError: the endpoint refused or could not be reached.
            SocketNotFoundError: the endpoint does not exist.
        """
        ...


__all__ = ["JsonStream", "JsonStreamClient"]
