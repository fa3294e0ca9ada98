"""Synchronous JSON-RPC client compatible with OVS unixctl.

``JsonRpcClient`` owns one connected ``JsonStream`` and correlates each
request with its response through a per-connection id counter:

- ``call(method)`` / ``call(method, params)``: send a request, block for the
  response, verify its id, and return the result or raise ``CommandError``.
- ``send_request(request)``: the lower-level step that only verifies id
  correlation and hands back the whole ``JsonRpcResponse``.

A client must be driven by one caller at a time: id generation is safe
across threads, but a send and its matching receive are not atomic.
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from unixctl.core.logging import get_logger
from unixctl.exceptions import CommandError, ProtocolError
from unixctl.jsonrpc.protocol import JsonRpcRequest, JsonRpcResponse
from unixctl.jsonrpc.transport import JsonStream, JsonStreamClient
from unixctl.jsonrpc.unix import UnixJsonStreamClient

_logger = get_logger("jsonrpc.client")


def _is_failure(response: JsonRpcResponse) -> bool:
    """A call failed when the daemon returned a non-empty error string."""
    return response.error is not None and response.error != ""


class JsonRpcClient:
    """JSON-RPC client over a single exclusively owned stream.

    Parameters
    ----------
    stream_client:
        Transport used to open the connection. The client connects
        immediately; a failure propagates as ``SocketError``.
    """

    def __init__(self, stream_client: JsonStreamClient) -> None:
        self._endpoint = str(stream_client)
        self._stream: JsonStream = stream_client.connect()
        self._ids = itertools.count(1)
        self._log = _logger.bind(endpoint=self._endpoint)

    @classmethod
    def unix(
        cls,
        socket_path: str | Path,
        timeout: float | None = None,
    ) -> JsonRpcClient:
        """Create a client connected over a Unix socket."""
        return cls(UnixJsonStreamClient(socket_path, timeout))

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def build_request(
        self,
        method: str,
        params: Sequence[str] = (),
    ) -> JsonRpcRequest:
        """Build a request for *method*, consuming the next id."""
        return JsonRpcRequest(method=method, params=list(params), id=next(self._ids))

    def send_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Send *request* and return the response carrying the same id.

        Raises:
            ProtocolError: the response has no id, or a different one.
            SocketError, ReceiveTimeoutError, SerializeError: from the transport.
        """
        self._stream.send(request)
        self._log.debug("rpc_request_sent", method=request.method, request_id=request.id)

        response = self._stream.receive(JsonRpcResponse)
        self._log.debug(
            "rpc_response_received",
            method=request.method,
            request_id=request.id,
            response_id=response.id,
            has_error=_is_failure(response),
        )

        if response.id is None:
            raise ProtocolError("id not found in response")
        if response.id != request.id:
            raise ProtocolError("request and response ids do not match")
        return response

    def call(
        self,
        method: str,
        params: Sequence[str] | None = None,
    ) -> Any:
        """Call *method* with optional string *params* and return its result.

        The result may be None; whether that is acceptable is up to the caller.

        Raises:
            CommandError: the daemon reported an error for this call.
            ProtocolError: the response could not be correlated.
            SocketError, ReceiveTimeoutError, SerializeError: from the transport.
        """
        args = list(params or ())
        response = self.send_request(self.build_request(method, args))
        if _is_failure(response):
            raise CommandError(method, ", ".join(args), response.error)
        return response.result

    def close(self) -> None:
        """Close the underlying stream."""
        self._stream.close()

    def __enter__(self) -> JsonRpcClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"JsonRpcClient(endpoint={self._endpoint!r})"


__all__ = ["JsonRpcClient"]
