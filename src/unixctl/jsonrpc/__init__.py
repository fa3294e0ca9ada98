"""JSON-RPC layer for unixctl - wire models, transports and the client."""

from unixctl.jsonrpc.client import JsonRpcClient
from unixctl.jsonrpc.protocol import JsonRpcRequest, JsonRpcResponse
from unixctl.jsonrpc.transport import JsonStream, JsonStreamClient
from unixctl.jsonrpc.unix import UnixJsonStream, UnixJsonStreamClient

__all__ = [
    "JsonRpcClient",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonStream",
    "JsonStreamClient",
    "UnixJsonStream",
    "UnixJsonStreamClient",
]
