"""unixctl - client for the OVS unixctl control-socket protocol."""

from unixctl.config import UnixCtlConfig
from unixctl.discovery import find_socket, find_socket_at
from unixctl.exceptions import (
    CommandError,
    DaemonNotRunningError,
    InvalidResponseError,
    ProtocolError,
    ReceiveTimeoutError,
    SerializeError,
    SocketError,
    SocketNotFoundError,
    UnixCtlError,
)
from unixctl.jsonrpc import JsonRpcClient
from unixctl.ovs import OvsUnixCtl, OvsVersion

__version__ = "0.1.0"

__all__ = [
    "CommandError",
    "DaemonNotRunningError",
    "InvalidResponseError",
    "JsonRpcClient",
    "OvsUnixCtl",
    "OvsVersion",
    "ProtocolError",
    "ReceiveTimeoutError",
    "SerializeError",
    "SocketError",
    "SocketNotFoundError",
    "UnixCtlConfig",
    "UnixCtlError",
    "__version__",
    "find_socket",
    "find_socket_at",
]
