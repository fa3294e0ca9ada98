"""JSON-RPC wire protocol models for OVS unixctl.

Defines Pydantic v2 models for the two message types exchanged over a
control socket. These models enforce the wire format at the serialization
boundary; the client never touches raw dicts.

Wire format: one JSON object per message, with no delimiter and no length
prefix. Message boundaries are implied by the JSON grammar itself. Unlike
JSON-RPC 2.0 there is no ``jsonrpc`` member, params are always a list of
strings, and errors are strings.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, Strict, StrictStr

# Response ids must be JSON integers; "1", true and 1.0 are not accepted.
WireId = Annotated[int, Strict(), Field(ge=0)]


class JsonRpcRequest(BaseModel):
    """Outbound request.

    ``id`` is assigned by ``JsonRpcClient``; callers never choose it.
    """

    method: str
    params: list[str] = Field(default_factory=list)
    id: int = Field(ge=0)


class JsonRpcResponse(BaseModel):
    """Inbound response.

    ``error`` is a non-empty string iff the remote call failed; any other
    JSON type is a malformed response. A missing or null ``id`` means the
    peer is misbehaving.
    """

    model_config = ConfigDict(extra="ignore")

    result: Any = None
    error: StrictStr | None = None
    id: WireId | None = None


__all__ = ["JsonRpcRequest", "JsonRpcResponse"]
