"""Request/response envelopes of the RPC wire protocol.

Wire format
-----------
    request:  {"method": "<name>", "params": [<arg>, ...] | null}
    response: {"result": <any>}  or  {"error": "<message>"}

Params are positional. A call without arguments sends "params": null,
never an empty list. The result payload is left untyped here; callers
decode it into the operation's concrete type.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from comment_rpc.errors import EnvelopeDecodeError


class RequestEnvelope(BaseModel):
    """Method name plus positional arguments."""

    method: str
    params: list[Any] | None = None


class ResponseEnvelope(BaseModel):
    """Outcome of a call: a result payload or a server error string."""

    model_config = ConfigDict(extra="ignore")

    result: Any = None
    error: str | None = None


def encode_request(method: str, params: Sequence[Any] | None = None) -> bytes:
    """Serialize a call into compact JSON bytes."""
    envelope = RequestEnvelope(method=method, params=list(params) if params else None)
    return envelope.model_dump_json().encode("utf-8")


def decode_response(data: bytes) -> ResponseEnvelope:
    """Parse response bytes into an envelope.

    Raises:
        EnvelopeDecodeError: If the body is empty or not a valid envelope.
    """
    if not data.strip():
        raise EnvelopeDecodeError("EOF")
    try:
        return ResponseEnvelope.model_validate_json(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        reason = f"{location}: {first['msg']}" if location else first["msg"]
        raise EnvelopeDecodeError(reason) from e
