"""HTTP client for a remote storage engine.

Every engine operation goes through one generic call: the method name and
positional params are wrapped in an envelope, POSTed to a single endpoint,
and the response envelope is unwrapped into a result or an error. The
typed methods only order their params and decode the result payload.

Usage:
    with RemoteClient("http://localhost:8080/rpc") as client:
        comment_id = client.create(Comment(text="hi", locator=locator))
        comments = client.find(FindRequest(locator=locator, sort="-time"))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from comment_rpc.config import ClientConfig
from comment_rpc.envelope import decode_response, encode_request
from comment_rpc.errors import (
    BadStatusError,
    DecodeFailedError,
    EnvelopeDecodeError,
    RemoteApplicationError,
    RemoteCallError,
    ResultDecodeError,
)
from comment_rpc.types import (
    Comment,
    DeleteRequest,
    FindRequest,
    Flag,
    FlagRequest,
    InfoRequest,
    Locator,
    PostInfo,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HEADERS = {"Content-Type": "application/json"}


class RemoteClient:
    """Engine implementation backed by a remote server.

    Calls are synchronous and independent; the only shared resource is the
    httpx connection pool. Pass http_client to share a pool between clients
    or to plug in a custom transport; a pool passed in is never closed here.
    """

    def __init__(
        self,
        config: ClientConfig | str,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize remote client.

        Args:
            config: Client configuration, or just the endpoint URL.
            http_client: Optional preconfigured httpx client.
        """
        if isinstance(config, str):
            config = ClientConfig(api=config)
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else config.build_http_client()

    def call(self, method: str, *params: Any) -> Any:
        """Invoke a remote method and return its raw result payload.

        Args:
            method: Remote method name.
            *params: Positional arguments, already JSON-ready.

        Returns:
            The untyped result, or None when the server sent no result.

        Raises:
            RemoteCallError: If the HTTP round trip fails.
            BadStatusError: If the status is not 2xx.
            DecodeFailedError: If the body is not a valid envelope.
            RemoteApplicationError: If the server reported an error.
        """
        if self._client.is_closed:
            raise RemoteCallError(method, RuntimeError("client connection pool is closed"))

        body = encode_request(method, params)
        logger.debug("rpc %s -> %s", method, self.config.api)
        started = time.monotonic()

        try:
            response = self._client.post(self.config.api, content=body, headers=_HEADERS)
        except httpx.HTTPError as e:
            raise RemoteCallError(method, e) from e

        logger.debug(
            "rpc %s <- %d in %.1fms",
            method,
            response.status_code,
            (time.monotonic() - started) * 1000,
        )

        if not response.is_success:
            raise BadStatusError(method, response.status_code)

        try:
            envelope = decode_response(response.content)
        except EnvelopeDecodeError as e:
            raise DecodeFailedError(method, e) from e

        if envelope.error:
            raise RemoteApplicationError(envelope.error)
        return envelope.result

    def _call_typed(self, method: str, decode: Callable[[Any], T], *params: Any) -> T:
        """Call and decode the result payload into the operation's type."""
        result = self.call(method, *params)
        try:
            return decode(result)
        except (TypeError, ValueError) as e:
            raise ResultDecodeError(method, e) from e

    # ==========================================================================
    # Engine operations
    # ==========================================================================

    def create(self, comment: Comment) -> str:
        """Store a new comment. Returns the id assigned by the engine."""
        return self._call_typed("create", _decode_str, comment.to_dict())

    def get(self, locator: Locator, comment_id: str) -> Comment:
        """Get a single comment."""
        return self._call_typed("get", Comment.from_dict, locator.to_dict(), comment_id)

    def update(self, locator: Locator, comment: Comment) -> None:
        """Replace a stored comment."""
        self.call("update", locator.to_dict(), comment.to_dict())

    def find(self, request: FindRequest) -> list[Comment]:
        """Find comments. Order is the server's order."""
        return self._call_typed("find", _list_of(Comment.from_dict), request.to_dict())

    def info(self, request: InfoRequest) -> list[PostInfo]:
        """Get post summaries."""
        return self._call_typed("info", _list_of(PostInfo.from_dict), request.to_dict())

    def flag(self, request: FlagRequest) -> bool:
        """Get or set a flag. Returns the flag state after the request."""
        return self._call_typed("flag", _decode_bool, request.to_dict())

    def list_flags(self, site_id: str, flag: Flag) -> list[Any]:
        """List flagged entities.

        Records are returned as decoded JSON; their shape depends on the flag.
        """
        return self._call_typed("list_flags", _list_of(_identity), site_id, flag.to_wire())

    def count(self, request: FindRequest) -> int:
        """Count comments matching the request."""
        return self._call_typed("count", _decode_int, request.to_dict())

    def delete(self, request: DeleteRequest) -> None:
        """Delete what the request selects."""
        self.call("delete", request.to_dict())

    def close(self) -> None:
        """Close the remote engine, then release the connection pool if owned."""
        try:
            self.call("close")
        finally:
            self._release()

    def _release(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> RemoteClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit. Does not close the remote engine."""
        self._release()


# =============================================================================
# Result decoders
# =============================================================================


def _identity(value: Any) -> Any:
    return value


def _require(value: Any, expected: str) -> None:
    if value is None:
        raise ValueError(f"expected {expected}, got no result")


def _decode_str(value: Any) -> str:
    _require(value, "string")
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {type(value).__name__}")
    return value


def _decode_bool(value: Any) -> bool:
    _require(value, "bool")
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return value


def _decode_int(value: Any) -> int:
    _require(value, "integer")
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {type(value).__name__}")
    return value


def _list_of(decode: Callable[[Any], T]) -> Callable[[Any], list[T]]:
    def decode_list(value: Any) -> list[T]:
        # Servers encode an empty list as null
        if value is None:
            return []
        if not isinstance(value, list):
            raise TypeError(f"expected list, got {type(value).__name__}")
        return [decode(item) for item in value]

    return decode_list
