"""Test fixtures for comment-rpc."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from comment_rpc import RemoteClient

API = "http://engine.test/rpc"


class FakeServer:
    """In-process stand-in for the remote engine.

    Records every request and replies with a canned body. When an expected
    body is given, the request body must match it byte for byte.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def client(
        self,
        expected: str | None,
        response: str,
        status_code: int = 200,
    ) -> RemoteClient:
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if expected is not None:
                assert request.content.decode() == expected
            return httpx.Response(status_code, content=response.encode())

        return self.client_with(handler)

    def client_with(self, handler: Callable[[httpx.Request], httpx.Response]) -> RemoteClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        return RemoteClient(API, http_client=http_client)


@pytest.fixture
def server() -> FakeServer:
    """Provide a fresh fake engine server."""
    return FakeServer()
