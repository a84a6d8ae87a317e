"""Tests for the request/response envelope codec."""

import json

import pytest

from comment_rpc.envelope import ResponseEnvelope, decode_response, encode_request
from comment_rpc.errors import EnvelopeDecodeError


class TestEncodeRequest:
    """Tests for request encoding."""

    def test_positional_params(self) -> None:
        """Params keep their order and are a list, not a mapping."""
        data = encode_request("get", [{"url": "u"}, "id1"])
        assert data == b'{"method":"get","params":[{"url":"u"},"id1"]}'

    def test_tuple_params(self) -> None:
        """Any sequence is sent as a JSON array."""
        data = encode_request("list_flags", ("site", "blocked"))
        assert json.loads(data) == {"method": "list_flags", "params": ["site", "blocked"]}

    @pytest.mark.parametrize("params", [None, [], ()])
    def test_no_params_is_null(self, params) -> None:
        """A call without arguments sends null, never an empty array."""
        assert encode_request("close", params) == b'{"method":"close","params":null}'

    def test_null_argument_is_kept(self) -> None:
        """A single null argument is still an argument."""
        assert encode_request("echo", [None]) == b'{"method":"echo","params":[null]}'


class TestDecodeResponse:
    """Tests for response decoding."""

    def test_result(self) -> None:
        """A result envelope exposes the untyped payload."""
        envelope = decode_response(b'{"result":[{"text":"1"}]}')
        assert envelope.result == [{"text": "1"}]
        assert envelope.error is None

    def test_error(self) -> None:
        """An error envelope carries the server string."""
        envelope = decode_response(b'{"error":"failed"}')
        assert envelope.error == "failed"

    def test_unknown_fields_ignored(self) -> None:
        """Extra top-level fields do not break decoding."""
        envelope = decode_response(b'{"id":7,"result":11}')
        assert envelope.result == 11

    @pytest.mark.parametrize("body", [b"", b"  \n"])
    def test_empty_body(self, body: bytes) -> None:
        """An empty body is reported as EOF."""
        with pytest.raises(EnvelopeDecodeError, match="^EOF$"):
            decode_response(body)

    def test_invalid_json(self) -> None:
        """Garbage bytes are rejected."""
        with pytest.raises(EnvelopeDecodeError, match="Invalid JSON"):
            decode_response(b'{"result":')

    def test_not_an_object(self) -> None:
        """A top-level array is not an envelope."""
        with pytest.raises(EnvelopeDecodeError):
            decode_response(b'["result"]')

    def test_error_must_be_string(self) -> None:
        """Structured error objects are malformed for this protocol."""
        with pytest.raises(EnvelopeDecodeError, match="^error: "):
            decode_response(b'{"error":{"code":1}}')

    def test_returns_envelope_model(self) -> None:
        """Decoding yields the pydantic envelope model."""
        assert isinstance(decode_response(b"{}"), ResponseEnvelope)
