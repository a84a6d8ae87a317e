"""Error types for comment-rpc.

All errors inherit from CommentRPCError for easy catching at framework level.
"""


class CommentRPCError(Exception):
    """Base class for all comment-rpc errors."""

    pass


class RemoteCallError(CommentRPCError):
    """Raised when the HTTP round trip itself fails (connect, DNS, timeout)."""

    def __init__(self, method: str, cause: Exception) -> None:
        self.method = method
        self.cause = cause
        super().__init__(f"remote call failed for {method}: {_describe(cause)}")


class BadStatusError(CommentRPCError):
    """Raised when the server answers with a non-2xx HTTP status."""

    def __init__(self, method: str, status_code: int) -> None:
        self.method = method
        self.status_code = status_code
        super().__init__(f"bad status {status_code} for {method}")


class DecodeFailedError(CommentRPCError):
    """Raised when the response body is not a well-formed envelope."""

    def __init__(self, method: str, cause: Exception) -> None:
        self.method = method
        self.cause = cause
        super().__init__(f"failed to decode response for {method}: {_describe(cause)}")


class RemoteApplicationError(CommentRPCError):
    """Raised when the server reports an error in the envelope.

    The message is the server's error string, unchanged.
    """

    pass


class ResultDecodeError(CommentRPCError):
    """Raised when a result payload does not fit the operation's return type."""

    def __init__(self, operation: str, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"failed to decode {operation} result: {_describe(cause)}")


class EnvelopeDecodeError(CommentRPCError):
    """Raised by the envelope codec on malformed response bytes."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ConfigurationError(CommentRPCError):
    """Error in client configuration (missing endpoint, bad values)."""

    pass


def _describe(cause: Exception) -> str:
    # Some transport errors (timeouts mostly) carry an empty message.
    return str(cause) or type(cause).__name__
