"""comment-rpc: client for a comment storage engine served over HTTP."""

# Core entry point
from comment_rpc.client import RemoteClient
from comment_rpc.config import ClientConfig
from comment_rpc.engine import Engine

# All errors (foundational)
from comment_rpc.errors import (
    BadStatusError,
    CommentRPCError,
    ConfigurationError,
    DecodeFailedError,
    EnvelopeDecodeError,
    RemoteApplicationError,
    RemoteCallError,
    ResultDecodeError,
)

# Domain types (serialized on every call)
from comment_rpc.types import (
    Comment,
    DeleteMode,
    DeleteRequest,
    Edit,
    FindRequest,
    Flag,
    FlagRequest,
    FlagStatus,
    InfoRequest,
    Locator,
    PostInfo,
    User,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "RemoteClient",
    "ClientConfig",
    "Engine",
    # Types
    "Comment",
    "User",
    "Edit",
    "Locator",
    "PostInfo",
    "FindRequest",
    "InfoRequest",
    "FlagRequest",
    "DeleteRequest",
    "Flag",
    "FlagStatus",
    "DeleteMode",
    # Errors
    "CommentRPCError",
    "RemoteCallError",
    "BadStatusError",
    "DecodeFailedError",
    "RemoteApplicationError",
    "ResultDecodeError",
    "EnvelopeDecodeError",
    "ConfigurationError",
]
