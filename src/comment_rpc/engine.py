"""Storage engine protocol.

Both a local engine and RemoteClient implement this interface, so callers
can swap one for the other.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

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


@runtime_checkable
class Engine(Protocol):
    """Protocol for a comment storage engine."""

    def create(self, comment: Comment) -> str:
        """Store a new comment. Returns its id."""
        ...

    def get(self, locator: Locator, comment_id: str) -> Comment:
        """Get comment by id."""
        ...

    def update(self, locator: Locator, comment: Comment) -> None:
        """Replace an existing comment."""
        ...

    def find(self, request: FindRequest) -> list[Comment]:
        """Find comments for a post, a site or a user."""
        ...

    def info(self, request: InfoRequest) -> list[PostInfo]:
        """Get post summaries."""
        ...

    def flag(self, request: FlagRequest) -> bool:
        """Get or set a flag. Returns the resulting state."""
        ...

    def list_flags(self, site_id: str, flag: Flag) -> list[Any]:
        """List entities carrying the flag."""
        ...

    def count(self, request: FindRequest) -> int:
        """Count comments matching the request."""
        ...

    def delete(self, request: DeleteRequest) -> None:
        """Delete a comment, a user's comments, a post or a site."""
        ...

    def close(self) -> None:
        """Release engine resources."""
        ...
