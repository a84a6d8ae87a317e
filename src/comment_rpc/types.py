"""Domain types marshalled across the wire.

These mirror the storage engine's records field-for-field. Each type knows
how to turn itself into the JSON-ready dict the server expects (to_dict) and
how to rebuild itself from a decoded payload (from_dict). Keys documented as
optional are left out of the encoded form when they hold a zero value.

from_dict raises TypeError or ValueError when a payload has the wrong shape;
missing keys decode to zero values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)

_FRACTION = re.compile(r"^(.*T\d{2}:\d{2}:\d{2})\.(\d+)(.*)$")


def format_time(value: datetime) -> str:
    """Format as RFC 3339 with trailing fractional zeros trimmed.

    Naive datetimes are treated as UTC; UTC is written with a 'Z' suffix.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    text = value.replace(microsecond=0).isoformat()
    base, offset = text[:19], text[19:]
    if value.microsecond:
        base += "." + f"{value.microsecond:06d}".rstrip("0")
    if value.utcoffset() == timedelta(0):
        offset = "Z"
    return base + offset


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, truncating nanoseconds to microseconds."""
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    if match := _FRACTION.match(text):
        base, frac, rest = match.groups()
        text = f"{base}.{frac[:6]}{rest}"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def duration_to_nanos(value: timedelta) -> int:
    """Convert a timedelta to integer nanoseconds."""
    return ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * 1000


def nanos_to_duration(value: int) -> timedelta:
    """Convert integer nanoseconds to a timedelta (sub-microsecond precision is lost)."""
    return timedelta(microseconds=value // 1000)


# =============================================================================
# Closed enumerations
# =============================================================================


class _WireEnum(Enum):
    """Enum whose member values are the exact wire representation."""

    def to_wire(self) -> Any:
        return self.value

    @classmethod
    def from_wire(cls, value: Any) -> Any:
        """Look up a member by wire value.

        Raises:
            ValueError: If the value has no member.
        """
        if isinstance(value, bool):
            raise ValueError(f"unknown {cls.__name__} value {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown {cls.__name__} value {value!r}") from None


class Flag(_WireEnum):
    """Flag kinds an engine can set on a post or a user."""

    READ_ONLY = "readonly"
    VERIFIED = "verified"
    BLOCKED = "blocked"


class FlagStatus(_WireEnum):
    """Requested flag update. NON_SET only queries the current state."""

    NON_SET = ""
    TRUE = "true"
    FALSE = "false"


class DeleteMode(_WireEnum):
    """How much of a comment is erased on delete."""

    SOFT = 0
    HARD = 1


# =============================================================================
# Field readers
# =============================================================================


def _mapping(data: Any, name: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"{name} must be an object, got {type(data).__name__}")
    return data


def _nested(data: dict[str, Any], key: str) -> Any:
    # Null decodes to an empty object; other falsy values are still type-checked
    value = data.get(key)
    return {} if value is None else value


def _typed(data: dict[str, Any], key: str, kinds: tuple[type, ...], default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) and bool not in kinds:
        raise TypeError(f"field '{key}' must be {kinds[0].__name__}, got bool")
    if not isinstance(value, kinds):
        raise TypeError(f"field '{key}' must be {kinds[0].__name__}, got {type(value).__name__}")
    return value


def _str(data: dict[str, Any], key: str) -> str:
    return _typed(data, key, (str,), "")


def _int(data: dict[str, Any], key: str) -> int:
    return _typed(data, key, (int,), 0)


def _bool(data: dict[str, Any], key: str) -> bool:
    return _typed(data, key, (bool,), False)


def _float(data: dict[str, Any], key: str) -> float:
    return float(_typed(data, key, (float, int), 0.0))


def _time(data: dict[str, Any], key: str) -> datetime:
    text = _str(data, key)
    return parse_time(text) if text else ZERO_TIME


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Locator:
    """Identifies a discussion: a site plus the page URL."""

    site: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.site:
            result["site"] = self.site
        if self.url:
            result["url"] = self.url
        return result

    @classmethod
    def from_dict(cls, data: Any) -> Locator:
        data = _mapping(data, "locator")
        return cls(site=_str(data, "site"), url=_str(data, "url"))


@dataclass
class User:
    """Comment author as stored with each comment."""

    name: str = ""
    id: str = ""
    picture: str = ""
    ip: str = ""
    admin: bool = False
    blocked: bool = False
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name, "id": self.id, "picture": self.picture}
        if self.ip:
            result["ip"] = self.ip
        result["admin"] = self.admin
        if self.blocked:
            result["block"] = self.blocked
        if self.verified:
            result["verified"] = self.verified
        return result

    @classmethod
    def from_dict(cls, data: Any) -> User:
        data = _mapping(data, "user")
        return cls(
            name=_str(data, "name"),
            id=_str(data, "id"),
            picture=_str(data, "picture"),
            ip=_str(data, "ip"),
            admin=_bool(data, "admin"),
            blocked=_bool(data, "block"),
            verified=_bool(data, "verified"),
        )


@dataclass
class Edit:
    """Last edit of a comment."""

    timestamp: datetime = ZERO_TIME
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"time": format_time(self.timestamp), "summary": self.summary}

    @classmethod
    def from_dict(cls, data: Any) -> Edit:
        data = _mapping(data, "edit")
        return cls(timestamp=_time(data, "time"), summary=_str(data, "summary"))


@dataclass
class Comment:
    """A single comment record."""

    id: str = ""
    parent_id: str = ""
    text: str = ""
    orig: str = ""
    user: User = field(default_factory=User)
    locator: Locator = field(default_factory=Locator)
    score: int = 0
    votes: dict[str, bool] = field(default_factory=dict)
    vote: int = 0
    controversy: float = 0.0
    timestamp: datetime = ZERO_TIME
    edit: Edit | None = None
    pinned: bool = False
    deleted: bool = False
    imported: bool = False
    post_title: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the engine's JSON representation."""
        result: dict[str, Any] = {"id": self.id, "pid": self.parent_id, "text": self.text}
        if self.orig:
            result["orig"] = self.orig
        result["user"] = self.user.to_dict()
        result["locator"] = self.locator.to_dict()
        result["score"] = self.score
        if self.votes:
            result["votes"] = dict(self.votes)
        result["vote"] = self.vote
        if self.controversy:
            result["controversy"] = self.controversy
        result["time"] = format_time(self.timestamp)
        if self.edit is not None:
            result["edit"] = self.edit.to_dict()
        if self.pinned:
            result["pin"] = True
        if self.deleted:
            result["delete"] = True
        if self.imported:
            result["imported"] = True
        if self.post_title:
            result["title"] = self.post_title
        return result

    @classmethod
    def from_dict(cls, data: Any) -> Comment:
        """Create Comment from its JSON representation."""
        data = _mapping(data, "comment")

        votes = _mapping(_nested(data, "votes"), "votes")
        for user_id, value in votes.items():
            if not isinstance(value, bool):
                raise TypeError(f"vote of '{user_id}' must be bool, got {type(value).__name__}")

        edit = data.get("edit")

        return cls(
            id=_str(data, "id"),
            parent_id=_str(data, "pid"),
            text=_str(data, "text"),
            orig=_str(data, "orig"),
            user=User.from_dict(_nested(data, "user")),
            locator=Locator.from_dict(_nested(data, "locator")),
            score=_int(data, "score"),
            votes=dict(votes),
            vote=_int(data, "vote"),
            controversy=_float(data, "controversy"),
            timestamp=_time(data, "time"),
            edit=Edit.from_dict(edit) if edit is not None else None,
            pinned=_bool(data, "pin"),
            deleted=_bool(data, "delete"),
            imported=_bool(data, "imported"),
            post_title=_str(data, "title"),
        )


@dataclass
class PostInfo:
    """Summary of one discussion: URL and comment count."""

    url: str = ""
    count: int = 0
    read_only: bool = False
    first_time: datetime = ZERO_TIME
    last_time: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"url": self.url, "count": self.count}
        if self.read_only:
            result["read_only"] = True
        if self.first_time != ZERO_TIME:
            result["first_time"] = format_time(self.first_time)
        if self.last_time != ZERO_TIME:
            result["last_time"] = format_time(self.last_time)
        return result

    @classmethod
    def from_dict(cls, data: Any) -> PostInfo:
        data = _mapping(data, "post info")
        return cls(
            url=_str(data, "url"),
            count=_int(data, "count"),
            read_only=_bool(data, "read_only"),
            first_time=_time(data, "first_time"),
            last_time=_time(data, "last_time"),
        )


# =============================================================================
# Request parameters
# =============================================================================


@dataclass
class FindRequest:
    """Parameters of find and count.

    A locator without URL means a site-wide query; a user_id narrows the
    query to that user's comments. sort uses the +/-field syntax, e.g. "-time".
    """

    locator: Locator = field(default_factory=Locator)
    user_id: str = ""
    sort: str = ""
    since: datetime = ZERO_TIME
    limit: int = 0
    skip: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"locator": self.locator.to_dict()}
        if self.user_id:
            result["user_id"] = self.user_id
        if self.sort:
            result["sort"] = self.sort
        result["since"] = format_time(self.since)
        if self.limit:
            result["limit"] = self.limit
        if self.skip:
            result["skip"] = self.skip
        return result

    @classmethod
    def from_dict(cls, data: Any) -> FindRequest:
        data = _mapping(data, "find request")
        return cls(
            locator=Locator.from_dict(_nested(data, "locator")),
            user_id=_str(data, "user_id"),
            sort=_str(data, "sort"),
            since=_time(data, "since"),
            limit=_int(data, "limit"),
            skip=_int(data, "skip"),
        )


@dataclass
class InfoRequest:
    """Parameters of info. read_only_age is in days."""

    locator: Locator = field(default_factory=Locator)
    limit: int = 0
    skip: int = 0
    read_only_age: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"locator": self.locator.to_dict()}
        if self.limit:
            result["limit"] = self.limit
        if self.skip:
            result["skip"] = self.skip
        if self.read_only_age:
            result["ro_age"] = self.read_only_age
        return result

    @classmethod
    def from_dict(cls, data: Any) -> InfoRequest:
        data = _mapping(data, "info request")
        return cls(
            locator=Locator.from_dict(_nested(data, "locator")),
            limit=_int(data, "limit"),
            skip=_int(data, "skip"),
            read_only_age=_int(data, "ro_age"),
        )


@dataclass
class FlagRequest:
    """Parameters of flag: query or change one flag of a post or user."""

    flag: Flag
    locator: Locator = field(default_factory=Locator)
    user_id: str = ""
    update: FlagStatus = FlagStatus.NON_SET
    ttl: timedelta = field(default_factory=timedelta)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"flag": self.flag.to_wire(), "locator": self.locator.to_dict()}
        if self.user_id:
            result["user_id"] = self.user_id
        if self.update is not FlagStatus.NON_SET:
            result["update"] = self.update.to_wire()
        if self.ttl:
            result["ttl"] = duration_to_nanos(self.ttl)
        return result

    @classmethod
    def from_dict(cls, data: Any) -> FlagRequest:
        data = _mapping(data, "flag request")
        return cls(
            flag=Flag.from_wire(data.get("flag")),
            locator=Locator.from_dict(_nested(data, "locator")),
            user_id=_str(data, "user_id"),
            update=FlagStatus.from_wire(_str(data, "update")),
            ttl=nanos_to_duration(_int(data, "ttl")),
        )


@dataclass
class DeleteRequest:
    """Parameters of delete.

    With comment_id set a single comment is removed; with user_id set all of
    the user's comments are; otherwise the locator selects a post or a site.
    """

    locator: Locator = field(default_factory=Locator)
    comment_id: str = ""
    user_id: str = ""
    mode: DeleteMode = DeleteMode.SOFT

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"locator": self.locator.to_dict()}
        if self.comment_id:
            result["comment_id"] = self.comment_id
        if self.user_id:
            result["user_id"] = self.user_id
        result["del_mode"] = self.mode.to_wire()
        return result

    @classmethod
    def from_dict(cls, data: Any) -> DeleteRequest:
        data = _mapping(data, "delete request")
        return cls(
            locator=Locator.from_dict(_nested(data, "locator")),
            comment_id=_str(data, "comment_id"),
            user_id=_str(data, "user_id"),
            mode=DeleteMode.from_wire(data.get("del_mode", 0)),
        )
