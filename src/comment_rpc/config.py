"""Configuration for the remote engine client."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import httpx
import yaml

from comment_rpc.errors import ConfigurationError


@dataclass
class ClientConfig:
    """Where and how to reach the remote engine.

    Held by each client instance; nothing here is process-global.
    """

    # Endpoint that accepts every method; the method name travels in the body
    api: str

    # Transport deadline in seconds for the whole round trip
    timeout: float = 5.0

    # HTTP basic auth, both or neither
    auth_user: str | None = None
    auth_password: str | None = None

    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate after initialization."""
        if not self.api:
            raise ConfigurationError("api endpoint is required")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if (self.auth_user is None) != (self.auth_password is None):
            raise ConfigurationError("auth_user and auth_password must be set together")

    @classmethod
    def from_yaml(cls, path: Path) -> ClientConfig:
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Create config from dictionary.

        Raises:
            ConfigurationError: On unknown keys or a missing api endpoint.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown config keys: {', '.join(unknown)}")
        if "api" not in data:
            raise ConfigurationError("api endpoint is required")

        return cls(
            api=data["api"],
            timeout=float(data.get("timeout", 5.0)),
            auth_user=data.get("auth_user"),
            auth_password=data.get("auth_password"),
            headers=dict(data.get("headers") or {}),
        )

    def build_http_client(self) -> httpx.Client:
        """Create the HTTP client used for calls."""
        auth = None
        if self.auth_user is not None and self.auth_password is not None:
            auth = httpx.BasicAuth(self.auth_user, self.auth_password)
        return httpx.Client(timeout=self.timeout, auth=auth, headers=self.headers)
