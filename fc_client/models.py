"""
Immutable credential and endpoint containers shared by every request of a client.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import ConfigurationError


STS_KEY_PREFIX = "STS"
SERVICE_DOMAIN = "fc.aliyuncs.com"


@dataclass(frozen=True, slots=True)
class Credentials:
    access_key_id: str
    access_key_secret: str = field(repr=False)
    security_token: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.access_key_id:
            raise ConfigurationError("access_key_id must be passed in.")
        if not self.access_key_secret:
            raise ConfigurationError("access_key_secret must be passed in.")
        if self.access_key_id.startswith(STS_KEY_PREFIX) and not self.security_token:
            raise ConfigurationError("security_token must be passed in for STS access keys.")


@dataclass(frozen=True, slots=True)
class Endpoint:
    account_id: str
    region: str
    secure: bool = False
    internal: bool = False
    override: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.account_id:
            raise ConfigurationError("account_id must be passed in.")
        if not self.region:
            raise ConfigurationError("region must be passed in.")

    @property
    def host(self) -> str:
        suffix = "-internal" if self.internal else ""
        return f"{self.account_id}.{self.region}{suffix}.{SERVICE_DOMAIN}"

    @property
    def url(self) -> str:
        if self.override:
            return self.override.rstrip("/")
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}"


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    headers: Mapping[str, str]
    data: Any
