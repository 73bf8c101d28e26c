"""
Lightweight container for function compute settings pulled from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from fc_client.dispatcher import DEFAULT_TIMEOUT_MS
from fc_client.errors import ConfigurationError


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class FCConfig:
    account_id: str
    region: str
    access_key_id: str
    access_key_secret: str = field(repr=False)
    security_token: Optional[str] = field(default=None, repr=False)
    endpoint: Optional[str] = None
    secure: bool = False
    internal: bool = False
    timeout: float = DEFAULT_TIMEOUT_MS


def get_fc_config() -> FCConfig:
    """
    Read function compute credentials/settings from `.env` and environment variables.
    """
    load_dotenv()

    account_id = (os.getenv("FC_ACCOUNT_ID") or "").strip()
    region = (os.getenv("FC_REGION") or "").strip()
    access_key_id = (os.getenv("FC_ACCESS_KEY_ID") or "").strip()
    access_key_secret = (os.getenv("FC_ACCESS_KEY_SECRET") or "").strip()

    if not all([account_id, region, access_key_id, access_key_secret]):
        missing = [
            name
            for name, value in [
                ("FC_ACCOUNT_ID", account_id),
                ("FC_REGION", region),
                ("FC_ACCESS_KEY_ID", access_key_id),
                ("FC_ACCESS_KEY_SECRET", access_key_secret),
            ]
            if not value
        ]
        raise ConfigurationError(f"Function compute configuration missing required values: {', '.join(missing)}")

    raw_timeout = (os.getenv("FC_TIMEOUT_MS") or "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_MS
    except ValueError as exc:
        raise ConfigurationError(f"FC_TIMEOUT_MS must be a number, got {raw_timeout!r}") from exc

    return FCConfig(
        account_id=account_id,
        region=region,
        access_key_id=access_key_id,
        access_key_secret=access_key_secret,
        security_token=(os.getenv("FC_SECURITY_TOKEN") or "").strip() or None,
        endpoint=(os.getenv("FC_ENDPOINT") or "").strip() or None,
        secure=_parse_bool(os.getenv("FC_SECURE")),
        internal=_parse_bool(os.getenv("FC_INTERNAL")),
        timeout=timeout,
    )
