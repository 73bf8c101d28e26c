"""
Shared `FCClient` accessor configured from the environment.
"""
from __future__ import annotations

from threading import Lock
from typing import Optional

from fc_client import FCClient

from .fc_config import get_fc_config


_client: Optional[FCClient] = None
_lock = Lock()


def get_fc_client(refresh: bool = False) -> FCClient:
    """
    Return a cached FCClient configured from environment variables.
    """
    global _client

    if _client is not None and not refresh:
        return _client

    with _lock:
        if _client is not None and not refresh:
            return _client

        cfg = get_fc_config()
        _client = FCClient(
            cfg.account_id,
            access_key_id=cfg.access_key_id,
            access_key_secret=cfg.access_key_secret,
            security_token=cfg.security_token,
            region=cfg.region,
            endpoint=cfg.endpoint,
            secure=cfg.secure,
            internal=cfg.internal,
            timeout=cfg.timeout,
        )
        return _client
