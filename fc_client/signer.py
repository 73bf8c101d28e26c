from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Any, Mapping, Optional

from .canonical import compose_string_to_sign


AUTH_SCHEME = "FC"


def sign_string(source: str, secret: str) -> str:
    """Return the base64 HMAC-SHA256 of `source` keyed by `secret`."""
    digest = hmac.new(secret.encode("utf-8"), source.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def get_signature(
    access_key_id: str,
    access_key_secret: str,
    method: str,
    path: str,
    headers: Optional[Mapping[str, Any]] = None,
    queries: Optional[Mapping[str, Any]] = None,
) -> str:
    """Return the `authorization` header value for a request."""
    string_to_sign = compose_string_to_sign(method, path, headers or {}, queries)
    signature = sign_string(string_to_sign, access_key_secret)
    return f"{AUTH_SCHEME} {access_key_id}:{signature}"
