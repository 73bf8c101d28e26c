"""
Turns raw transport output into a `ResponseEnvelope` or a typed error.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .body import JSON_CONTENT_TYPE
from .errors import ApiError, ResponseDecodeError
from .models import ResponseEnvelope


ERROR_TYPE_HEADER = "x-fc-error-type"
REQUEST_ID_HEADER = "x-fc-request-id"


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def decode_body(content: bytes, headers: Mapping[str, str], *, raw_buf: bool = False) -> Any:
    if raw_buf and not _header(headers, ERROR_TYPE_HEADER):
        body: Any = content
    else:
        try:
            body = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ResponseDecodeError(f"Response body is not valid UTF-8: {exc}") from exc

    content_type = _header(headers, "content-type") or ""
    if content_type.startswith(JSON_CONTENT_TYPE):
        try:
            body = json.loads(body)
        except ValueError as exc:
            raise ResponseDecodeError(f"Response declared JSON but could not be parsed: {exc}") from exc
    return body


def _error_field(body: Any, *names: str) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    for name in names:
        value = body.get(name)
        if value:
            return value
    return None


def interpret_response(
    status: int,
    headers: Mapping[str, str],
    content: bytes,
    *,
    raw_buf: bool = False,
    method: str = "",
    path: str = "",
) -> ResponseEnvelope:
    """
    Decode a response and raise `ApiError` for statuses outside [200, 300).
    """
    body = decode_body(content, headers, raw_buf=raw_buf)

    if status < 200 or status >= 300:
        message = _error_field(body, "ErrorMessage", "errorMessage")
        if message is None and isinstance(body, str) and body:
            message = body
        raise ApiError(
            status,
            error_code=_error_field(body, "ErrorCode", "errorCode"),
            message=message,
            request_id=_header(headers, REQUEST_ID_HEADER),
            method=method,
            path=path,
        )

    return ResponseEnvelope(headers=headers, data=body)
