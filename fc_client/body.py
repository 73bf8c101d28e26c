"""
Request body shapes and their wire encoding.
"""
from __future__ import annotations

import base64
import hashlib
import io
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional

from .errors import BodyEncodingError


OCTET_STREAM = "application/octet-stream"
JSON_CONTENT_TYPE = "application/json"


class BodyKind(Enum):
    ABSENT = "absent"
    BYTES = "bytes"
    TEXT = "text"
    STREAM = "stream"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class RequestBody:
    kind: BodyKind
    payload: Any = None

    @classmethod
    def absent(cls) -> "RequestBody":
        return cls(BodyKind.ABSENT)

    @classmethod
    def from_bytes(cls, data: bytes) -> "RequestBody":
        return cls(BodyKind.BYTES, bytes(data))

    @classmethod
    def from_text(cls, text: str) -> "RequestBody":
        return cls(BodyKind.TEXT, text)

    @classmethod
    def from_stream(cls, stream: Any) -> "RequestBody":
        if not (hasattr(stream, "read") or isinstance(stream, Iterator)):
            raise BodyEncodingError("Stream bodies must be file-like objects or iterators.")
        return cls(BodyKind.STREAM, stream)

    @classmethod
    def from_value(cls, value: Any) -> "RequestBody":
        return cls(BodyKind.JSON, value)


@dataclass(frozen=True, slots=True)
class EncodedBody:
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)


def as_body(value: Any) -> RequestBody:
    """
    Classify a plain Python value into a `RequestBody`.

    `None` and the empty string mean "no body". File objects and generators are
    streamed; mappings, lists and scalars are serialized as JSON. Other
    iterables (sets, ranges, ...) are rejected.
    """
    if isinstance(value, RequestBody):
        return value
    if value is None or value == "":
        return RequestBody.absent()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RequestBody.from_bytes(value)
    if isinstance(value, str):
        return RequestBody.from_text(value)
    if isinstance(value, io.IOBase) or hasattr(value, "read"):
        return RequestBody.from_stream(value)
    if isinstance(value, (Mapping, list, tuple, int, float, bool)):
        return RequestBody.from_value(value)
    if isinstance(value, Iterator):
        return RequestBody.from_stream(value)
    raise BodyEncodingError(f"Unsupported request body type: {type(value).__name__}")


def content_md5(data: bytes) -> str:
    # The service expects base64 over the hex digest text, not the raw digest.
    hex_digest = hashlib.md5(data).hexdigest()
    return base64.b64encode(hex_digest.encode("utf-8")).decode("ascii")


def _digest_headers(data: bytes, content_type: str) -> Dict[str, str]:
    return {
        "content-type": content_type,
        "content-length": str(len(data)),
        "content-md5": content_md5(data),
    }


def encode_body(body: RequestBody) -> Optional[EncodedBody]:
    """Encode `body` for the transport, returning `None` when there is nothing to send."""
    if body.kind is BodyKind.ABSENT:
        return None

    if body.kind is BodyKind.BYTES:
        data = body.payload
        return EncodedBody(data=data, headers=_digest_headers(data, OCTET_STREAM))

    if body.kind is BodyKind.TEXT:
        data = body.payload.encode("utf-8")
        return EncodedBody(data=data, headers=_digest_headers(data, OCTET_STREAM))

    if body.kind is BodyKind.STREAM:
        return EncodedBody(data=body.payload, headers={"content-type": OCTET_STREAM})

    try:
        data = json.dumps(body.payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise BodyEncodingError(f"Request body is not JSON serializable: {exc}") from exc
    return EncodedBody(data=data, headers=_digest_headers(data, JSON_CONTENT_TYPE))
