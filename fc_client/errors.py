"""
Exception hierarchy raised by the function compute client.
"""
from __future__ import annotations

from typing import Optional


class FCError(RuntimeError):
    """Base error raised by the function compute client."""


class ConfigurationError(FCError):
    """Raised when mandatory client configuration is missing or invalid."""


class BodyEncodingError(FCError):
    """Raised when a request body cannot be encoded for the wire."""


class TransportError(FCError):
    """Raised when the HTTP round trip fails or times out."""


class ResponseDecodeError(FCError):
    """Raised when a response body cannot be decoded."""


class ApiError(FCError):
    """
    Raised when the service answers with a non-2xx status.

    The service-declared fields are exposed as attributes so callers can branch
    on `error_code` without parsing the message.
    """

    def __init__(
        self,
        status: int,
        *,
        error_code: Optional[str] = None,
        message: Optional[str] = None,
        request_id: Optional[str] = None,
        method: str = "",
        path: str = "",
    ) -> None:
        self.status = status
        self.error_code = error_code
        self.message = message
        self.request_id = request_id
        self.method = method
        self.path = path
        super().__init__(
            f"{method} {path} failed with {status}. requestid: {request_id}, message: {message}."
        )

    @property
    def name(self) -> str:
        return f"FC{self.error_code or ''}Error"
