"""
Signed HTTP client for the function compute API.
"""

__version__ = "0.1.0"

from .body import BodyKind, RequestBody, as_body, encode_body
from .canonical import compose_string_to_sign
from .dispatcher import API_VERSION, Dispatcher
from .errors import (
    ApiError,
    BodyEncodingError,
    ConfigurationError,
    FCError,
    ResponseDecodeError,
    TransportError,
)
from .models import Credentials, Endpoint, ResponseEnvelope
from .resources import FCClient
from .signer import get_signature, sign_string

__all__ = [
    "__version__",
    "API_VERSION",
    "ApiError",
    "BodyEncodingError",
    "BodyKind",
    "ConfigurationError",
    "Credentials",
    "Dispatcher",
    "Endpoint",
    "FCClient",
    "FCError",
    "RequestBody",
    "ResponseDecodeError",
    "ResponseEnvelope",
    "TransportError",
    "as_body",
    "compose_string_to_sign",
    "encode_body",
    "get_signature",
    "sign_string",
]
