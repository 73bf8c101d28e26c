"""
Signed request dispatch for the function compute API.

`Dispatcher.execute` is the single chokepoint every resource call goes through:
it assembles headers, encodes the body, signs the request and performs exactly
one HTTP round trip.
"""
from __future__ import annotations

import logging
import math
import platform
from email.utils import formatdate
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from . import __version__
from .body import as_body, encode_body
from .canonical import compose_string_to_sign
from .errors import ConfigurationError, TransportError
from .models import Credentials, Endpoint, ResponseEnvelope
from .response import interpret_response
from .signer import AUTH_SCHEME, get_signature, sign_string


API_VERSION = "2016-08-15"
DEFAULT_TIMEOUT_MS = 60000
PROXY_PATH_PREFIX = "/proxy/"
SUPPORTED_METHODS = {"GET", "POST", "PUT", "DELETE"}
SECURITY_TOKEN_HEADER = "x-fc-security-token"
ACCOUNT_ID_HEADER = "x-fc-account-id"
_MASKED_HEADERS = {"authorization", SECURITY_TOKEN_HEADER}

QueryValue = Union[str, List[str]]

LOGGER_NAME = "fc.client"


def _user_agent() -> str:
    return (
        f"Python({platform.python_version()}) "
        f"OS({platform.system().lower()}/{platform.machine()}) "
        f"SDK(fc-lambda-client@v{__version__})"
    )


def normalize_query(query: Optional[Mapping[str, Any]]) -> Dict[str, QueryValue]:
    """Drop unset values and stringify the rest so wire and signature agree."""
    normalized: Dict[str, QueryValue] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            normalized[str(key)] = [str(item) for item in value]
        elif isinstance(value, bool):
            normalized[str(key)] = str(value).lower()
        else:
            normalized[str(key)] = str(value)
    return normalized


def _merge_headers(*layers: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    merged: Dict[str, str] = {}
    for layer in layers:
        for key, value in (layer or {}).items():
            if value is None:
                continue
            merged[key.lower()] = str(value)
    return merged


def _masked(headers: Mapping[str, str]) -> Dict[str, str]:
    return {key: ("***" if key in _MASKED_HEADERS else value) for key, value in headers.items()}


class Dispatcher:
    """
    Holds the immutable account settings and sends signed requests.

    Parameters
    ----------
    account_id:
        Account that owns the resources; also selects the endpoint host.
    access_key_id, access_key_secret, security_token:
        Signing credentials. Key ids starting with ``STS`` require a token.
    region:
        Region id, e.g. ``cn-shanghai``.
    secure, internal:
        Use https, and route through the ``-internal`` endpoint.
    endpoint:
        Explicit base URL overriding the derived one.
    headers:
        Extra headers sent with every request.
    timeout:
        Transport timeout in milliseconds.
    session, logger:
        Injected transport and logger; defaults are a fresh `requests.Session`
        and the ``fc.client`` logger.
    """

    def __init__(
        self,
        account_id: str,
        *,
        access_key_id: str,
        access_key_secret: str,
        region: str,
        security_token: Optional[str] = None,
        endpoint: Optional[str] = None,
        secure: bool = False,
        internal: bool = False,
        timeout: Optional[float] = DEFAULT_TIMEOUT_MS,
        headers: Optional[Mapping[str, str]] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.credentials = Credentials(
            access_key_id=access_key_id,
            access_key_secret=access_key_secret,
            security_token=security_token or None,
        )
        self.endpoint = Endpoint(
            account_id=account_id,
            region=region,
            secure=secure,
            internal=internal,
            override=endpoint,
        )
        if timeout is None or not math.isfinite(timeout):
            timeout = DEFAULT_TIMEOUT_MS
        if timeout <= 0:
            raise ConfigurationError("timeout must be a positive number of milliseconds.")

        self.version = API_VERSION
        self.timeout = timeout
        self._default_headers = _merge_headers(headers)
        self._user_agent = _user_agent()
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    get_signature = staticmethod(get_signature)

    @property
    def account_id(self) -> str:
        return self.endpoint.account_id

    # -- Public API -----------------------------------------------------
    def build_headers(self) -> Dict[str, str]:
        headers = {
            "accept": "application/json",
            "date": formatdate(usegmt=True),
            "host": self.endpoint.host,
            "user-agent": self._user_agent,
            ACCOUNT_ID_HEADER: self.endpoint.account_id,
        }
        if self.credentials.security_token:
            headers[SECURITY_TOKEN_HEADER] = self.credentials.security_token
        return headers

    def execute(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
        *,
        raw_buf: bool = False,
    ) -> ResponseEnvelope:
        """
        Send one signed request and return the decoded response.

        Raises `BodyEncodingError`, `TransportError`, `ResponseDecodeError` or
        `ApiError`; nothing is retried.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        signed_path = f"/{self.version}{path}"
        url = f"{self.endpoint.url}{signed_path}"
        params = normalize_query(query)

        request_headers = _merge_headers(self.build_headers(), self._default_headers, headers)
        encoded = encode_body(as_body(body))
        data = None
        if encoded is not None:
            request_headers.update(encoded.headers)
            data = encoded.data

        queries_to_sign = params if path.startswith(PROXY_PATH_PREFIX) else None
        string_to_sign = compose_string_to_sign(method, signed_path, request_headers, queries_to_sign)
        self._logger.debug("string to sign: %r", self._redact(string_to_sign))
        signature = sign_string(string_to_sign, self.credentials.access_key_secret)
        request_headers["authorization"] = f"{AUTH_SCHEME} {self.credentials.access_key_id}:{signature}"

        self._logger.debug("request %s %s params=%s", method, url, params)
        self._logger.debug("request headers: %s", _masked(request_headers))

        try:
            response = self._session.request(
                method,
                url,
                params=params or None,
                data=data,
                headers=request_headers,
                timeout=self.timeout / 1000.0,
            )
        except requests.Timeout as exc:
            raise TransportError(f"{method} {path} timed out after {self.timeout}ms") from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        self._logger.debug("response status: %s", response.status_code)
        self._logger.debug("response headers: %s", dict(response.headers))

        return interpret_response(
            response.status_code,
            response.headers,
            response.content,
            raw_buf=raw_buf,
            method=method,
            path=path,
        )

    def get(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> ResponseEnvelope:
        return self.execute("GET", path, query, None, headers)

    def post(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
        query: Optional[Mapping[str, Any]] = None,
        *,
        raw_buf: bool = False,
    ) -> ResponseEnvelope:
        return self.execute("POST", path, query, body, headers, raw_buf=raw_buf)

    def put(
        self,
        path: str,
        body: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> ResponseEnvelope:
        return self.execute("PUT", path, None, body, headers)

    def delete(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> ResponseEnvelope:
        return self.execute("DELETE", path, query, None, headers)

    # -- Internal helpers -----------------------------------------------
    def _redact(self, text: str) -> str:
        token = self.credentials.security_token
        return text.replace(token, "***") if token else text
