"""
Builds the string-to-sign for a request.

The layout is fixed by the service:

    METHOD\\n
    content-md5\\n
    content-type\\n
    date\\n
    x-fc-* header lines, sorted
    unescaped path
    [\\n sorted query pairs]   (only when queries are supplied)
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import unquote


CANONICAL_HEADER_PREFIX = "x-fc-"
# Reference clients emit this when no date header was set.
MISSING_DATE_PLACEHOLDER = "undefined"


def _lookup(headers: Mapping[str, Any], name: str) -> Optional[Any]:
    if name in headers:
        return headers[name]
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def build_canonical_headers(headers: Mapping[str, Any], prefix: str = CANONICAL_HEADER_PREFIX) -> str:
    selected: List[Tuple[str, Any]] = []
    for key, value in headers.items():
        lower_key = key.lower().strip()
        if lower_key.startswith(prefix):
            selected.append((lower_key, value))

    selected.sort(key=lambda item: item[0])
    return "".join(f"{key}:{value}\n" for key, value in selected)


def build_canonical_query(queries: Mapping[str, Any]) -> str:
    params: List[str] = []
    for key, values in queries.items():
        if isinstance(values, str):
            params.append(f"{key}={values}")
        elif isinstance(values, (list, tuple)):
            params.extend(f"{key}={value}" for value in values)
    params.sort()
    return "\n".join(params)


def compose_string_to_sign(
    method: str,
    path: str,
    headers: Mapping[str, Any],
    queries: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Return the canonical string for `method`/`path` given the headers that will be sent.

    `queries` is only passed for requests whose query participates in the signature;
    an empty mapping still appends the trailing separator.
    """
    content_md5 = _lookup(headers, "content-md5") or ""
    content_type = _lookup(headers, "content-type") or ""
    date = _lookup(headers, "date")
    if date is None:
        date = MISSING_DATE_PLACEHOLDER
    sign_headers = build_canonical_headers(headers)

    path_unescaped = unquote(path)
    canonical = f"{method}\n{content_md5}\n{content_type}\n{date}\n{sign_headers}{path_unescaped}"

    if queries is not None:
        canonical += "\n" + build_canonical_query(queries)

    return canonical
