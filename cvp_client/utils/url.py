"""
URL helpers: endpoint joining and query-string encoding.
"""

from __future__ import annotations

import urllib.parse
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Tuple, Union


QueryParams = Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]]


def _pairs(params) -> list[tuple[str, Any]]:
    if params is None:
        return []
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: QueryParams) -> str:
    """
    Form-encode *params* preserving their order.

    Keys whose value is ``None`` are kept as bare keys (``?queryparam``), so
    ``{"queryparam": None, "startIndex": 0}`` encodes to
    ``queryparam&startIndex=0``.  List values repeat the key.
    """
    parts: list[str] = []
    for key, value in _pairs(params):
        name = urllib.parse.quote_plus(_to_text(key))
        if value is None:
            parts.append(name)
        elif isinstance(value, (list, tuple)):
            for item in value:
                parts.append(f"{name}={urllib.parse.quote_plus(_to_text(item))}")
        else:
            parts.append(f"{name}={urllib.parse.quote_plus(_to_text(value))}")
    return "&".join(parts)


def endpoint_url(base_url: str, endpoint: str, params: QueryParams = None) -> str:
    """
    Join *endpoint* (relative to ``/web``) onto *base_url* and append the
    encoded query string, if any.
    """
    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint
    url = base_url.rstrip("/") + endpoint
    query = encode_query(params)
    if query:
        sep = "&" if "?" in url else "?"
        url = f"{url}{sep}{query}"
    return url


def request_path(url: str) -> str:
    """Return the path+query part of *url* (used as log/error context)."""
    parsed = urllib.parse.urlparse(url)
    return parsed.path + (f"?{parsed.query}" if parsed.query else "")
