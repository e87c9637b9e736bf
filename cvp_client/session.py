"""
HTTP session management for the CVP client.

Two kinds of "session" live here:

* the transport – a ``requests.Session`` built by :func:`build_session`,
  reused for every node so keep-alive connections are pooled;
* :class:`CvpSession` – the authenticated state returned by a login (token,
  cookies, bound node, URL prefix).  It is immutable and is swapped as a
  whole when the client re-authenticates.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import __version__
from .config import DEFAULT_AGENT, JSON_HEADERS, SESSION_HEADER


def user_agent(agent: str = DEFAULT_AGENT) -> str:
    """Return ``<agent>/<platform>/cvp-client-<version>``."""
    return f"{agent}/{sys.platform}/cvp-client-{__version__}"


def build_session(verify_ssl: bool = True, agent: str = DEFAULT_AGENT) -> requests.Session:
    """Return a requests.Session with JSON headers and keep-alive pre-configured."""
    session = requests.Session()
    # No adapter-level retries or redirects; a 302 must reach the response
    # classifier.
    retry = Retry(total=0, redirect=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update(JSON_HEADERS)
    session.headers.update({
        "User-Agent": user_agent(agent),
        "Connection": "keep-alive",
    })
    return session


@dataclass(frozen=True)
class CvpSession:
    """Authenticated context bound to exactly one node."""

    token: str
    node: str
    base_url: str
    cookies: tuple[tuple[str, str, str], ...] = field(default=())

    @classmethod
    def from_response(cls, resp: requests.Response, token: str, node: str,
                      base_url: str) -> "CvpSession":
        """Build a session from a login response's ``Set-Cookie`` headers."""
        cookies = tuple((c.name, c.value or "", c.path or "/") for c in resp.cookies)
        return cls(token=token, node=node, base_url=base_url, cookies=cookies)

    def cookie_header(self) -> str:
        """Reconstruct the ``Cookie`` request header from the stored cookies."""
        return "; ".join(f"{name}={value}" for name, value, _path in self.cookies)

    def headers(self) -> dict[str, str]:
        headers = {SESSION_HEADER: self.token}
        if self.cookies:
            headers["Cookie"] = self.cookie_header()
        return headers
