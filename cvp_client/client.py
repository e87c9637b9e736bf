"""
cvp_client.client
=================
Session client for a clustered CVP controller.

Features
--------
* Logs in to the first node of the pool that accepts the credentials.
* Replays the session token and cookies on every request.
* A 302 (session logged out) triggers a re-login and a retry of the same
  call, up to ``NUM_RETRY_REQUESTS`` times.
* A transport failure (timeout, refused or reset connection) fails over to
  another node, giving every node one chance per call.

The client is synchronous and keeps mutable session state without locking:
use one instance per concurrent caller.

Example::

    cvp = CvpClient()
    cvp.connect(["cvp1", "cvp2", "cvp3"], "cvpadmin", "arista123")
    users = cvp.get("/user/getUsers.do",
                    {"queryparam": None, "startIndex": 0, "endIndex": 0})
"""

from __future__ import annotations

import json
from typing import Any, Iterable

import requests

from .auth import login
from .config import (
    DEFAULT_AGENT,
    DEFAULT_PROTOCOL,
    NUM_RETRY_REQUESTS,
    ConnectionConfig,
    Credentials,
)
from .errors import (
    ApiError,
    LoginError,
    NoSessionError,
    RequestError,
    SessionLoggedOutError,
)
from .logging_setup import log
from .nodes import NodePool
from .response import check_response
from .session import CvpSession, build_session
from .utils.url import QueryParams, endpoint_url, request_path

# Errors that make a node unusable for the current login attempt
_LOGIN_ERRORS = (ApiError, LoginError, RequestError, SessionLoggedOutError)


class CvpClient:
    """Establishes and maintains a session with one node of a CVP cluster."""

    def __init__(self, agent: str = DEFAULT_AGENT) -> None:
        self.agent = agent
        self.config: ConnectionConfig | None = None
        self.credentials: Credentials | None = None
        self.node_pool: NodePool | None = None
        self.session: CvpSession | None = None
        self.http: requests.Session | None = None
        self.error_msg = ""
        log.debug("CvpClient initialized")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[str, ...]:
        return self.node_pool.nodes if self.node_pool else ()

    @property
    def protocol(self) -> str | None:
        return self.config.protocol if self.config else None

    @property
    def port(self) -> int | None:
        return self.config.port if self.config else None

    @property
    def connect_timeout(self) -> float | None:
        return self.config.connect_timeout if self.config else None

    def connect(
        self,
        nodes: "Iterable[str] | str",
        username: str,
        password: str,
        connect_timeout: float = 10,
        protocol: str = DEFAULT_PROTOCOL,
        port: int | None = None,
        request_timeout: float = 30,
        verify_ssl: bool = True,
    ) -> None:
        """
        Log in to the first node in *nodes* that accepts the credentials.

        Raises:
            ConfigurationError: empty node list or unknown protocol.
            LoginError: no node accepted the login; ``errors`` maps each host
                to its failure.
        """
        self.session = None
        self.node_pool = NodePool(nodes)
        self.config = ConnectionConfig(
            protocol=protocol,
            port=port,
            connect_timeout=connect_timeout,
            request_timeout=request_timeout,
            verify_ssl=verify_ssl,
            agent=self.agent,
        )
        self.credentials = Credentials(username, password)
        if self.http is not None:
            self.http.close()
        self.http = build_session(verify_ssl=verify_ssl, agent=self.agent)

        log.info("Connecting to %s as %s", list(self.node_pool), username)
        errors = self._create_session(exclude_current=False)
        if self.session is None:
            raise LoginError(self.error_msg, errors=errors)

    def reset_session(self, exclude_current: bool = False) -> bool:
        """
        Log in again, trying candidates from the node pool in order.

        With *exclude_current* the node the current session is bound to is
        skipped (when there is another one).  Returns ``True`` when a new
        session was established; on failure the session is cleared and
        ``False`` is returned.
        """
        if self.node_pool is None:
            return False
        self._create_session(exclude_current=exclude_current)
        return self.session is not None

    def get(self, endpoint: str, query: QueryParams = None,
            timeout: float | None = None) -> Any:
        """GET *endpoint* (relative to ``/web``) and return the parsed JSON body."""
        return self._make_request("GET", endpoint, query=query, timeout=timeout)

    def post(self, endpoint: str, query: QueryParams = None, body: Any = None,
             timeout: float | None = None) -> Any:
        """POST *body* to *endpoint* and return the parsed JSON body."""
        return self._make_request("POST", endpoint, query=query, body=body,
                                  timeout=timeout)

    def close(self) -> None:
        if self.http is not None:
            self.http.close()
            self.http = None
        self.session = None

    def __enter__(self) -> "CvpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _create_session(self, exclude_current: bool) -> dict[str, Exception]:
        """Try each candidate node until one login succeeds."""
        current = self.session.node if self.session else None
        candidates = self.node_pool.next_candidates(current, exclude_current)

        self.session = None
        errors: dict[str, Exception] = {}
        lines: list[str] = []
        for host in candidates:
            try:
                self.session = login(self.http, host, self.credentials, self.config)
            except _LOGIN_ERRORS as exc:
                log.error("Login to %s failed: %s", host, exc)
                errors[host] = exc
                lines.append(f"{host}: {exc}\n")
                continue
            break
        if self.session is None:
            self.error_msg = "Unable to log in to any node:\n" + "".join(lines)
        else:
            self.error_msg = ""
        return errors

    @staticmethod
    def _encode_body(body: Any) -> "str | bytes | None":
        if body is None or isinstance(body, (str, bytes)):
            return body
        return json.dumps(body)

    def _send(self, method: str, url: str, body, timeout: float | None) -> requests.Response:
        headers = self.session.headers()
        return self.http.request(
            method,
            url,
            data=body,
            headers=headers,
            timeout=self.config.timeout(timeout),
            allow_redirects=False,
        )

    def _make_request(self, method: str, endpoint: str, query: QueryParams = None,
                      body: Any = None, timeout: float | None = None) -> Any:
        """
        Send one logical request, re-logging in and failing over as needed.

        Transport failures spend the node budget (one try per node) and move
        the session to another node; 302 responses spend the session budget
        and re-login.  ``ApiError`` and ``RequestError`` from the response
        propagate immediately.
        """
        log.debug("entering _make_request %s endpoint: %s", method, endpoint)
        if self.session is None:
            raise NoSessionError()

        data = self._encode_body(body)
        retry_count = NUM_RETRY_REQUESTS
        node_count = len(self.node_pool)

        while True:
            url = endpoint_url(self.session.base_url, endpoint, query)
            prefix = f"{method} {request_path(url)}"
            try:
                log.debug("_make_request: %s", prefix)
                resp = self._send(method, url, data, timeout)
            except requests.RequestException as exc:
                log.error("Request failed: %s", exc)
                node_count -= 1
                if node_count <= 0:
                    raise RequestError(None, f"{prefix}: {exc}") from exc
                log.warning("Failing over from %s after transport error", self.session.node)
                if not self.reset_session(exclude_current=True):
                    raise RequestError(None, f"{prefix}: {exc}. {self.error_msg}") from exc
                retry_count = NUM_RETRY_REQUESTS
                continue

            log.debug("Request succeeded. Checking response...")
            try:
                result = check_response(resp, prefix)
            except SessionLoggedOutError as exc:
                log.debug("Session logged out: %s", exc)
                retry_count -= 1
                if retry_count <= 0:
                    msg = ("Session logged out. Failed to re-login. "
                           f"No more retries: {exc}")
                    log.error(msg)
                    raise SessionLoggedOutError(msg) from exc
                log.debug("Session logged out... resetting and retrying %s", exc)
                if not self.reset_session():
                    log.error("Re-login failed: %s", self.error_msg)
                    raise
                continue

            log.debug("_make_request completed.")
            return result
