"""Login against a single CVP node."""

from __future__ import annotations

import requests

from ..config import (
    LOGIN_PATH,
    SESSION_TOKEN_FIELD,
    ConnectionConfig,
    Credentials,
)
from ..errors import LoginError, RequestError
from ..logging_setup import log
from ..response import check_response
from ..session import CvpSession


def login_url(host: str, config: ConnectionConfig) -> str:
    return config.url_prefix(host) + LOGIN_PATH


def login(session: requests.Session, host: str, credentials: Credentials,
          config: ConnectionConfig) -> CvpSession:
    """
    Authenticate against *host* and return the new :class:`CvpSession`.

    POST /web/login/authenticate.do  {"userId": ..., "password": ...}

    The transport's cookie jar is cleared first so no cookie from an earlier
    session is sent, and the returned session carries only the cookies set
    by this response.  Never retries; failover is the caller's job.

    Raises:
        LoginError: transport failure, HTTP 400, or a 200 without a token.
        RequestError: any other non-200 status.
        SessionLoggedOutError: the login POST itself was redirected.
        ApiError: the server rejected the credentials with an error envelope.
    """
    url = login_url(host, config)
    session.cookies.clear()

    log.debug("Sending login POST to %s as %s", url, credentials.username)
    try:
        resp = session.post(
            url,
            json=credentials.as_login_body(),
            timeout=config.timeout(),
            allow_redirects=False,
        )
    except requests.RequestException as exc:
        log.error("Login failed: %s", exc)
        raise LoginError(str(exc)) from exc
    log.debug("Sent login POST")

    try:
        body = check_response(resp, "Authenticate:")
    except RequestError as exc:
        if exc.code == 400:
            raise LoginError(exc.msg) from exc
        raise
    log.debug("login checked response")

    token = body.get(SESSION_TOKEN_FIELD) if isinstance(body, dict) else None
    if not token:
        msg = f"Authenticate: no {SESSION_TOKEN_FIELD} in login response from {host}"
        log.error(msg)
        raise LoginError(msg)

    cvp_session = CvpSession.from_response(
        resp, token=str(token), node=host, base_url=config.url_prefix(host)
    )
    log.info(
        "Login successful on %s. Active cookies: %s",
        host, [name for name, _value, _path in cvp_session.cookies],
    )
    return cvp_session
