"""
Response classification.

Turns a raw ``requests.Response`` into a parsed JSON body or one of the
client's error kinds.  Used unchanged for the login POST and for ordinary
requests:

* HTTP 302                         -> :class:`SessionLoggedOutError`
* HTTP != 200                      -> :class:`RequestError`
* HTTP 200 with an error envelope  -> :class:`ApiError`
* HTTP 200 otherwise               -> parsed JSON (``None`` for an empty body)
"""

from __future__ import annotations

from typing import Any

import requests
from bs4 import BeautifulSoup

from .errors import ApiError, RequestError, SessionLoggedOutError
from .logging_setup import log


def html_title(body: str) -> str | None:
    """Return the text of the first ``<h1>`` in an HTML error page."""
    if not body or "<h1" not in body.lower():
        return None
    h1 = BeautifulSoup(body, "lxml").find("h1")
    if h1 is None:
        return None
    title = h1.get_text(strip=True)
    return title or None


def envelope_message(body: dict) -> str:
    """
    Build a readable message from an error envelope.

    ``{"errorCode": "132718", "errorMessage": "Invalid input parameters."}``
    gives ``errorCode: 132718: Invalid input parameters.``; an ``errors``
    list is joined with newlines.
    """
    if "errorMessage" in body:
        return f"errorCode: {body.get('errorCode')}: {body['errorMessage']}"
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return "\n".join(str(e) for e in errors)
    return f"errorCode: {body.get('errorCode')}"


def _check_status(resp: requests.Response, prefix: str) -> None:
    if resp.status_code == 302:
        msg = f"{prefix} Notice302: session logged out"
        log.debug(msg)
        raise SessionLoggedOutError(msg)

    if resp.status_code != 200:
        msg = f"{prefix}: Request Error"
        if resp.status_code == 400:
            title = html_title(resp.text)
            msg = f"{prefix}: {title}" if title else f"{prefix}: {resp.text}"
        if resp.reason:
            msg += f" Reason: {resp.reason}"
        log.error("ErrorCode: %s - %s", resp.status_code, msg)
        raise RequestError(resp.status_code, msg)


def check_response(resp: requests.Response, prefix: str = "") -> Any:
    """
    Classify *resp* and return its parsed JSON body.

    *prefix* (usually ``"<METHOD> <path>"``) is prepended to every error
    message.

    Raises:
        SessionLoggedOutError: the server redirected to its login page.
        RequestError: any other non-200 status, or a 200 body that is not JSON.
        ApiError: 200 with an ``errorCode`` / ``errors`` envelope.
    """
    log.debug("response_code: %s", resp.status_code)
    log.debug("response_headers: %s", dict(resp.headers))
    log.debug("response_body: %s", resp.text)
    if resp.reason:
        log.debug("response_reason: %s", resp.reason)

    _check_status(resp, prefix)

    text = resp.text
    if not text or not text.strip():
        return None

    try:
        body = resp.json()
    except ValueError as exc:
        if "errorCode" in text:
            msg = f"{prefix}: Request Error: {text}"
            log.error(msg)
            raise ApiError(msg) from exc
        msg = f"{prefix}: Invalid JSON in response body"
        log.error(msg)
        raise RequestError(resp.status_code, msg) from exc

    if isinstance(body, dict) and "errorCode" in body:
        log.debug("Body has an errorCode")
        err_msg = envelope_message(body)
        msg = f"{prefix}: Request Error: {err_msg}"
        log.error(msg)
        code = body.get("errorCode")
        raise ApiError(msg, error_code=None if code is None else str(code))

    return body
