"""
Exception hierarchy for the CVP client.

Every error a caller can see derives from :class:`CvpClientError` so that
``except CvpClientError`` catches anything raised by this package.  The
request executor only absorbs :class:`SessionLoggedOutError` and transport
failures while retry budgets remain; everything else propagates on first
occurrence.
"""

from __future__ import annotations


class CvpClientError(Exception):
    """Base class for all client errors."""


class ConfigurationError(CvpClientError, ValueError):
    """Invalid client setup: empty node list, unknown protocol, ..."""


class LoginError(CvpClientError):
    """Authentication could not be established.

    ``errors`` maps each host that was tried to the exception it raised, when
    the error aggregates several login attempts.
    """

    def __init__(self, msg: str = "Unknown error", errors: dict[str, Exception] | None = None) -> None:
        self.msg = msg
        self.errors = dict(errors or {})
        super().__init__(f"ERROR: {msg}")


class NoSessionError(CvpClientError):
    """A request was attempted before a session was established."""

    def __init__(self, msg: str = "No valid session to a CVP node. Use connect()") -> None:
        super().__init__(msg)


class SessionLoggedOutError(CvpClientError):
    """The server redirected the request to its login page."""


class RequestError(CvpClientError):
    """Transport failure or an HTTP status other than 200."""

    def __init__(self, code: int | None = None, msg: str = "Unknown error") -> None:
        self.code = code
        self.msg = msg
        super().__init__(f"ERROR: {code} - {msg}")


class ApiError(CvpClientError):
    """The server answered 200 with an ``errorCode`` / ``errors`` envelope."""

    def __init__(self, msg: str = "Unknown error", error_code: str | None = None) -> None:
        self.msg = msg
        self.error_code = error_code
        super().__init__(f"ERROR: {msg}")
