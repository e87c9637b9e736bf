"""Configuration constants and connection settings for the CVP client."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from .errors import ConfigurationError

# Node list / credentials can also be supplied via CVP_NODES / CVP_USER /
# CVP_PASSWORD env vars (CVP_NODES is comma separated)
DEFAULT_NODES = [n.strip() for n in os.environ.get("CVP_NODES", "").split(",") if n.strip()]
DEFAULT_USER = os.environ.get("CVP_USER", "cvpadmin")
DEFAULT_PASSWORD = os.environ.get("CVP_PASSWORD", "")

DEFAULT_PROTOCOL = "https"
DEFAULT_PORTS = {"http": 80, "https": 443}
DEFAULT_AGENT = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "python"

URL_PREFIX_PATH = "/web"
LOGIN_PATH = "/login/authenticate.do"

SESSION_HEADER = "APP_SESSION_ID"     # replayed on every authenticated request
SESSION_TOKEN_FIELD = "sessionId"     # token field in the login response body

CONNECT_TIMEOUT    = 10    # seconds to establish the TCP/TLS connection
REQUEST_TIMEOUT    = 30    # seconds to wait for a response
NUM_RETRY_REQUESTS = 3     # re-login retries per logical request

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


@dataclass(frozen=True)
class Credentials:
    """Username/password pair used for every login attempt."""

    username: str
    password: str = field(repr=False)

    def as_login_body(self) -> dict[str, str]:
        return {"userId": self.username, "password": self.password}


@dataclass(frozen=True)
class ConnectionConfig:
    """Transport settings shared by every node in the pool.

    ``port`` is derived from ``protocol`` when not given explicitly; an
    unknown protocol raises :class:`ConfigurationError`.
    """

    protocol: str = DEFAULT_PROTOCOL
    port: int | None = None
    connect_timeout: float = CONNECT_TIMEOUT
    request_timeout: float = REQUEST_TIMEOUT
    verify_ssl: bool = True
    agent: str = DEFAULT_AGENT

    def __post_init__(self) -> None:
        if self.protocol not in DEFAULT_PORTS:
            raise ConfigurationError(f"No default port for protocol: {self.protocol}")
        if self.port is None:
            object.__setattr__(self, "port", DEFAULT_PORTS[self.protocol])

    def url_prefix(self, host: str) -> str:
        """Return ``protocol://host:port/web`` for *host*."""
        return f"{self.protocol}://{host}:{self.port}{URL_PREFIX_PATH}"

    def timeout(self, request_timeout: float | None = None) -> tuple[float, float]:
        """(connect, read) timeout tuple in the form requests expects."""
        read = self.request_timeout if request_timeout is None else request_timeout
        return (self.connect_timeout, read)
