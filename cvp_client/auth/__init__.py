"""Authentication submodule – login against a single node."""

from cvp_client.auth.login import login, login_url

__all__ = [
    "login",
    "login_url",
]
