"""
cvp_client
==========
Resilient session client for a clustered CVP management controller.

Package structure
-----------------
cvp_client/
├── __init__.py       – package init and public API
├── config.py         – constants, Credentials and ConnectionConfig
├── errors.py         – exception hierarchy
├── logging_setup.py  – colorlog console / file / syslog logging
├── nodes.py          – ordered node pool used for login and failover
├── session.py        – requests.Session factory and CvpSession state
├── response.py       – response classification (302 / non-200 / error envelope)
├── client.py         – CvpClient: connect, re-login and failover
├── api.py            – endpoint convenience wrappers (CvpApi)
├── cli.py            – argparse CLI (``python -m cvp_client``)
├── auth/             – login against a single node
└── utils/            – URL and query-string helpers

Quick start
-----------
    from cvp_client import CvpClient

    cvp = CvpClient()
    cvp.connect(["cvp1", "cvp2", "cvp3"], "cvpadmin", "arista123")
    info = cvp.get("/cvpInfo/getCvpInfo.do")
"""

__version__ = "1.0.0"

from .client import CvpClient
from .api import CvpApi
from .errors import (
    ApiError,
    ConfigurationError,
    CvpClientError,
    LoginError,
    NoSessionError,
    RequestError,
    SessionLoggedOutError,
)
from .nodes import NodePool

__all__ = [
    "CvpClient",
    "CvpApi",
    "NodePool",
    "CvpClientError",
    "ConfigurationError",
    "LoginError",
    "NoSessionError",
    "SessionLoggedOutError",
    "RequestError",
    "ApiError",
]
