"""
Command-line interface for the CVP client.

Connects to the cluster, issues a single GET or POST and prints the JSON
result.
"""

import argparse
import json
import logging
import sys

import urllib3

from cvp_client.client import CvpClient
from cvp_client.config import (
    CONNECT_TIMEOUT,
    DEFAULT_NODES,
    DEFAULT_PASSWORD,
    DEFAULT_PORTS,
    DEFAULT_PROTOCOL,
    DEFAULT_USER,
    REQUEST_TIMEOUT,
)
from cvp_client.errors import CvpClientError
from cvp_client.logging_setup import log, setup_logging


def _query_pair(text: str) -> "tuple[str, str | None]":
    """``key=value`` → (key, value); a bare ``key`` → (key, None)."""
    if "=" in text:
        key, value = text.split("=", 1)
        return key, value
    return text, None


def _node_list(text: str) -> "list[str]":
    return [n.strip() for n in text.split(",") if n.strip()]


def parse_args(argv: "list[str] | None" = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Issue a single request against a CVP cluster, "
                    "failing over between nodes as needed.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Nodes, user and password can also be provided via the CVP_NODES\n"
            "(comma separated), CVP_USER and CVP_PASSWORD env vars.\n"
            "If the password is not supplied and not in the environment, "
            "you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--nodes", type=_node_list, default=DEFAULT_NODES,
        help="Comma-separated CVP node hostnames or IPs, in failover order",
    )
    parser.add_argument(
        "--user", default=DEFAULT_USER,
        help=f"CVP username (default: {DEFAULT_USER})",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="CVP password (overrides CVP_PASSWORD env var)",
    )
    parser.add_argument(
        "--protocol", choices=sorted(DEFAULT_PORTS), default=DEFAULT_PROTOCOL,
        help=f"Protocol (default: {DEFAULT_PROTOCOL})",
    )
    parser.add_argument(
        "--port", type=int, default=None,
        help="TCP port when not the protocol's standard port",
    )
    parser.add_argument(
        "--connect-timeout", type=float, default=CONNECT_TIMEOUT,
        help=f"Seconds to wait for a connection (default: {CONNECT_TIMEOUT})",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"Seconds to wait for a response (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification (use for self-signed certs)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Also write full debug logs to this file",
    )
    parser.add_argument(
        "--syslog", action="store_true",
        help="Also log to the local syslog daemon",
    )
    parser.add_argument("method", choices=["get", "post"], help="HTTP method")
    parser.add_argument("endpoint", help="Endpoint below /web, e.g. /cvpInfo/getCvpInfo.do")
    parser.add_argument(
        "-q", "--query", dest="query", action="append", type=_query_pair, default=[],
        metavar="KEY[=VALUE]",
        help="Query parameter (repeatable); a bare KEY is sent without a value",
    )
    parser.add_argument(
        "--body", default=None,
        help="JSON request body for POST",
    )
    return parser.parse_args(argv)


def main(argv: "list[str] | None" = None) -> None:
    """
    Main entry point for the CLI.
    """
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file, syslog=args.syslog)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    if not args.nodes:
        log.error("No CVP nodes given (use --nodes or CVP_NODES)")
        sys.exit(2)

    if args.body is not None:
        try:
            json.loads(args.body)
        except ValueError as exc:
            log.error("--body is not valid JSON: %s", exc)
            sys.exit(2)

    if not args.password:
        import getpass
        args.password = getpass.getpass("CVP password: ")

    with CvpClient() as cvp:
        try:
            cvp.connect(
                args.nodes,
                args.user,
                args.password,
                connect_timeout=args.connect_timeout,
                protocol=args.protocol,
                port=args.port,
                request_timeout=args.timeout,
                verify_ssl=args.verify_ssl,
            )
            if args.method == "get":
                result = cvp.get(args.endpoint, args.query or None)
            else:
                result = cvp.post(args.endpoint, args.query or None, args.body)
        except CvpClientError as exc:
            log.error("%s", exc)
            sys.exit(1)

    print(json.dumps(result, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
