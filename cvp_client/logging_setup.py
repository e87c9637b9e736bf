"""Logging configuration for the CVP client."""

import logging
import logging.handlers
from pathlib import Path

import colorlog

log = logging.getLogger("cvp-client")

_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
_SYSLOG_FMT = "cvp-client[%(process)d]: [%(levelname)s] %(message)s"


def _syslog_address() -> "str | tuple[str, int]":
    for path in ("/dev/log", "/var/run/syslog"):
        if Path(path).exists():
            return path
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


def setup_logging(debug: bool = False, log_file: "str | None" = None,
                  syslog: bool = False) -> None:
    """Configure the package logger.

    Console output always goes through ``colorlog``.  *log_file* adds a
    plain-text file handler that captures DEBUG regardless of *debug*;
    *syslog* adds a handler for the local syslog daemon.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(logging.DEBUG if log_file else level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.info("Logging to file: %s", log_path.resolve())

    if syslog:
        sh = logging.handlers.SysLogHandler(address=_syslog_address())
        sh.setLevel(level)
        sh.setFormatter(logging.Formatter(_SYSLOG_FMT))
        log.addHandler(sh)
