"""JSON structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from pythonjsonlogger.json import JsonFormatter

# Per-request chatter from the HTTP stack drowns out extraction logs.
_NOISY_LOGGERS = ("httpx", "httpcore")

_FIELD_NAMES = {
    "asctime": "timestamp",
    "levelname": "level",
    "name": "logger",
}


def json_formatter() -> JsonFormatter:
    return JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields=_FIELD_NAMES,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def setup_logging(log_level: str = "INFO", stream: TextIO | None = None) -> None:
    """Send JSON log lines from every logger to *stream* (stdout by default).

    The command line passes stderr so its JSON result on stdout stays
    parseable. Unknown level names fall back to INFO.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(json_formatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
